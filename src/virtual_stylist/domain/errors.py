"""Errors raised when an operation's preconditions are not met."""


class StylistError(Exception):
    """Base class for virtual stylist errors."""


class InvalidSourceImageError(StylistError, ValueError):
    """Uploaded payload is not a usable image."""


class NoSourceImageError(StylistError):
    """Operation needs an uploaded item but none is present."""


class RecordNotReadyError(StylistError):
    """Outfit has no finished image to work with."""


class NoEditSessionError(StylistError):
    """No edit session is open."""


class UnknownPresetError(StylistError, LookupError):
    """Color preset name is not recognized."""


class GenerationInProgressError(StylistError):
    """Outfit is already being generated."""


class EditSessionOpenError(StylistError):
    """Outfit is bound to an open edit session."""
