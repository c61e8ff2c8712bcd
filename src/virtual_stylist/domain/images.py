"""Result types returned by the image capability."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageSuccess:
    """Capability produced an image."""

    image: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class ImageRefusal:
    """Capability declined and explained why."""

    explanation: str


@dataclass(frozen=True)
class ImageEmpty:
    """Capability returned neither an image nor an explanation."""


ImageResult = ImageSuccess | ImageRefusal | ImageEmpty
