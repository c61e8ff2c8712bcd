"""Edit session state machine for refining one outfit."""

import logging
from dataclasses import dataclass
from uuid import UUID

from virtual_stylist.domain.edits import EditSession, find_preset
from virtual_stylist.domain.errors import (
    NoEditSessionError,
    RecordNotReadyError,
    UnknownPresetError,
)
from virtual_stylist.domain.images import ImageEmpty, ImageRefusal, ImageSuccess
from virtual_stylist.domain.outfits import OutfitStatus, Style
from virtual_stylist.services.images import ImageService
from virtual_stylist.services.state import StylistState

logger = logging.getLogger(__name__)

EDIT_FAILED_MESSAGE = "Failed to edit image. Please try again."
EDIT_NOT_SAVED_MESSAGE = "The outfit changed while editing. The edit was not saved."


@dataclass(frozen=True)
class ImageDownload:
    """Image bytes with the filename offered to the user."""

    filename: str
    content: bytes
    media_type: str = "image/png"


@dataclass
class EditService:
    """Applies sequential edit instructions to a selected outfit."""

    state: StylistState
    image_service: ImageService

    @property
    def session(self) -> EditSession | None:
        return self.state.edit_session

    def open(self, style: Style) -> EditSession:
        """Start editing a finished outfit, replacing any open session."""
        record = self.state.registry.get(style)
        if record.status is not OutfitStatus.READY or record.image is None:
            raise RecordNotReadyError(f"{style.value} outfit is not ready")
        session = EditSession(style=style, image=record.image)
        self.state.edit_session = session
        return session

    def set_instruction(self, text: str) -> EditSession:
        session = self._require_session()
        session.instruction = text
        return session

    def apply_preset(self, name: str) -> EditSession:
        """Fill the instruction with a color preset's phrase."""
        preset = find_preset(name)
        if preset is None:
            raise UnknownPresetError(f"Unknown color preset: {name}")
        return self.set_instruction(preset.instruction)

    async def apply(self) -> EditSession:
        """Send the pending instruction to the image model.

        Blank instructions and calls made while an edit is running are
        ignored. On success the new image replaces both the working copy and
        the outfit record; on failure only the session error changes.
        """
        session = self._require_session()
        if session.processing or not session.instruction.strip() or not session.image:
            return session

        session.processing = True
        session.error = None
        source_id = self.state.source_id
        try:
            result = await self.image_service.edit(
                session.image, session.mime_type, session.instruction
            )
        except Exception:
            logger.exception("Failed to edit %s outfit", session.style.value)
            result = ImageEmpty()

        if isinstance(result, ImageSuccess):
            if self._commit(session.style, result.image, source_id):
                session.image = result.image
                session.mime_type = result.mime_type
            else:
                session.error = EDIT_NOT_SAVED_MESSAGE
        elif isinstance(result, ImageRefusal) and result.explanation.strip():
            logger.warning(
                "%s edit refused: %s", session.style.value, result.explanation
            )
            session.error = result.explanation
        else:
            session.error = EDIT_FAILED_MESSAGE
        session.processing = False
        session.instruction = ""
        return session

    def close(self) -> None:
        self.state.edit_session = None

    def download(self) -> ImageDownload:
        """Return the image currently shown in the session."""
        session = self._require_session()
        return ImageDownload(
            filename=download_filename(session.style),
            content=session.image,
            media_type=session.mime_type,
        )

    def _commit(self, style: Style, image: bytes, source_id: UUID | None) -> bool:
        """Write an edited image back unless the outfit moved on meanwhile."""
        if source_id is None or source_id != self.state.source_id:
            logger.warning(
                "Discarding %s edit for replaced item %s", style.value, source_id
            )
            return False
        record = self.state.registry.get(style)
        if record.status is OutfitStatus.LOADING:
            logger.warning("Discarding %s edit while it regenerates", style.value)
            return False
        self.state.registry.set(style, record.ready(image))
        return True

    def _require_session(self) -> EditSession:
        if self.state.edit_session is None:
            raise NoEditSessionError("No outfit is being edited")
        return self.state.edit_session


def download_filename(style: Style) -> str:
    """Filename used when exporting an outfit image."""
    return f"virtual-stylist-{style.slug}.png"
