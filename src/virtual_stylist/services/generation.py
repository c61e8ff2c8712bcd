"""Fan-out of outfit generation across the fixed styles."""

import asyncio
import logging
from dataclasses import dataclass, field
from uuid import uuid4

from virtual_stylist.domain.errors import (
    EditSessionOpenError,
    GenerationInProgressError,
    InvalidSourceImageError,
    NoSourceImageError,
)
from virtual_stylist.domain.images import ImageEmpty, ImageRefusal, ImageSuccess
from virtual_stylist.domain.outfits import (
    STYLES,
    OutfitRecord,
    OutfitStatus,
    SourceItem,
    Style,
)
from virtual_stylist.services.images import (
    SUPPORTED_MIME_TYPES,
    ImageService,
    detect_mime_type,
)
from virtual_stylist.services.state import StylistState

logger = logging.getLogger(__name__)

GENERATE_FAILED_MESSAGE = "Failed to generate outfit. Try again."


@dataclass
class GenerationService:
    """Runs one independent generation task per style.

    Each task is tagged with the uploaded item it was started for. When the
    item is replaced or cleared before a task finishes, that task's result is
    dropped instead of overwriting the newer outfit.
    """

    state: StylistState
    image_service: ImageService
    _tasks: set[asyncio.Task[None]] = field(default_factory=set, init=False, repr=False)

    def generate_all(self, image: bytes, mime_type: str | None = None) -> SourceItem:
        """Store a new uploaded item and start generating every style.

        Must be called from a running event loop. All records are Loading
        when this returns; results land as each task completes.
        """
        source = SourceItem(
            id=uuid4(), image=image, mime_type=_resolve_mime_type(image, mime_type)
        )
        self.state.replace_source(source)
        for style in STYLES:
            self._mark_loading(style)
        for style in STYLES:
            self._spawn(source, style)
        logger.info("Started outfit generation for item %s", source.id)
        return source

    async def generate_one(
        self, source: SourceItem, style: Style
    ) -> OutfitRecord | None:
        """Generate a single style and commit the outcome to the registry."""
        if source.id != self.state.source_id:
            logger.warning(
                "Skipping %s outfit for replaced item %s", style.value, source.id
            )
            return None
        self._mark_loading(style)
        try:
            result = await self.image_service.style_generate(
                source.image, source.mime_type, style
            )
        except Exception:
            logger.exception("Failed to generate %s outfit", style.value)
            result = ImageEmpty()

        if source.id != self.state.source_id:
            logger.warning(
                "Discarding %s outfit for replaced item %s", style.value, source.id
            )
            return None

        current = self.state.registry.get(style)
        if isinstance(result, ImageSuccess):
            record = current.ready(result.image)
        elif isinstance(result, ImageRefusal) and result.explanation.strip():
            logger.warning("%s outfit refused: %s", style.value, result.explanation)
            record = current.failed(result.explanation)
        else:
            logger.warning("%s outfit came back without an image", style.value)
            record = current.failed(GENERATE_FAILED_MESSAGE)
        self.state.registry.set(style, record)
        return record

    def retry(self, style: Style) -> None:
        """Regenerate a single style from the current uploaded item.

        Rejected while that style is still generating or is open for editing,
        so at most one writer touches a record at a time.
        """
        source = self.state.source
        if source is None:
            raise NoSourceImageError("Upload an item before retrying")
        if self.state.registry.get(style).status is OutfitStatus.LOADING:
            raise GenerationInProgressError(
                f"{style.value} outfit is still generating"
            )
        session = self.state.edit_session
        if session is not None and session.style is style:
            raise EditSessionOpenError(f"{style.value} outfit is being edited")
        self._mark_loading(style)
        self._spawn(source, style)
        logger.info("Retrying %s outfit for item %s", style.value, source.id)

    def clear_source(self) -> None:
        """Forget the uploaded item and reset every outfit."""
        self.state.replace_source(None)
        logger.info("Cleared uploaded item")

    async def wait_idle(self) -> None:
        """Wait until no generation task is in flight."""
        while self._tasks:
            await asyncio.gather(*self._tasks)

    def _mark_loading(self, style: Style) -> None:
        self.state.registry.set(style, self.state.registry.get(style).loading())

    def _spawn(self, source: SourceItem, style: Style) -> None:
        task = asyncio.create_task(
            self.generate_one(source, style),
            name=f"generate-{style.slug}-{source.id}",
        )
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)


def _resolve_mime_type(image: bytes, mime_type: str | None) -> str:
    """Return the upload's MIME type as sniffed from its bytes.

    The declared content type is only used in the error message; the bytes
    must be a format the image model accepts.
    """
    if not image:
        raise InvalidSourceImageError("Uploaded image is empty")
    detected = detect_mime_type(image)
    if detected not in SUPPORTED_MIME_TYPES:
        raise InvalidSourceImageError(
            f"Unsupported upload type: {detected or mime_type or 'unknown'}"
        )
    if mime_type and mime_type != detected:
        logger.info("Upload labeled %s looks like %s", mime_type, detected)
    return detected
