"""Domain models for generated outfits."""

from dataclasses import dataclass, replace
from enum import Enum
from uuid import UUID


class Style(str, Enum):
    """Occasion an outfit is generated for."""

    CASUAL = "Casual"
    BUSINESS = "Business"
    NIGHT_OUT = "Night Out"

    @property
    def slug(self) -> str:
        """Lowercase, dash-separated name used in URLs and filenames."""
        return self.value.lower().replace(" ", "-")

    @classmethod
    def from_slug(cls, slug: str) -> "Style":
        """Resolve a style from its slug or display name."""
        normalized = slug.strip().lower().replace("_", "-").replace(" ", "-")
        for style in cls:
            if style.slug == normalized:
                return style
        raise ValueError(f"Unknown style: {slug}")


STYLES: tuple[Style, ...] = (Style.CASUAL, Style.BUSINESS, Style.NIGHT_OUT)


class OutfitStatus(str, Enum):
    """Lifecycle of a single style's generation."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"


@dataclass(frozen=True)
class OutfitRecord:
    """Generation and edit state for one style."""

    id: str
    style: Style
    image: bytes | None = None
    status: OutfitStatus = OutfitStatus.IDLE
    error: str | None = None

    def loading(self) -> "OutfitRecord":
        return replace(self, status=OutfitStatus.LOADING, error=None)

    def ready(self, image: bytes) -> "OutfitRecord":
        return replace(self, image=image, status=OutfitStatus.READY, error=None)

    def failed(self, error: str) -> "OutfitRecord":
        return replace(self, status=OutfitStatus.FAILED, error=error)


@dataclass(frozen=True)
class SourceItem:
    """Uploaded clothing photo that outfits are generated from."""

    id: UUID
    image: bytes
    mime_type: str


def initial_records() -> dict[Style, OutfitRecord]:
    """Return a fresh idle record for every style."""
    return {
        style: OutfitRecord(id=str(index), style=style)
        for index, style in enumerate(STYLES, start=1)
    }
