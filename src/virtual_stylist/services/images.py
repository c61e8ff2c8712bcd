"""Outfit image generation and editing via an image model."""

from dataclasses import dataclass
from typing import Protocol

from virtual_stylist.domain.images import ImageResult
from virtual_stylist.domain.outfits import Style

SUPPORTED_MIME_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})


class ImageClient(Protocol):
    """Interface for image-to-image model calls."""

    async def render(self, *, image: bytes, mime_type: str, prompt: str) -> ImageResult:
        """Return a new image derived from the input image and prompt."""


@dataclass
class ImageService:
    """Service that prepares styling prompts for the image client."""

    client: ImageClient

    async def style_generate(
        self, image: bytes, mime_type: str, style: Style
    ) -> ImageResult:
        """Compose a full flat-lay outfit around the uploaded item."""
        return await self.client.render(
            image=image, mime_type=mime_type, prompt=style_prompt(style)
        )

    async def edit(self, image: bytes, mime_type: str, instruction: str) -> ImageResult:
        """Apply a free-text edit instruction to an outfit image."""
        return await self.client.render(
            image=image, mime_type=mime_type, prompt=edit_prompt(instruction)
        )


def style_prompt(style: Style) -> str:
    """Build the flat-lay composition prompt for a style."""
    return (
        "You are a world-class fashion stylist. "
        "Study the attached clothing item carefully. "
        f'Create a complete, high-fashion flat-lay outfit for a "{style.value}" '
        "occasion with this exact item as the centerpiece. "
        "Show a top-down view of the pieces laid out neatly on a clean, "
        "neutral background. "
        "Add matching shoes, accessories and complementary clothing that form "
        f"a cohesive {style.value} look. "
        "Do not include any text in the image. "
        "Photorealistic, high quality."
    )


def edit_prompt(instruction: str) -> str:
    """Build the prompt for refining an existing outfit image."""
    return (
        f'Edit the attached fashion image following this instruction: "{instruction}". '
        "Return only the edited image. "
        "Keep the flat-lay composition, lighting and image quality."
    )


def detect_mime_type(image_bytes: bytes) -> str | None:
    """Infer a basic image MIME type from file signatures."""
    if image_bytes.startswith(b"\xff\xd8\xff"):
        return "image/jpeg"
    if image_bytes.startswith(b"\x89PNG\r\n\x1a\n"):
        return "image/png"
    if image_bytes[:4] == b"RIFF" and image_bytes[8:12] == b"WEBP":
        return "image/webp"
    if image_bytes[:6] in {b"GIF87a", b"GIF89a"}:
        return "image/gif"
    return None
