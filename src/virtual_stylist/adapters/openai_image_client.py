"""OpenAI Images API client for outfit generation and edits."""

import base64
import logging
from dataclasses import dataclass

import httpx
from openai import AsyncOpenAI, BadRequestError

from virtual_stylist.domain.images import (
    ImageEmpty,
    ImageRefusal,
    ImageResult,
    ImageSuccess,
)
from virtual_stylist.services.images import ImageClient

logger = logging.getLogger(__name__)

_MODERATION_CODES = {"moderation_blocked", "content_policy_violation"}

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
}


@dataclass
class OpenAIImageClient(ImageClient):
    """Image client backed by the OpenAI Images edit endpoint."""

    client: AsyncOpenAI
    model: str = "gpt-image-1"
    size: str = "1024x1024"
    quality: str = "high"
    http_client: httpx.AsyncClient | None = None

    @classmethod
    def create(  # noqa: PLR0913
        cls,
        api_key: str,
        *,
        model: str = "gpt-image-1",
        size: str = "1024x1024",
        quality: str = "high",
        timeout_seconds: float = 120.0,
    ) -> "OpenAIImageClient":
        """Create an OpenAI image client with a managed httpx session."""
        http_client = httpx.AsyncClient(timeout=timeout_seconds)
        return cls(
            client=AsyncOpenAI(api_key=api_key, http_client=http_client),
            model=model,
            size=size,
            quality=quality,
            http_client=http_client,
        )

    async def render(self, *, image: bytes, mime_type: str, prompt: str) -> ImageResult:
        """Call the edit endpoint and map the response to an image result."""
        extension = _EXTENSIONS.get(mime_type, "png")
        try:
            response = await self.client.images.edit(
                model=self.model,
                image=(f"item.{extension}", image, mime_type),
                prompt=prompt,
                size=self.size,
                quality=self.quality,
                output_format="png",
                n=1,
            )
        except BadRequestError as exc:
            if exc.code in _MODERATION_CODES:
                return ImageRefusal(explanation=_error_message(exc))
            raise

        for item in response.data or []:
            if item.b64_json:
                return ImageSuccess(image=base64.b64decode(item.b64_json))
        logger.warning("OpenAI returned no image data")
        return ImageEmpty()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.http_client is not None:
            await self.http_client.aclose()


def _error_message(exc: BadRequestError) -> str:
    """Return the user-facing message from an OpenAI error body."""
    body = exc.body
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return exc.message
