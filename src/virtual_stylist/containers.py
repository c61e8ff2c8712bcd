"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from virtual_stylist.adapters.openai_image_client import OpenAIImageClient
from virtual_stylist.config import Settings
from virtual_stylist.services.editing import EditService
from virtual_stylist.services.generation import GenerationService
from virtual_stylist.services.images import ImageService
from virtual_stylist.services.state import StylistState


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    state: StylistState
    image_service: ImageService
    generation_service: GenerationService
    edit_service: EditService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    image_client = OpenAIImageClient.create(
        resolved_settings.openai_api_key,
        model=resolved_settings.openai_image_model,
        size=resolved_settings.openai_image_size,
        quality=resolved_settings.openai_image_quality,
        timeout_seconds=resolved_settings.openai_timeout_seconds,
    )
    state = StylistState()
    image_service = ImageService(image_client)
    generation_service = GenerationService(state=state, image_service=image_service)
    edit_service = EditService(state=state, image_service=image_service)

    async def close_resources() -> None:
        await image_client.close()

    return AppContainer(
        settings=resolved_settings,
        state=state,
        image_service=image_service,
        generation_service=generation_service,
        edit_service=edit_service,
        close_resources=close_resources,
    )
