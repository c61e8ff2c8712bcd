"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field

import pytest

from virtual_stylist.config import Settings
from virtual_stylist.containers import AppContainer
from virtual_stylist.domain.images import ImageResult, ImageSuccess
from virtual_stylist.domain.outfits import Style
from virtual_stylist.services.editing import EditService
from virtual_stylist.services.generation import GenerationService
from virtual_stylist.services.images import ImageClient, ImageService
from virtual_stylist.services.state import StylistState

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"source-item"
EDIT = "edit"


@dataclass
class FakeImageClient(ImageClient):
    """Fake image client with scripted results per style or edit.

    Unscripted calls succeed with an image tagged by style slug (or "edit")
    and the call number. A gate registered for a key holds the next call for
    that key until the event is set. A non-zero delay slows every call down.
    """

    results: dict[Style | str, ImageResult | Exception] = field(default_factory=dict)
    gates: dict[Style | str, asyncio.Event] = field(default_factory=dict)
    calls: list[dict[str, object]] = field(default_factory=list)
    delay: float = 0.0

    async def render(self, *, image: bytes, mime_type: str, prompt: str) -> ImageResult:
        key = _prompt_key(prompt)
        self.calls.append(
            {"key": key, "image": image, "mime_type": mime_type, "prompt": prompt}
        )
        call_number = len(self.calls)
        if self.delay:
            await asyncio.sleep(self.delay)
        gate = self.gates.pop(key, None)
        if gate is not None:
            await gate.wait()
        result = self.results.get(key)
        if isinstance(result, Exception):
            raise result
        if result is not None:
            return result
        tag = key.slug if isinstance(key, Style) else EDIT
        return ImageSuccess(image=f"{tag}:{call_number}".encode())

    def calls_for(self, key: Style | str) -> list[dict[str, object]]:
        return [call for call in self.calls if call["key"] == key]


def _prompt_key(prompt: str) -> Style | str:
    for style in Style:
        if f'"{style.value}" occasion' in prompt:
            return style
    return EDIT


@pytest.fixture
def settings() -> Settings:
    return Settings(openai_api_key="openai-key")


@pytest.fixture
def image_client() -> FakeImageClient:
    return FakeImageClient()


@pytest.fixture
def state() -> StylistState:
    return StylistState()


@pytest.fixture
def image_service(image_client: FakeImageClient) -> ImageService:
    return ImageService(image_client)


@pytest.fixture
def generation_service(
    state: StylistState, image_service: ImageService
) -> GenerationService:
    return GenerationService(state=state, image_service=image_service)


@pytest.fixture
def edit_service(state: StylistState, image_service: ImageService) -> EditService:
    return EditService(state=state, image_service=image_service)


@pytest.fixture
def container(
    settings: Settings,
    state: StylistState,
    image_service: ImageService,
    generation_service: GenerationService,
    edit_service: EditService,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        state=state,
        image_service=image_service,
        generation_service=generation_service,
        edit_service=edit_service,
        close_resources=close_resources,
    )
