"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request, Response, status
from fastapi.responses import JSONResponse

from virtual_stylist.api.edits import router as edit_router
from virtual_stylist.api.schemas import BoardView, OutfitView, PresetView
from virtual_stylist.app_logging import configure_logging
from virtual_stylist.config import upload_hint
from virtual_stylist.containers import AppContainer
from virtual_stylist.domain.edits import COLOR_PRESETS
from virtual_stylist.domain.errors import (
    EditSessionOpenError,
    GenerationInProgressError,
    InvalidSourceImageError,
    NoEditSessionError,
    NoSourceImageError,
    RecordNotReadyError,
    StylistError,
    UnknownPresetError,
)
from virtual_stylist.domain.outfits import Style
from virtual_stylist.services.editing import download_filename

_ERROR_STATUS: dict[type[StylistError], int] = {
    InvalidSourceImageError: status.HTTP_400_BAD_REQUEST,
    NoSourceImageError: status.HTTP_409_CONFLICT,
    RecordNotReadyError: status.HTTP_409_CONFLICT,
    NoEditSessionError: status.HTTP_404_NOT_FOUND,
    UnknownPresetError: status.HTTP_404_NOT_FOUND,
    GenerationInProgressError: status.HTTP_409_CONFLICT,
    EditSessionOpenError: status.HTTP_409_CONFLICT,
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.generation_service.wait_idle()
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(edit_router)

    @app.exception_handler(StylistError)
    async def stylist_error_handler(
        request: Request, exc: StylistError
    ) -> JSONResponse:
        status_code = _ERROR_STATUS.get(type(exc), status.HTTP_400_BAD_REQUEST)
        logger.info("Rejected %s %s: %s", request.method, request.url.path, exc)
        return JSONResponse(status_code=status_code, content={"detail": str(exc)})

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/outfits")
    async def outfits(request: Request) -> BoardView:
        """Return the uploaded item status and every outfit."""
        return _board(request.app.state.container)

    @app.post("/source")
    async def upload_source(request: Request, wait: bool = False) -> BoardView:
        """Accept a raw image body and start generating all outfits."""
        state_container: AppContainer = request.app.state.container
        content_type = request.headers.get("content-type", "")
        mime_type = content_type.split(";")[0].strip() or None
        image = await request.body()
        state_container.generation_service.generate_all(image, mime_type)
        if wait:
            await state_container.generation_service.wait_idle()
        return _board(state_container)

    @app.delete("/source")
    async def clear_source(request: Request) -> BoardView:
        """Forget the uploaded item and reset all outfits."""
        state_container: AppContainer = request.app.state.container
        state_container.generation_service.clear_source()
        return _board(state_container)

    @app.post("/outfits/{slug}/retry")
    async def retry_outfit(
        slug: str, request: Request, wait: bool = False
    ) -> BoardView:
        """Regenerate a single outfit."""
        state_container: AppContainer = request.app.state.container
        state_container.generation_service.retry(_parse_style(slug))
        if wait:
            await state_container.generation_service.wait_idle()
        return _board(state_container)

    @app.get("/outfits/{slug}/image")
    async def outfit_image(slug: str, request: Request) -> Response:
        """Return the latest image for an outfit as PNG."""
        state_container: AppContainer = request.app.state.container
        style = _parse_style(slug)
        record = state_container.state.registry.get(style)
        if record.image is None:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return Response(
            content=record.image,
            media_type="image/png",
            headers={
                "Content-Disposition": f'inline; filename="{download_filename(style)}"'
            },
        )

    @app.get("/presets")
    async def presets() -> list[PresetView]:
        """Return the quick-select color presets."""
        return [PresetView.from_preset(preset) for preset in COLOR_PRESETS]

    return app


def _board(container: AppContainer) -> BoardView:
    source = container.state.source
    return BoardView(
        has_source=source is not None,
        source_mime_type=source.mime_type if source else None,
        upload_hint=upload_hint(container.settings.max_upload_hint_mb),
        outfits=[
            OutfitView.from_record(record)
            for record in container.state.registry.snapshot()
        ],
    )


def _parse_style(slug: str) -> Style:
    try:
        return Style.from_slug(slug)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
