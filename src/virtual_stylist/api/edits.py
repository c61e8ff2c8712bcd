"""Edit session endpoints for refining a single outfit."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from virtual_stylist.api.schemas import (
    EditSessionView,
    InstructionRequest,
    OpenEditRequest,
)
from virtual_stylist.domain.outfits import Style

if TYPE_CHECKING:
    from virtual_stylist.services.editing import EditService

router = APIRouter(prefix="/edit", tags=["edit"])


def _edit_service(request: Request) -> EditService:
    return request.app.state.container.edit_service


@router.post("")
async def open_session(payload: OpenEditRequest, request: Request) -> EditSessionView:
    """Open an edit session on a finished outfit."""
    try:
        style = Style.from_slug(payload.style)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)
        ) from exc
    session = _edit_service(request).open(style)
    return EditSessionView.from_session(session)


@router.get("")
async def current_session(request: Request) -> EditSessionView:
    """Return the open edit session."""
    session = _edit_service(request).session
    if session is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return EditSessionView.from_session(session)


@router.put("/instruction")
async def set_instruction(
    payload: InstructionRequest, request: Request
) -> EditSessionView:
    """Store the pending edit instruction."""
    session = _edit_service(request).set_instruction(payload.text)
    return EditSessionView.from_session(session)


@router.post("/presets/{name}")
async def apply_preset(name: str, request: Request) -> EditSessionView:
    """Pre-fill the instruction from a color preset."""
    session = _edit_service(request).apply_preset(name)
    return EditSessionView.from_session(session)


@router.post("/apply")
async def apply_edit(request: Request) -> EditSessionView:
    """Run the pending instruction against the working image."""
    session = await _edit_service(request).apply()
    return EditSessionView.from_session(session)


@router.delete("", status_code=status.HTTP_204_NO_CONTENT)
async def close_session(request: Request) -> None:
    """Close the edit session, keeping applied edits."""
    _edit_service(request).close()


@router.get("/download")
async def download(request: Request) -> Response:
    """Download the image shown in the edit session."""
    image = _edit_service(request).download()
    return Response(
        content=image.content,
        media_type=image.media_type,
        headers={"Content-Disposition": f'attachment; filename="{image.filename}"'},
    )
