"""Pydantic models for the HTTP API."""

import base64

from pydantic import BaseModel

from virtual_stylist.domain.edits import ColorPreset, EditSession
from virtual_stylist.domain.outfits import OutfitRecord, OutfitStatus


class OutfitView(BaseModel):
    id: str
    style: str
    slug: str
    status: OutfitStatus
    image_url: str | None = None
    error: str | None = None

    @classmethod
    def from_record(cls, record: OutfitRecord) -> "OutfitView":
        return cls(
            id=record.id,
            style=record.style.value,
            slug=record.style.slug,
            status=record.status,
            image_url=to_data_url(record.image) if record.image else None,
            error=record.error,
        )


class BoardView(BaseModel):
    """Uploaded item status plus every outfit."""

    has_source: bool
    source_mime_type: str | None = None
    upload_hint: str
    outfits: list[OutfitView]


class EditSessionView(BaseModel):
    style: str
    slug: str
    image_url: str
    instruction: str
    processing: bool
    error: str | None = None

    @classmethod
    def from_session(cls, session: EditSession) -> "EditSessionView":
        return cls(
            style=session.style.value,
            slug=session.style.slug,
            image_url=to_data_url(session.image, session.mime_type),
            instruction=session.instruction,
            processing=session.processing,
            error=session.error,
        )


class PresetView(BaseModel):
    name: str
    instruction: str

    @classmethod
    def from_preset(cls, preset: ColorPreset) -> "PresetView":
        return cls(name=preset.name, instruction=preset.instruction)


class OpenEditRequest(BaseModel):
    style: str


class InstructionRequest(BaseModel):
    text: str


def to_data_url(image: bytes, mime_type: str = "image/png") -> str:
    """Encode image bytes as a base64 data URL."""
    encoded = base64.b64encode(image).decode("utf-8")
    return f"data:{mime_type};base64,{encoded}"
