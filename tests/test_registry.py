"""Tests for the result registry and stylist state."""

from uuid import uuid4

import pytest

from virtual_stylist.domain.edits import EditSession
from virtual_stylist.domain.outfits import (
    OutfitRecord,
    OutfitStatus,
    SourceItem,
    Style,
    initial_records,
)
from virtual_stylist.services.registry import ResultRegistry
from virtual_stylist.services.state import StylistState


def test_registry_starts_with_one_idle_record_per_style() -> None:
    registry = ResultRegistry()

    records = registry.snapshot()

    assert [record.style for record in records] == [
        Style.CASUAL,
        Style.BUSINESS,
        Style.NIGHT_OUT,
    ]
    assert [record.id for record in records] == ["1", "2", "3"]
    assert all(record.status is OutfitStatus.IDLE for record in records)
    assert all(record.image is None for record in records)


def test_set_replaces_whole_record() -> None:
    registry = ResultRegistry()
    updated = registry.get(Style.BUSINESS).ready(b"image")

    registry.set(Style.BUSINESS, updated)

    assert registry.get(Style.BUSINESS) is updated


def test_set_rejects_record_for_other_style() -> None:
    registry = ResultRegistry()

    with pytest.raises(ValueError, match="stored under"):
        registry.set(Style.CASUAL, registry.get(Style.NIGHT_OUT))


def test_reset_all_requires_every_style() -> None:
    registry = ResultRegistry()
    records = initial_records()
    records.pop(Style.CASUAL)

    with pytest.raises(ValueError, match="one record per style"):
        registry.reset_all(records)


def test_reset_all_restores_initial_records() -> None:
    registry = ResultRegistry()
    registry.set(Style.CASUAL, registry.get(Style.CASUAL).ready(b"image"))

    registry.reset_all(initial_records())

    assert registry.get(Style.CASUAL) == OutfitRecord(id="1", style=Style.CASUAL)


def test_replace_source_resets_outfits_and_closes_session() -> None:
    state = StylistState()
    state.registry.set(Style.CASUAL, state.registry.get(Style.CASUAL).ready(b"img"))
    state.edit_session = EditSession(style=Style.CASUAL, image=b"img")
    source = SourceItem(id=uuid4(), image=b"item", mime_type="image/jpeg")

    state.replace_source(source)

    assert state.source_id == source.id
    assert state.edit_session is None
    assert state.registry.get(Style.CASUAL).image is None
