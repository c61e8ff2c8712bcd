"""Tests for container wiring."""

import asyncio

from virtual_stylist.containers import build_container


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)
    assert container.generation_service.state is container.state
    assert container.edit_service.state is container.state
    asyncio.run(container.close_resources())
