"""ASGI entrypoint for the virtual stylist API."""

from virtual_stylist.api.app import create_app
from virtual_stylist.containers import build_container

app = create_app(build_container())
