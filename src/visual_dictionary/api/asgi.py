"""ASGI entrypoint for the visual dictionary API."""

from visual_dictionary.api.app import create_app
from visual_dictionary.containers import build_container

app = create_app(build_container())
