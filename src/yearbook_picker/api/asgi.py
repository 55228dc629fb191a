"""ASGI entrypoint for the yearbook picker API."""

from yearbook_picker.api.app import create_app
from yearbook_picker.containers import build_container

app = create_app(build_container())
