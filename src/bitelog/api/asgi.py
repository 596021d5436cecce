"""ASGI entrypoint for the bitelog API."""

from bitelog.api.app import create_app
from bitelog.containers import build_container

app = create_app(build_container())
