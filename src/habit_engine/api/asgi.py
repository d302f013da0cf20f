"""ASGI entrypoint for the habit engine API."""

from habit_engine.api.app import create_app
from habit_engine.containers import build_container

app = create_app(build_container())
