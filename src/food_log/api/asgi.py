"""ASGI entrypoint for the food log web app."""

from food_log.api.app import create_app
from food_log.containers import build_container

app = create_app(build_container())
