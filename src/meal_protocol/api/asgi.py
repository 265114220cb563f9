"""ASGI entrypoint for the meal protocol API."""

from meal_protocol.api.app import create_app
from meal_protocol.containers import build_container

app = create_app(build_container())
