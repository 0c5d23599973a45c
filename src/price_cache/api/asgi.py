"""ASGI entrypoint for the price cache API."""

from price_cache.api.app import create_app
from price_cache.containers import build_container

app = create_app(build_container())
