"""ASGI entrypoint for the exchange admin API."""

from exchange_admin.api.app import create_app
from exchange_admin.containers import build_container

app = create_app(build_container())
