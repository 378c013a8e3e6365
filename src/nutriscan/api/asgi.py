"""ASGI entrypoint for the NutriScan web app."""

from nutriscan.api.app import create_app
from nutriscan.containers import build_container

app = create_app(build_container())
