"""ASGI entry point."""

from reqtrace.api.factory import create_app

app = create_app()
