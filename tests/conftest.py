"""Shared pytest fixtures for reqtrace tests."""
import os
import sys
sys.dont_write_bytecode = True

# Loggers pick their level on first use; keep test output quiet by default
os.environ.setdefault("APP_ENV", "test")

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from reqtrace.api.factory import create_app  # noqa: E402
from reqtrace.settings import Settings  # noqa: E402


@pytest.fixture
def settings() -> Settings:
    return Settings(app_env="test", log_level="CRITICAL")


@pytest.fixture
def app(settings):
    """App with a stub users route and a stub public asset route."""
    app = create_app(settings)

    @app.get("/api/users")
    def list_users() -> dict:
        return {"success": True, "data": []}

    @app.get("/public/logo.png")
    def logo() -> dict:
        return {"asset": "logo"}

    @app.get("/favicon.ico")
    def favicon() -> dict:
        return {"asset": "favicon"}

    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
