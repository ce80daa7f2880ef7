"""Tests for environment-driven settings."""

import pytest

from reqtrace.settings import DEFAULT_EXCLUDED_PREFIXES, Settings

_VARS = (
    "APP_ENV",
    "LOG_LEVEL",
    "CORRELATION_ID_HEADER",
    "CORRELATION_EXCLUDED_PREFIXES",
    "STATIC_DIR",
    "DATABASE_URL",
    "API_CLIENT_TIMEOUT",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults(clean_env):
    settings = Settings.from_env()
    assert settings.app_env == "development"
    assert settings.log_level == "DEBUG"
    assert settings.correlation_header == "x-correlation-id"
    assert settings.excluded_prefixes == DEFAULT_EXCLUDED_PREFIXES
    assert settings.static_dir is None
    assert settings.database_url is None
    assert settings.api_client_timeout == 30


@pytest.mark.parametrize(
    ("app_env", "level"),
    [("test", "CRITICAL"), ("development", "DEBUG"), ("production", "INFO")],
)
def test_log_level_default_per_env(clean_env, app_env, level):
    clean_env.setenv("APP_ENV", app_env)
    assert Settings.from_env().log_level == level


def test_log_level_override(clean_env):
    clean_env.setenv("APP_ENV", "production")
    clean_env.setenv("LOG_LEVEL", "debug")
    assert Settings.from_env().log_level == "DEBUG"


def test_unknown_env_rejected(clean_env):
    clean_env.setenv("APP_ENV", "staging")
    with pytest.raises(ValueError, match="APP_ENV"):
        Settings.from_env()


def test_header_name_normalized(clean_env):
    clean_env.setenv("CORRELATION_ID_HEADER", " X-Trace-Id ")
    assert Settings.from_env().correlation_header == "x-trace-id"


def test_excluded_prefixes_parsed(clean_env):
    clean_env.setenv("CORRELATION_EXCLUDED_PREFIXES", "/assets/, /robots.txt,,")
    assert Settings.from_env().excluded_prefixes == ("/assets/", "/robots.txt")


def test_optional_paths(clean_env):
    clean_env.setenv("STATIC_DIR", "/srv/static")
    clean_env.setenv("DATABASE_URL", "postgres://u@h/db")
    settings = Settings.from_env()
    assert settings.static_dir == "/srv/static"
    assert settings.database_url == "postgres://u@h/db"


def test_api_client_timeout(clean_env):
    clean_env.setenv("API_CLIENT_TIMEOUT", "5")
    assert Settings.from_env().api_client_timeout == 5


def test_api_client_timeout_must_be_integer(clean_env):
    clean_env.setenv("API_CLIENT_TIMEOUT", "soon")
    with pytest.raises(ValueError):
        Settings.from_env()
