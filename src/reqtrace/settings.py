"""Environment-driven configuration."""

import os
from dataclasses import dataclass
from typing import Literal

from reqtrace.observability.correlation import CORRELATION_ID_HEADER

AppEnv = Literal["development", "production", "test"]

DEFAULT_EXCLUDED_PREFIXES: tuple[str, ...] = ("/static/", "/favicon.ico", "/public/")

# Tests stay quiet unless LOG_LEVEL says otherwise
_DEFAULT_LOG_LEVELS: dict[str, str] = {
    "test": "CRITICAL",
    "development": "DEBUG",
    "production": "INFO",
}


def _parse_app_env(raw: str | None) -> AppEnv:
    value = (raw or "development").strip().lower()
    if value not in _DEFAULT_LOG_LEVELS:
        raise ValueError(f"APP_ENV must be one of {sorted(_DEFAULT_LOG_LEVELS)}, got {raw!r}")
    return value  # type: ignore[return-value]


def _parse_prefixes(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return DEFAULT_EXCLUDED_PREFIXES
    return tuple(p.strip() for p in raw.split(",") if p.strip())


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the API and scripts."""

    app_env: AppEnv = "development"
    log_level: str = "DEBUG"
    correlation_header: str = CORRELATION_ID_HEADER
    excluded_prefixes: tuple[str, ...] = DEFAULT_EXCLUDED_PREFIXES
    static_dir: str | None = None
    database_url: str | None = None
    api_client_timeout: int = 30

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables.

        Raises:
            ValueError: If APP_ENV holds an unknown environment name
                or API_CLIENT_TIMEOUT is not an integer.
        """
        app_env = _parse_app_env(os.environ.get("APP_ENV"))
        log_level = os.environ.get("LOG_LEVEL") or _DEFAULT_LOG_LEVELS[app_env]
        header = os.environ.get("CORRELATION_ID_HEADER", "").strip().lower()

        return cls(
            app_env=app_env,
            log_level=log_level.upper(),
            correlation_header=header or CORRELATION_ID_HEADER,
            excluded_prefixes=_parse_prefixes(os.environ.get("CORRELATION_EXCLUDED_PREFIXES")),
            static_dir=os.environ.get("STATIC_DIR") or None,
            database_url=os.environ.get("DATABASE_URL") or None,
            api_client_timeout=int(os.environ.get("API_CLIENT_TIMEOUT") or 30),
        )
