"""Database connectivity smoke test."""

import psycopg2

from reqtrace.infra.db import ping
from reqtrace.observability.correlation import (
    generate_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)
from reqtrace.observability.logging import get_logger
from reqtrace.settings import Settings

logger = get_logger(__name__)


def main(settings: Settings | None = None) -> int:
    if settings is None:
        settings = Settings.from_env()

    token = set_correlation_id(generate_correlation_id())
    try:
        logger.info("testing database connection")
        try:
            ok = ping(dsn=settings.database_url)
        except (RuntimeError, psycopg2.Error):
            logger.exception("database connection failed")
            return 1

        if not ok:
            logger.error("database returned an unexpected result for SELECT 1")
            return 1

        logger.info("database connection successful")
        return 0
    finally:
        reset_correlation_id(token)
