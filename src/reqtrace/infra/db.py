"""Database connectivity using psycopg2.

Provides:
- get_conn(): Get a database connection from a DSN or DATABASE_URL
- ping(): Round-trip ``SELECT 1`` for smoke tests
"""

import os

import psycopg2
from psycopg2.extensions import connection as PgConnection


def get_conn(dsn: str | None = None) -> PgConnection:
    """Get a new database connection.

    Args:
        dsn: Connection string. If None, read from DATABASE_URL.

    Returns:
        psycopg2 connection object.

    Raises:
        RuntimeError: If no DSN is given and DATABASE_URL is not set.
        psycopg2.Error: On connection failure.
    """
    dsn = dsn or os.environ.get("DATABASE_URL")
    if not dsn:
        raise RuntimeError("DATABASE_URL environment variable not set")
    return psycopg2.connect(dsn)


def ping(conn: PgConnection | None = None, dsn: str | None = None) -> bool:
    """Run ``SELECT 1`` and report whether the expected row came back.

    If conn is None, a new connection is opened from ``dsn`` and closed on exit.

    Raises:
        RuntimeError: If no connection can be configured.
        psycopg2.Error: On connection or query failure.
    """
    owns_conn = conn is None
    if owns_conn:
        conn = get_conn(dsn)

    try:
        with conn.cursor() as cur:
            cur.execute("SELECT 1")
            row = cur.fetchone()
        return row is not None and row[0] == 1
    finally:
        if owns_conn:
            conn.close()
