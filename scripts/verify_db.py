"""Check that DATABASE_URL points at a reachable database.

Usage:
    DATABASE_URL=... uv run python scripts/verify_db.py

Exits 0 when ``SELECT 1`` succeeds, 1 otherwise.
"""

from __future__ import annotations

import sys

from reqtrace.operations.verify_db import main

if __name__ == "__main__":
    sys.exit(main())
