"""Shared SQLite connection handling for backend stores.

One connection per thread (FastAPI runs sync endpoints in a thread pool) and
explicit transactions with rollback on failure.
"""

from __future__ import annotations

import logging
import sqlite3
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import cast

logger = logging.getLogger(__name__)


class SQLiteStore:
    """Base class owning the database path and thread-local connections."""

    ddl: list[str] = []

    def __init__(self, db_path: Path) -> None:
        """Initialize the store.

        Args:
            db_path: SQLite database file path (parent directories are created).
        """
        self.db_path = db_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._local = threading.local()

    def _get_connection(self) -> sqlite3.Connection:
        """Get thread-local SQLite connection (autocommit, foreign keys on)."""
        if not hasattr(self._local, "conn"):
            conn = sqlite3.connect(str(self.db_path), isolation_level=None)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys = ON")
            self._local.conn = conn
        return cast(sqlite3.Connection, self._local.conn)

    @contextmanager
    def _transaction(self, conn: sqlite3.Connection) -> Iterator[sqlite3.Connection]:
        """Transaction context manager with rollback on failure."""
        try:
            conn.execute("BEGIN")
            yield conn
            conn.execute("COMMIT")
        except Exception:
            conn.execute("ROLLBACK")
            raise

    def _table_exists(self, table: str) -> bool:
        conn = self._get_connection()
        result = conn.execute(
            "SELECT COUNT(*) FROM sqlite_master WHERE type = 'table' AND name = ?",
            [table],
        ).fetchone()
        return result is not None and result[0] > 0

    def initialize_schema(self) -> None:
        """Create this store's tables (idempotent)."""
        conn = self._get_connection()
        for ddl in self.ddl:
            conn.execute(ddl)
        logger.debug("Schema ready for %s at %s", type(self).__name__, self.db_path)

    def close(self) -> None:
        """Close the calling thread's connection."""
        conn = getattr(self._local, "conn", None)
        if conn is not None:
            conn.close()
            del self._local.conn
