"""SQLite watchlist snapshot store.

Every save writes one snapshot (the full row collection), upserts a status
record per symbol, and appends a history entry, all in one transaction.
Reads always serve the latest snapshot.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from dataclasses import dataclass, field
from datetime import UTC
from datetime import datetime as dt
from typing import Any

from watchlist_tracker.exceptions import DatabaseReadError, DatabaseWriteError
from watchlist_tracker.models.row import Row
from watchlist_tracker.storage.base import SQLiteStore
from watchlist_tracker.storage.schema import ALL_WATCHLIST_DDL
from watchlist_tracker.watchlist.category import INDEX_ETFS, SECTOR_ETFS

logger = logging.getLogger(__name__)

SAVE_ACTION = "SAVE_WATCHLIST"
SNAPSHOT_NOTES = "Auto-saved watchlist"


def _is_completed(row: Row) -> bool:
    return bool(row.get("Daily") and row.get("Weekly") and row.get("Monthly"))


def compute_snapshot_metadata(rows: list[Row]) -> dict[str, int]:
    """Counts stored alongside each snapshot.

    ETF counts use exact symbol membership. Only the string ``"true"`` counts
    as skipped here.
    """
    return {
        "record_count": len(rows),
        "index_etfs": sum(1 for row in rows if row.get("Symbol") in INDEX_ETFS),
        "sector_etfs": sum(1 for row in rows if row.get("Symbol") in SECTOR_ETFS),
        "completed_symbols": sum(1 for row in rows if _is_completed(row)),
        "skipped_symbols": sum(1 for row in rows if row.get("Skip") == "true"),
    }


def symbol_record(row: Row) -> dict[str, Any]:
    """Per-symbol status document kept in the ``symbols`` table."""
    skipped = row.get("Skip") == "true"
    return {
        "symbol": row.get("Symbol"),
        "daily": row.get("Daily") or "",
        "weekly": row.get("Weekly") or "",
        "monthly": row.get("Monthly") or "",
        "comment": row.get("Comment") or "",
        "skip": skipped,
        "status": {"completed": _is_completed(row), "skipped": skipped},
    }


@dataclass
class SnapshotSaved:
    """Outcome of a successful save."""

    snapshot_id: int
    snapshot_name: str
    metadata: dict[str, int]


@dataclass
class SnapshotRecord:
    """A stored snapshot with its rows."""

    id: int
    name: str
    data: list[Row]
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str = ""


@dataclass
class SnapshotInfo:
    """Snapshot listing entry (no rows)."""

    id: int
    name: str
    metadata: dict[str, Any] = field(default_factory=dict)
    created_at: str = ""


class WatchlistStore(SQLiteStore):
    """SQLite store for watchlist snapshots, symbol status and history.

    Usage:
        store = WatchlistStore(Path("workspace/watchlist.db"))
        store.initialize_schema()
        store.save_snapshot(rows)
        latest = store.latest_snapshot()
    """

    ddl = ALL_WATCHLIST_DDL

    def save_snapshot(self, rows: list[Row]) -> SnapshotSaved:
        """Persist the full collection as a new snapshot.

        Raises:
            DatabaseWriteError: If any row cannot be stored; nothing is written.
        """
        conn = self._get_connection()
        metadata = compute_snapshot_metadata(rows)
        now = dt.now(UTC)
        snapshot_name = f"snapshot_{int(time.time() * 1000)}"
        snapshot = {"total_symbols": len(rows), "timestamp": now.isoformat(), "data": rows}

        with self._transaction(conn):
            errors: list[dict[str, str]] = []
            for row in rows:
                symbol = row.get("Symbol")
                if symbol is None:
                    errors.append({"symbol": "", "error": "NOT NULL constraint failed: symbols.symbol"})
                    continue
                try:
                    conn.execute(
                        """
                        INSERT INTO symbols (symbol, symbol_data, updated_at)
                        VALUES (?, ?, CURRENT_TIMESTAMP)
                        ON CONFLICT (symbol) DO UPDATE SET
                            symbol_data = excluded.symbol_data,
                            updated_at = CURRENT_TIMESTAMP
                        """,
                        [str(symbol), json.dumps(symbol_record(row), ensure_ascii=False)],
                    )
                except sqlite3.Error as e:
                    errors.append({"symbol": str(symbol), "error": str(e)})

            if errors:
                raise DatabaseWriteError("Some rows failed to save", details=errors)

            cursor = conn.execute(
                """
                INSERT INTO watchlist_snapshots (snapshot_name, snapshot_data, metadata, notes)
                VALUES (?, ?, ?, ?)
                """,
                [
                    snapshot_name,
                    json.dumps(snapshot, ensure_ascii=False),
                    json.dumps(metadata),
                    SNAPSHOT_NOTES,
                ],
            )
            snapshot_id = int(cursor.lastrowid or 0)

            conn.execute(
                "INSERT INTO history (action, change_data) VALUES (?, ?)",
                [SAVE_ACTION, json.dumps({"symbols_count": len(rows), "timestamp": now.isoformat()})],
            )

        logger.info("Saved %s with %d records", snapshot_name, len(rows))
        return SnapshotSaved(snapshot_id=snapshot_id, snapshot_name=snapshot_name, metadata=metadata)

    def _to_record(self, row: sqlite3.Row) -> SnapshotRecord:
        try:
            snapshot = json.loads(row["snapshot_data"])
            metadata = json.loads(row["metadata"]) if row["metadata"] else {}
        except json.JSONDecodeError as e:
            raise DatabaseReadError(f"Snapshot {row['id']} is not valid JSON: {e}") from e
        return SnapshotRecord(
            id=int(row["id"]),
            name=str(row["snapshot_name"] or ""),
            data=list(snapshot.get("data") or []),
            metadata=metadata,
            created_at=str(row["created_at"]),
        )

    def latest_snapshot(self) -> SnapshotRecord | None:
        """Most recent snapshot, or None when none exists."""
        if not self._table_exists("watchlist_snapshots"):
            return None
        conn = self._get_connection()
        row = conn.execute(
            """
            SELECT id, snapshot_name, snapshot_data, metadata, created_at
            FROM watchlist_snapshots ORDER BY id DESC LIMIT 1
            """
        ).fetchone()
        return self._to_record(row) if row is not None else None

    def get_snapshot(self, snapshot_id: int) -> SnapshotRecord | None:
        if not self._table_exists("watchlist_snapshots"):
            return None
        conn = self._get_connection()
        row = conn.execute(
            """
            SELECT id, snapshot_name, snapshot_data, metadata, created_at
            FROM watchlist_snapshots WHERE id = ?
            """,
            [snapshot_id],
        ).fetchone()
        return self._to_record(row) if row is not None else None

    def list_snapshots(self, limit: int = 20) -> list[SnapshotInfo]:
        """Newest-first snapshot listing without row data."""
        if not self._table_exists("watchlist_snapshots"):
            return []
        conn = self._get_connection()
        rows = conn.execute(
            "SELECT id, snapshot_name, metadata, created_at FROM watchlist_snapshots ORDER BY id DESC LIMIT ?",
            [limit],
        ).fetchall()
        return [
            SnapshotInfo(
                id=int(row["id"]),
                name=str(row["snapshot_name"] or ""),
                metadata=json.loads(row["metadata"]) if row["metadata"] else {},
                created_at=str(row["created_at"]),
            )
            for row in rows
        ]

    def table_counts(self) -> dict[str, int]:
        """Row counts keyed ``snapshots`` / ``symbols`` / ``history``."""
        conn = self._get_connection()
        counts: dict[str, int] = {}
        for key, table in (("snapshots", "watchlist_snapshots"), ("symbols", "symbols"), ("history", "history")):
            result = conn.execute(f"SELECT COUNT(*) FROM {table}").fetchone()
            counts[key] = int(result[0]) if result is not None else 0
        return counts

    def clear(self) -> None:
        """Delete all snapshots, symbols and history."""
        conn = self._get_connection()
        with self._transaction(conn):
            conn.execute("DELETE FROM watchlist_snapshots")
            conn.execute("DELETE FROM symbols")
            conn.execute("DELETE FROM history")
        logger.info("Cleared watchlist tables in %s", self.db_path)
