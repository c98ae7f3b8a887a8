"""Unit tests for WatchlistStore."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from watchlist_tracker.exceptions import DatabaseWriteError
from watchlist_tracker.storage.watchlist_store import (
    WatchlistStore,
    compute_snapshot_metadata,
    symbol_record,
)

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


def _make_rows() -> list[dict[str, object]]:
    return [
        {"Symbol": "SPY", "Daily": "buy", "Weekly": "buy", "Monthly": "buy", "Skip": "false"},
        {"Symbol": "XLF", "Daily": "sell", "Weekly": "", "Monthly": "", "Skip": "true"},
        {"Symbol": "AAPL", "Daily": "", "Skip": True, "Comment": "earnings"},
        {"Symbol": "spy", "Daily": "buy"},
    ]


@pytest.fixture
def store(tmp_path: Path) -> WatchlistStore:
    s = WatchlistStore(tmp_path / "data" / "watchlist.db")
    s.initialize_schema()
    return s


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestSnapshotMetadata:
    def test_counts(self) -> None:
        assert compute_snapshot_metadata(_make_rows()) == {
            "record_count": 4,
            "index_etfs": 1,
            "sector_etfs": 1,
            "completed_symbols": 1,
            "skipped_symbols": 1,
        }

    def test_empty(self) -> None:
        assert compute_snapshot_metadata([])["record_count"] == 0

    def test_symbol_record(self) -> None:
        record = symbol_record({"Symbol": "SPY", "Daily": "buy", "Weekly": "buy", "Monthly": "buy", "Skip": "true"})
        assert record == {
            "symbol": "SPY",
            "daily": "buy",
            "weekly": "buy",
            "monthly": "buy",
            "comment": "",
            "skip": True,
            "status": {"completed": True, "skipped": True},
        }


# ---------------------------------------------------------------------------
# Store
# ---------------------------------------------------------------------------


@pytest.mark.unit
class TestWatchlistStore:
    def test_creates_parent_directory(self, store: WatchlistStore) -> None:
        assert store.db_path.parent.is_dir()

    def test_initialize_is_idempotent(self, store: WatchlistStore) -> None:
        store.initialize_schema()
        assert store.table_counts() == {"snapshots": 0, "symbols": 0, "history": 0}

    def test_save_and_latest(self, store: WatchlistStore) -> None:
        rows = _make_rows()
        saved = store.save_snapshot(rows)
        assert saved.snapshot_id == 1
        assert saved.snapshot_name.startswith("snapshot_")
        assert saved.metadata["record_count"] == 4

        latest = store.latest_snapshot()
        assert latest is not None
        assert latest.data == rows
        assert latest.metadata == saved.metadata
        assert latest.created_at

    def test_latest_is_newest(self, store: WatchlistStore) -> None:
        store.save_snapshot([{"Symbol": "OLD"}])
        store.save_snapshot([{"Symbol": "NEW"}])
        latest = store.latest_snapshot()
        assert latest is not None
        assert latest.data == [{"Symbol": "NEW"}]

    def test_latest_none_when_empty(self, store: WatchlistStore) -> None:
        assert store.latest_snapshot() is None

    def test_latest_none_without_schema(self, tmp_path: Path) -> None:
        assert WatchlistStore(tmp_path / "fresh.db").latest_snapshot() is None

    def test_symbols_upserted_and_history_logged(self, store: WatchlistStore) -> None:
        store.save_snapshot([{"Symbol": "SPY", "Daily": "buy"}])
        store.save_snapshot([{"Symbol": "SPY", "Daily": "sell"}, {"Symbol": "QQQ"}])
        assert store.table_counts() == {"snapshots": 2, "symbols": 2, "history": 2}

        conn = store._get_connection()
        row = conn.execute("SELECT symbol_data FROM symbols WHERE symbol = 'SPY'").fetchone()
        assert json.loads(row["symbol_data"])["daily"] == "sell"
        actions = [r["action"] for r in conn.execute("SELECT action FROM history").fetchall()]
        assert actions == ["SAVE_WATCHLIST", "SAVE_WATCHLIST"]

    def test_row_without_symbol_rolls_back(self, store: WatchlistStore) -> None:
        with pytest.raises(DatabaseWriteError, match="Some rows failed to save") as exc_info:
            store.save_snapshot([{"Symbol": "SPY"}, {"Daily": "buy"}])
        assert len(exc_info.value.details) == 1
        assert store.table_counts() == {"snapshots": 0, "symbols": 0, "history": 0}

    def test_get_snapshot(self, store: WatchlistStore) -> None:
        saved = store.save_snapshot([{"Symbol": "SPY"}])
        record = store.get_snapshot(saved.snapshot_id)
        assert record is not None
        assert record.id == saved.snapshot_id
        assert record.name == saved.snapshot_name
        assert store.get_snapshot(999) is None

    def test_list_snapshots_newest_first_with_limit(self, store: WatchlistStore) -> None:
        for i in range(3):
            store.save_snapshot([{"Symbol": f"S{i}"}])
        listing = store.list_snapshots(limit=2)
        assert [s.id for s in listing] == [3, 2]
        assert listing[0].metadata["record_count"] == 1

    def test_clear(self, store: WatchlistStore) -> None:
        store.save_snapshot(_make_rows())
        store.clear()
        assert store.table_counts() == {"snapshots": 0, "symbols": 0, "history": 0}
        assert store.latest_snapshot() is None

    def test_close_reopens(self, store: WatchlistStore) -> None:
        store.save_snapshot([{"Symbol": "SPY"}])
        store.close()
        assert store.table_counts()["snapshots"] == 1
