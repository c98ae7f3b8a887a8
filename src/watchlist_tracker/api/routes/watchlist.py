"""Watchlist snapshot API endpoints."""

from __future__ import annotations

import logging
import sqlite3

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from watchlist_tracker.api.schemas import (
    DatabaseInfoResponse,
    LoadWatchlistResponse,
    MessageResponse,
    SaveWatchlistRequest,
    SaveWatchlistResponse,
    SnapshotListResponse,
    SnapshotMetadataResponse,
    SnapshotResponse,
    TableCountsResponse,
    snapshot_info_to_response,
    snapshot_to_load_response,
    snapshot_to_response,
)
from watchlist_tracker.exceptions import DatabaseWriteError, StorageError
from watchlist_tracker.storage.watchlist_store import WatchlistStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["watchlist"])

SNAPSHOT_LIST_LIMIT = 20


def _get_store(request: Request) -> WatchlistStore:
    """Resolve WatchlistStore from app state."""
    return request.app.state.watchlist_store  # type: ignore[no-any-return]


def _error(status_code: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


@router.post("/save-watchlist", response_model=SaveWatchlistResponse)
def save_watchlist(request: Request, body: SaveWatchlistRequest) -> SaveWatchlistResponse | JSONResponse:
    """Save the full row collection as a new snapshot."""
    if not isinstance(body.data, list):
        return _error(400, "Invalid data format")
    rows = [row if isinstance(row, dict) else {} for row in body.data]

    store = _get_store(request)
    try:
        saved = store.save_snapshot(rows)
    except DatabaseWriteError as e:
        return _error(400, str(e), details=e.details)
    except (StorageError, sqlite3.Error) as e:
        logger.error("Snapshot save failed: %s", e)
        return _error(500, f"Failed to save snapshot: {e}")

    return SaveWatchlistResponse(
        message=f"Successfully saved {len(rows)} records to database",
        snapshot_id=saved.snapshot_id,
        snapshot_name=saved.snapshot_name,
        metadata=SnapshotMetadataResponse(**saved.metadata),
        db_path=str(store.db_path),
    )


@router.get("/load-watchlist", response_model=LoadWatchlistResponse, response_model_exclude_none=True)
def load_watchlist(request: Request) -> LoadWatchlistResponse | JSONResponse:
    """Return the rows of the latest snapshot."""
    try:
        record = _get_store(request).latest_snapshot()
    except StorageError as e:
        return _error(500, str(e))
    if record is None:
        return LoadWatchlistResponse(data=[], count=0, message="No snapshots found in database")
    return snapshot_to_load_response(record)


@router.get("/snapshots", response_model=SnapshotListResponse)
def list_snapshots(request: Request) -> SnapshotListResponse:
    """List the most recent snapshots without their rows."""
    snapshots = [snapshot_info_to_response(s) for s in _get_store(request).list_snapshots(limit=SNAPSHOT_LIST_LIMIT)]
    return SnapshotListResponse(snapshots=snapshots, count=len(snapshots))


@router.get("/snapshot/{snapshot_id}", response_model=SnapshotResponse)
def get_snapshot(request: Request, snapshot_id: int) -> SnapshotResponse | JSONResponse:
    """Return one snapshot by id."""
    try:
        record = _get_store(request).get_snapshot(snapshot_id)
    except StorageError as e:
        return _error(500, str(e))
    if record is None:
        return _error(404, "Snapshot not found")
    return snapshot_to_response(record)


@router.get("/db-info", response_model=DatabaseInfoResponse)
def db_info(request: Request) -> DatabaseInfoResponse:
    """Database location and row counts."""
    store = _get_store(request)
    return DatabaseInfoResponse(db_path=str(store.db_path), tables=TableCountsResponse(**store.table_counts()))


@router.post("/clear-database", response_model=MessageResponse)
def clear_database(request: Request) -> MessageResponse:
    """Delete all snapshots, symbols and history."""
    _get_store(request).clear()
    return MessageResponse(message="All database tables cleared")
