"""Pydantic request/response models for the watchlist and blog API.

Converts the storage dataclasses (watchlist_store.py, blog_store.py) to
Pydantic models for FastAPI serialization and OpenAPI doc generation.

Note: This module depends only on pydantic (not fastapi), so tests can run
without the [api] extra installed.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from watchlist_tracker.storage.blog_store import Blog, BlogSummary
from watchlist_tracker.storage.watchlist_store import SnapshotInfo, SnapshotRecord

# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------


class SaveWatchlistRequest(BaseModel):
    """Body of POST /save-watchlist; ``data`` is checked to be a list by the route."""

    data: Any = None


class BlogRequest(BaseModel):
    """Body of POST /blogs and PUT /blogs/{id}."""

    title: str = ""
    content: str = ""


# ---------------------------------------------------------------------------
# Watchlist responses
# ---------------------------------------------------------------------------


class SnapshotMetadataResponse(BaseModel):
    """Counts computed when a snapshot is saved."""

    record_count: int
    index_etfs: int
    sector_etfs: int
    completed_symbols: int
    skipped_symbols: int


class SaveWatchlistResponse(BaseModel):
    success: bool = True
    message: str
    snapshot_id: int
    snapshot_name: str
    metadata: SnapshotMetadataResponse
    db_path: str = Field(serialization_alias="dbPath")


class LoadWatchlistResponse(BaseModel):
    """Latest snapshot rows; ``message`` is set only when nothing is stored."""

    success: bool = True
    data: list[dict[str, Any]]
    count: int
    metadata: dict[str, Any] | None = None
    snapshot_created: str | None = None
    message: str | None = None


class SnapshotItemResponse(BaseModel):
    id: int
    name: str
    metadata: dict[str, Any]
    created_at: str


class SnapshotListResponse(BaseModel):
    success: bool = True
    snapshots: list[SnapshotItemResponse]
    count: int


class SnapshotResponse(BaseModel):
    success: bool = True
    snapshot_id: int
    data: list[dict[str, Any]]
    metadata: dict[str, Any]
    created_at: str


class TableCountsResponse(BaseModel):
    snapshots: int
    symbols: int
    history: int


class DatabaseInfoResponse(BaseModel):
    success: bool = True
    db_path: str = Field(serialization_alias="dbPath")
    tables: TableCountsResponse


class MessageResponse(BaseModel):
    success: bool = True
    message: str


# ---------------------------------------------------------------------------
# Blog responses
# ---------------------------------------------------------------------------


class BlogSavedResponse(BaseModel):
    success: bool = True
    blog_id: int


class BlogSummaryResponse(BaseModel):
    id: int
    title: str
    created_at: str


class BlogListResponse(BaseModel):
    success: bool = True
    blogs: list[BlogSummaryResponse]


class BlogDetailResponse(BaseModel):
    id: int
    title: str
    content: str
    created_at: str


class BlogResponse(BaseModel):
    success: bool = True
    blog: BlogDetailResponse


# ---------------------------------------------------------------------------
# Conversion functions (dataclass -> Pydantic)
# ---------------------------------------------------------------------------


def snapshot_to_load_response(record: SnapshotRecord) -> LoadWatchlistResponse:
    """Convert the latest SnapshotRecord to the /load-watchlist response."""
    return LoadWatchlistResponse(
        data=record.data,
        count=len(record.data),
        metadata=record.metadata,
        snapshot_created=record.created_at,
    )


def snapshot_to_response(record: SnapshotRecord) -> SnapshotResponse:
    return SnapshotResponse(
        snapshot_id=record.id,
        data=record.data,
        metadata=record.metadata,
        created_at=record.created_at,
    )


def snapshot_info_to_response(info: SnapshotInfo) -> SnapshotItemResponse:
    return SnapshotItemResponse(id=info.id, name=info.name, metadata=info.metadata, created_at=info.created_at)


def blog_summary_to_response(summary: BlogSummary) -> BlogSummaryResponse:
    return BlogSummaryResponse(id=summary.id, title=summary.title, created_at=summary.created_at)


def blog_to_response(blog: Blog) -> BlogResponse:
    """Convert a Blog dataclass to the GET /blogs/{id} response."""
    return BlogResponse(
        blog=BlogDetailResponse(id=blog.id, title=blog.title, content=blog.content, created_at=blog.created_at)
    )
