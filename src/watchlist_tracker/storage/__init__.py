"""SQLite storage for the REST backend."""

from watchlist_tracker.storage.blog_store import Blog, BlogStore, BlogSummary, StoredImage, extract_embedded_images
from watchlist_tracker.storage.watchlist_store import (
    SnapshotInfo,
    SnapshotRecord,
    SnapshotSaved,
    WatchlistStore,
    compute_snapshot_metadata,
)

__all__ = [
    "Blog",
    "BlogStore",
    "BlogSummary",
    "StoredImage",
    "extract_embedded_images",
    "SnapshotInfo",
    "SnapshotRecord",
    "SnapshotSaved",
    "WatchlistStore",
    "compute_snapshot_metadata",
]
