"""Client-side persistence: local file cache and remote REST store."""

from watchlist_tracker.persistence.cache import (
    CACHE_HEADERS_KEY,
    CACHE_KEY,
    FileSlotStore,
    LocalCache,
    MemorySlotStore,
    SlotStore,
)
from watchlist_tracker.persistence.remote import DatabaseInfo, RemoteWatchlistClient, SaveResult

__all__ = [
    "CACHE_HEADERS_KEY",
    "CACHE_KEY",
    "DatabaseInfo",
    "FileSlotStore",
    "LocalCache",
    "MemorySlotStore",
    "RemoteWatchlistClient",
    "SaveResult",
    "SlotStore",
]
