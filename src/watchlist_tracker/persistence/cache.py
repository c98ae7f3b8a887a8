"""Local file cache for the watchlist table.

The table is stored in two keyed slots, one for the header list and one for
the rows. Both slots are needed for a cache hit. There is no versioning: rows
written by an older schema simply lack newer fields.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from watchlist_tracker.exceptions import CacheReadError
from watchlist_tracker.models.row import Row
from watchlist_tracker.models.table import ParsedTable

logger = logging.getLogger(__name__)

CACHE_KEY = "watchlistData"
CACHE_HEADERS_KEY = "watchlistHeaders"


class SlotStore(Protocol):
    """String key/value slots."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemorySlotStore:
    """In-process slot store."""

    def __init__(self) -> None:
        self._slots: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)


class FileSlotStore:
    """Slot store keeping one ``<key>.json`` file per slot in a directory."""

    def __init__(self, directory: Path) -> None:
        self.directory = directory

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise CacheReadError(f"Cache slot {path} is not valid UTF-8: {e}") from e

    def set(self, key: str, value: str) -> None:
        self.directory.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def delete(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


class LocalCache:
    """Whole-table cache over a SlotStore.

    Usage:
        cache = LocalCache(FileSlotStore(Path("workspace/cache")))
        cache.save(headers, rows)
        table = cache.load()
    """

    def __init__(
        self,
        store: SlotStore,
        data_key: str = CACHE_KEY,
        headers_key: str = CACHE_HEADERS_KEY,
    ) -> None:
        self.store = store
        self.data_key = data_key
        self.headers_key = headers_key

    def save(self, headers: list[str], rows: list[Row]) -> None:
        """Overwrite both slots with the current table."""
        self.store.set(self.data_key, json.dumps(rows, ensure_ascii=False))
        self.store.set(self.headers_key, json.dumps(headers, ensure_ascii=False))

    def load(self) -> ParsedTable | None:
        """Return the cached table, or None unless both slots are present.

        Raises:
            CacheReadError: If a slot does not hold the expected JSON shape.
        """
        raw_data = self.store.get(self.data_key)
        raw_headers = self.store.get(self.headers_key)
        if not raw_data or not raw_headers:
            return None

        try:
            data = json.loads(raw_data)
            headers = json.loads(raw_headers)
        except json.JSONDecodeError as e:
            raise CacheReadError(f"Cached watchlist is not valid JSON: {e}") from e

        if not isinstance(data, list) or not isinstance(headers, list):
            raise CacheReadError("Cached watchlist has an unexpected shape")
        if not all(isinstance(row, dict) for row in data):
            raise CacheReadError("Cached watchlist rows must be JSON objects")
        if not all(isinstance(header, str) for header in headers):
            raise CacheReadError("Cached watchlist headers must be strings")

        return ParsedTable(headers=headers, data=data)

    def clear(self) -> None:
        """Remove both slots."""
        self.store.delete(self.data_key)
        self.store.delete(self.headers_key)
        logger.info("Local cache cleared")
