"""Watchlist state object and its transitions.

``WatchlistState`` owns the header list and the row collection. UI adapters
call its transitions; every field edit mutates the row in place and then
writes the whole table to the local cache.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import StrEnum
from pathlib import Path
from typing import Any

from watchlist_tracker.exceptions import ParseFailure, RemoteStoreError
from watchlist_tracker.ingest.csv_reader import parse_csv, read_csv_file
from watchlist_tracker.models.defect import ValidationDefect
from watchlist_tracker.models.row import (
    COMMENT,
    SELECTION_VALUES,
    SKIP,
    SYMBOL,
    Row,
    ensure_row_defaults,
    notes_field,
    timeframe_prefix,
    trend_field,
)
from watchlist_tracker.models.table import ParsedTable
from watchlist_tracker.persistence.cache import LocalCache
from watchlist_tracker.persistence.remote import RemoteWatchlistClient
from watchlist_tracker.watchlist.category import sort_by_category
from watchlist_tracker.watchlist.search import FilterCriteria, FilterResult, filter_rows, suggest_symbols
from watchlist_tracker.watchlist.validator import DefectSummary, describe_defects, summarize_defects, validate_rows

logger = logging.getLogger(__name__)

ConfirmOverride = Callable[[list[ValidationDefect], DefectSummary], bool]


class LoadSource(StrEnum):
    """Where the table came from at startup."""

    CACHE = "cache"
    CSV = "csv"
    EMPTY = "empty"


@dataclass
class SaveOutcome:
    """Result of a remote save attempt, with a user-facing message."""

    saved: bool
    message: str
    metadata: dict[str, Any] = field(default_factory=dict)
    defects: list[ValidationDefect] = field(default_factory=list)


@dataclass
class LoadOutcome:
    """Result of a remote load attempt, with a user-facing message."""

    loaded: bool
    message: str
    count: int = 0


class WatchlistState:
    """Header list + row collection with cache-backed transitions.

    Args:
        cache: Local cache written after every edit; None disables caching.
    """

    def __init__(self, cache: LocalCache | None = None) -> None:
        self.cache = cache
        self.headers: list[str] = []
        self.rows: list[Row] = []
        self._remote_busy = False

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def load_table(self, table: ParsedTable, *, persist: bool = True) -> None:
        """Replace the whole collection."""
        self.headers = list(table.headers)
        self.rows = table.data
        if persist:
            self._write_cache()

    def load_csv_text(self, text: str, *, persist: bool = True) -> None:
        """Parse CSV text and replace the collection.

        Raises:
            CsvParseError: If the text has no header line; state is left unchanged.
        """
        self.load_table(parse_csv(text), persist=persist)

    def bootstrap(self, default_csv: Path | None = None) -> LoadSource:
        """Load from the cache, falling back to the default CSV file.

        The default file is only read on a cache miss, and is not written back
        to the cache.
        """
        if self.cache is not None:
            try:
                cached = self.cache.load()
            except ParseFailure as e:
                logger.warning("Ignoring unreadable cache: %s", e)
                cached = None
            if cached is not None:
                self.load_table(cached, persist=False)
                return LoadSource.CACHE

        if default_csv is not None:
            try:
                self.load_table(read_csv_file(default_csv), persist=False)
                return LoadSource.CSV
            except ParseFailure as e:
                logger.warning("Could not load default CSV: %s", e)

        self.headers = []
        self.rows = []
        return LoadSource.EMPTY

    def clear(self) -> None:
        """Discard the collection and wipe the cache."""
        self.headers = []
        self.rows = []
        if self.cache is not None:
            self.cache.clear()

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    def display_rows(self, rows: list[Row] | None = None) -> list[Row]:
        """Rows in display order; default ``Skip`` is applied on first render."""
        source = self.rows if rows is None else rows
        for row in source:
            ensure_row_defaults(row)
        return sort_by_category(source)

    def validate(self) -> list[ValidationDefect]:
        return validate_rows(self.rows)

    def filter(self, criteria: FilterCriteria) -> FilterResult:
        """Filtered rows, sorted for display."""
        result = filter_rows(self.rows, criteria)
        result.rows = self.display_rows(result.rows)
        return result

    def suggestions(self, query: str) -> list[str]:
        return suggest_symbols(self.rows, query)

    def find_row(self, symbol: str) -> Row:
        """First row with the given symbol.

        Raises:
            KeyError: If no row carries the symbol.
        """
        for row in self.rows:
            if row.get(SYMBOL) == symbol:
                return row
        raise KeyError(symbol)

    # ------------------------------------------------------------------
    # Transitions
    # ------------------------------------------------------------------

    def _write_cache(self) -> None:
        """Best-effort cache write; failures are logged, never raised."""
        if self.cache is None:
            return
        try:
            self.cache.save(self.headers, self.rows)
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Cache write failed: %s", e)

    def set_field(self, symbol: str, field_name: str, value: Any) -> Row:
        row = self.find_row(symbol)
        row[field_name] = value
        self._write_cache()
        return row

    def set_selection(self, symbol: str, timeframe: str, value: str) -> Row:
        """Set the buy/sell/neutral call of one timeframe ("" clears it)."""
        timeframe_prefix(timeframe)
        normalized = value.lower()
        if normalized not in SELECTION_VALUES:
            raise ValueError(f"Invalid selection {value!r}; expected one of {SELECTION_VALUES}")
        return self.set_field(symbol, timeframe, normalized)

    def set_trend(self, symbol: str, timeframe: str, group: str, trend: str, checked: bool) -> Row:
        return self.set_field(symbol, trend_field(timeframe, group, trend), checked)

    def set_skip(self, symbol: str, skipped: bool) -> Row:
        return self.set_field(symbol, SKIP, "true" if skipped else "false")

    def set_notes(self, symbol: str, timeframe: str, html: str) -> Row:
        return self.set_field(symbol, notes_field(timeframe), html)

    def set_comment(self, symbol: str, text: str) -> Row:
        return self.set_field(symbol, COMMENT, text)

    # ------------------------------------------------------------------
    # Remote store
    # ------------------------------------------------------------------

    async def save_remote(
        self,
        client: RemoteWatchlistClient,
        confirm_override: ConfirmOverride,
    ) -> SaveOutcome:
        """Validate, optionally ask for an override, then save a snapshot."""
        if self._remote_busy:
            return SaveOutcome(saved=False, message="Another database request is in progress")
        if not self.rows:
            return SaveOutcome(saved=False, message="No data to save")

        defects = self.validate()
        if defects:
            summary = summarize_defects(defects)
            if not confirm_override(defects, summary):
                detail = describe_defects(summary)
                return SaveOutcome(
                    saved=False,
                    message=f"Cannot save: {detail}. Please review the errors above.",
                    defects=defects,
                )

        self._remote_busy = True
        try:
            result = await client.save(self.rows)
        except RemoteStoreError as e:
            logger.error("Save error: %s", e)
            return SaveOutcome(saved=False, message=f"Error: {e}", defects=defects)
        finally:
            self._remote_busy = False

        return SaveOutcome(saved=True, message=result.message, metadata=result.metadata, defects=defects)

    async def load_remote(self, client: RemoteWatchlistClient) -> LoadOutcome:
        """Replace the collection with the latest remote snapshot."""
        if self._remote_busy:
            return LoadOutcome(loaded=False, message="Another database request is in progress")

        self._remote_busy = True
        try:
            data = await client.load()
        except RemoteStoreError as e:
            logger.error("Load error: %s", e)
            return LoadOutcome(loaded=False, message=f"Error: {e}")
        finally:
            self._remote_busy = False

        if not data:
            return LoadOutcome(loaded=False, message="No data found in database")

        self.load_table(ParsedTable(headers=list(data[0].keys()), data=data))
        return LoadOutcome(loaded=True, message=f"Loaded {len(data)} records from database", count=len(data))
