"""Wildcard search and timeframe filters over the row collection."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, field

from watchlist_tracker.models.row import SYMBOL, Row, get_text


def compile_wildcard(query: str) -> re.Pattern[str]:
    """Compile a ``*`` wildcard query into an anchored, case-insensitive pattern.

    Every other character matches literally.
    """
    body = ".*".join(re.escape(part) for part in query.split("*"))
    return re.compile(f"^{body}$", re.IGNORECASE)


@dataclass(frozen=True)
class FilterCriteria:
    """Search text plus exact-match Daily/Weekly/Monthly filters."""

    query: str = ""
    daily: str = ""
    weekly: str = ""
    monthly: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "daily", self.daily.lower())
        object.__setattr__(self, "weekly", self.weekly.lower())
        object.__setattr__(self, "monthly", self.monthly.lower())

    @property
    def has_query(self) -> bool:
        return bool(self.query.strip())

    @property
    def is_empty(self) -> bool:
        return not self.has_query and not self.daily and not self.weekly and not self.monthly

    def timeframe_filters(self) -> dict[str, str]:
        return {"Daily": self.daily, "Weekly": self.weekly, "Monthly": self.monthly}


@dataclass
class FilterResult:
    """Rows to display and the header set derived from the first row.

    ``short_circuited`` is True when no criteria were set and the original
    collection was returned without running the match loop.
    """

    headers: list[str]
    rows: list[Row] = field(default_factory=list)
    short_circuited: bool = False


def row_matches(
    row: Row,
    headers: Sequence[str],
    pattern: re.Pattern[str] | None,
    criteria: FilterCriteria,
) -> bool:
    """Check one row against the search pattern and timeframe filters.

    Args:
        row: Row to test.
        headers: Fields searched by the pattern.
        pattern: Compiled query; ignored when the query is blank.
        criteria: Search criteria.
    """
    if criteria.has_query and pattern is not None:
        if not any(pattern.match(get_text(row, header)) for header in headers):
            return False

    for timeframe, wanted in criteria.timeframe_filters().items():
        if wanted and get_text(row, timeframe).lower() != wanted:
            return False

    return True


def filter_rows(rows: Sequence[Row], criteria: FilterCriteria) -> FilterResult:
    """Narrow the collection to matching rows, keeping collection order.

    Headers are always recomputed from the keys of the first row.
    """
    headers = list(rows[0].keys()) if rows else []

    if criteria.is_empty:
        return FilterResult(headers=headers, rows=list(rows), short_circuited=True)

    pattern = compile_wildcard(criteria.query)
    matched = [row for row in rows if row_matches(row, headers, pattern, criteria)]
    return FilterResult(headers=headers, rows=matched)


def suggest_symbols(rows: Sequence[Row], query: str) -> list[str]:
    """Unique symbols containing ``query`` (case-insensitive), sorted."""
    if not query.strip():
        return []
    needle = query.upper()
    symbols = {get_text(row, SYMBOL) for row in rows}
    return sorted(symbol for symbol in symbols if needle in symbol.upper())
