"""Category ordering for watchlist display.

Index ETFs come first, then sector ETFs, then everything else. Order within a
category is the original order of the collection.
"""

from __future__ import annotations

from collections.abc import Iterable
from enum import IntEnum

from watchlist_tracker.models.row import SYMBOL, Row

INDEX_ETFS: frozenset[str] = frozenset({"SPY", "QQQ", "VOO", "TQQQ"})
SECTOR_ETFS: frozenset[str] = frozenset(
    {"XLF", "XLE", "XLI", "XLU", "XLV", "XLP", "XLY", "XLC", "XLK", "XLRE"}
)


class Category(IntEnum):
    """Display group; lower values sort first."""

    INDEX_ETF = 0
    SECTOR_ETF = 1
    OTHER = 2


def category_of(row: Row) -> Category:
    """Classify a row by its upper-cased symbol."""
    symbol = str(row.get(SYMBOL) or "").upper()
    if symbol in INDEX_ETFS:
        return Category.INDEX_ETF
    if symbol in SECTOR_ETFS:
        return Category.SECTOR_ETF
    return Category.OTHER


def sort_by_category(rows: Iterable[Row]) -> list[Row]:
    """Return a new list ordered by category; ``sorted`` keeps ties in input order."""
    return sorted(rows, key=category_of)
