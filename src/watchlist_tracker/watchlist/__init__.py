"""Watchlist core: ordering, validation, search, state and summaries."""

from watchlist_tracker.watchlist.category import Category, category_of, sort_by_category
from watchlist_tracker.watchlist.search import (
    FilterCriteria,
    FilterResult,
    compile_wildcard,
    filter_rows,
    row_matches,
    suggest_symbols,
)
from watchlist_tracker.watchlist.state import LoadOutcome, LoadSource, SaveOutcome, WatchlistState
from watchlist_tracker.watchlist.validator import DefectSummary, summarize_defects, validate_rows

__all__ = [
    "Category",
    "DefectSummary",
    "FilterCriteria",
    "FilterResult",
    "LoadOutcome",
    "LoadSource",
    "SaveOutcome",
    "WatchlistState",
    "category_of",
    "compile_wildcard",
    "filter_rows",
    "row_matches",
    "sort_by_category",
    "suggest_symbols",
    "summarize_defects",
    "validate_rows",
]
