"""Models package for watchlist-tracker."""

from watchlist_tracker.models.defect import DefectType, ValidationDefect
from watchlist_tracker.models.row import Row
from watchlist_tracker.models.table import ParsedTable
from watchlist_tracker.models.tracker_config import TrackerConfig

__all__ = [
    # Row and table models
    "ParsedTable",
    "Row",
    # Validation models
    "DefectType",
    "ValidationDefect",
    # Configuration models
    "TrackerConfig",
]
