"""Utility functions for watchlist-tracker."""

from watchlist_tracker.utils.config import (
    get_cache_dir,
    get_db_path,
    get_default_csv_path,
    load_tracker_config,
    resolve_config,
)
from watchlist_tracker.utils.env import get_configs_dir, get_workspace

__all__ = [
    "get_cache_dir",
    "get_configs_dir",
    "get_db_path",
    "get_default_csv_path",
    "get_workspace",
    "load_tracker_config",
    "resolve_config",
]
