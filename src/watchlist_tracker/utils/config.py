"""Configuration loading utilities for watchlist-tracker."""

import logging
import tomllib
from pathlib import Path

from pydantic import ValidationError

from watchlist_tracker.models.tracker_config import TrackerConfig
from watchlist_tracker.utils.env import get_configs_dir, get_workspace

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "tracker.toml"


def load_tracker_config(config_path: Path | None = None) -> TrackerConfig | None:
    """Load TrackerConfig from TOML file.

    Args:
        config_path: Optional path to tracker.toml.
            If None, uses default path: $WATCHLIST_WORKSPACE/configs/tracker.toml

    Returns:
        TrackerConfig if file exists and is valid, None otherwise.

    Note:
        This function does not raise exceptions for missing files or invalid config.
        It returns None to allow callers to fall back to default behavior.
    """
    if config_path is None:
        try:
            config_path = get_configs_dir() / CONFIG_FILENAME
        except ValueError:
            # WATCHLIST_WORKSPACE not set
            return None

    if not config_path.exists():
        return None

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)

        tracker_data = data.get("tracker")
        if tracker_data is None:
            return None

        return TrackerConfig.model_validate(tracker_data)
    except (OSError, tomllib.TOMLDecodeError, ValidationError) as e:
        logger.warning("Ignoring invalid config %s: %s", config_path, e)
        return None


def resolve_config(config: TrackerConfig | None = None) -> TrackerConfig:
    """Return the given config, the workspace config, or defaults."""
    if config is not None:
        return config
    return load_tracker_config() or TrackerConfig()


def get_db_path(config: TrackerConfig | None = None) -> Path:
    """Get SQLite database path ({workspace}/{db_filename}).

    Raises:
        ValueError: If WATCHLIST_WORKSPACE is not set.
    """
    return get_workspace() / resolve_config(config).db_filename


def get_cache_dir(config: TrackerConfig | None = None) -> Path:
    """Get local cache directory ({workspace}/{cache_dir}).

    Raises:
        ValueError: If WATCHLIST_WORKSPACE is not set.
    """
    return get_workspace() / resolve_config(config).cache_dir


def get_default_csv_path(config: TrackerConfig | None = None) -> Path:
    """Get the CSV file used on a cache miss ({workspace}/{default_csv}).

    Raises:
        ValueError: If WATCHLIST_WORKSPACE is not set.
    """
    return get_workspace() / resolve_config(config).default_csv
