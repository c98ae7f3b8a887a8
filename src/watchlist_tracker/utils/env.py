"""Environment variable utilities for watchlist-tracker."""

import os
from pathlib import Path

WORKSPACE_ENV = "WATCHLIST_WORKSPACE"


def get_workspace() -> Path:
    """Get workspace directory from WATCHLIST_WORKSPACE environment variable.

    Returns:
        Path to workspace directory

    Raises:
        ValueError: If WATCHLIST_WORKSPACE environment variable is not set or empty
    """
    workspace = os.environ.get(WORKSPACE_ENV, "").strip()
    if not workspace:
        raise ValueError(f"{WORKSPACE_ENV} environment variable is not set")
    return Path(workspace)


def get_configs_dir() -> Path:
    """Get configs directory path.

    Returns:
        Path to {workspace}/configs/ directory

    Raises:
        ValueError: If WATCHLIST_WORKSPACE environment variable is not set or empty
    """
    return get_workspace() / "configs"
