"""Integration test for loading tracker config from TOML."""

import os
import shutil
from pathlib import Path
from unittest.mock import patch

import pytest

from watchlist_tracker.models import TrackerConfig
from watchlist_tracker.utils.config import (
    get_cache_dir,
    get_db_path,
    get_default_csv_path,
    load_tracker_config,
    resolve_config,
)


@pytest.mark.integration
class TestConfigLoading:
    """Test loading TrackerConfig from TOML file."""

    @pytest.fixture
    def tracker_toml_path(self) -> Path:
        """Path to test tracker.toml fixture."""
        return Path(__file__).parent.parent / "fixtures" / "tracker.toml"

    @pytest.fixture
    def workspace(self, tmp_path: Path, tracker_toml_path: Path) -> Path:
        """Workspace with configs/tracker.toml copied from the fixture."""
        (tmp_path / "configs").mkdir()
        shutil.copy(tracker_toml_path, tmp_path / "configs" / "tracker.toml")
        return tmp_path

    def test_load_from_explicit_path(self, tracker_toml_path: Path) -> None:
        config = load_tracker_config(tracker_toml_path)
        assert config is not None
        assert config.api_base_url == "http://127.0.0.1:3100/api"
        assert config.db_filename == "tracker.db"
        assert config.request_timeout == 12.5

    def test_load_from_workspace(self, workspace: Path) -> None:
        with patch.dict(os.environ, {"WATCHLIST_WORKSPACE": str(workspace)}):
            config = load_tracker_config()
            assert config is not None
            assert config.cache_dir == "state/cache"

            assert get_db_path() == workspace / "tracker.db"
            assert get_cache_dir() == workspace / "state" / "cache"
            assert get_default_csv_path() == workspace / "lists" / "watchlist.csv"

    def test_missing_workspace_returns_none(self) -> None:
        with patch.dict(os.environ, {}, clear=True):
            assert load_tracker_config() is None
            assert resolve_config() == TrackerConfig()

    def test_missing_file_returns_none(self, tmp_path: Path) -> None:
        assert load_tracker_config(tmp_path / "nope.toml") is None

    def test_missing_section_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "tracker.toml"
        path.write_text('[other]\nkey = "value"\n')
        assert load_tracker_config(path) is None

    def test_invalid_toml_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "tracker.toml"
        path.write_text("[tracker\nbroken")
        assert load_tracker_config(path) is None

    def test_schema_mismatch_returns_none(self, tmp_path: Path) -> None:
        path = tmp_path / "tracker.toml"
        path.write_text("[tracker]\nrequest_timeout = -1\n")
        assert load_tracker_config(path) is None

    def test_defaults_without_config(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"WATCHLIST_WORKSPACE": str(tmp_path)}):
            assert get_db_path() == tmp_path / "watchlist.db"
            assert get_default_csv_path() == tmp_path / "watchlist.csv"

    def test_explicit_config_wins(self, workspace: Path) -> None:
        with patch.dict(os.environ, {"WATCHLIST_WORKSPACE": str(workspace)}):
            assert get_db_path(TrackerConfig(db_filename="other.db")) == workspace / "other.db"
