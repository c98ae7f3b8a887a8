"""Unit tests for the `api serve` command and its optional registration."""

from __future__ import annotations

import importlib
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
import typer
from typer.testing import CliRunner

runner = CliRunner()


@pytest.mark.unit
class TestApiServe:
    @pytest.fixture(autouse=True)
    def _skip_if_no_fastapi(self) -> None:
        pytest.importorskip("fastapi")

    def test_serve_runs_uvicorn_with_workspace_db(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        from watchlist_tracker.cli.main import app

        monkeypatch.setenv("WATCHLIST_WORKSPACE", str(tmp_path))
        with patch("watchlist_tracker.cli.commands.api.uvicorn.run") as mock_run:
            result = runner.invoke(app, ["api", "serve", "--port", "3100"])

        assert result.exit_code == 0, result.output
        assert f"Database location: {tmp_path / 'watchlist.db'}" in result.output
        mock_run.assert_called_once()
        assert mock_run.call_args.kwargs == {"host": "127.0.0.1", "port": 3100}
        assert (tmp_path / "watchlist.db").exists()

    def test_serve_uses_configured_db_filename(self, tmp_path: Path) -> None:
        from watchlist_tracker.cli.main import app

        (tmp_path / "configs").mkdir()
        (tmp_path / "configs" / "tracker.toml").write_text('[tracker]\ndb_filename = "custom.db"\n')
        with patch("watchlist_tracker.cli.commands.api.uvicorn.run"):
            result = runner.invoke(app, ["api", "serve", "--workspace", str(tmp_path)])

        assert result.exit_code == 0, result.output
        assert (tmp_path / "custom.db").exists()


@pytest.mark.unit
class TestCliWithoutFastapi:
    """CLI works normally when fastapi is not installed."""

    def test_api_subcommand_hidden_without_fastapi(self, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
        monkeypatch.setenv("WATCHLIST_WORKSPACE", str(tmp_path))

        saved_modules: dict[str, object] = {}
        for mod_name in list(sys.modules):
            if mod_name == "fastapi" or mod_name.startswith("fastapi."):
                saved_modules[mod_name] = sys.modules.pop(mod_name)
            if mod_name == "uvicorn" or mod_name.startswith("uvicorn."):
                saved_modules[mod_name] = sys.modules.pop(mod_name)

        # Force re-import of the CLI modules
        for mod_name in list(sys.modules):
            if "watchlist_tracker.cli" in mod_name or "watchlist_tracker.api" in mod_name:
                saved_modules[mod_name] = sys.modules.pop(mod_name)

        original_import = __import__

        def _mock_import(name: str, *args: object, **kwargs: object) -> object:
            if name in ("fastapi", "uvicorn") or name.startswith("fastapi.") or name.startswith("uvicorn."):
                raise ModuleNotFoundError(name=name)
            return original_import(name, *args, **kwargs)

        try:
            with patch("builtins.__import__", side_effect=_mock_import):
                main_mod = importlib.import_module("watchlist_tracker.cli.main")
                app_reloaded = main_mod.app

                result = runner.invoke(app_reloaded, ["--help"])
                assert result.exit_code == 0

                commands = typer.main.get_command(app_reloaded).commands  # type: ignore[attr-defined]
                assert "api" not in commands
                assert {"db", "export", "remote", "sheet", "version"} <= set(commands)
        finally:
            for mod_name in list(sys.modules):
                if "watchlist_tracker.cli" in mod_name or "watchlist_tracker.api" in mod_name:
                    sys.modules.pop(mod_name)
            sys.modules.update(saved_modules)  # type: ignore[arg-type]


@pytest.mark.unit
class TestVersion:
    def test_version_command(self) -> None:
        from watchlist_tracker import __version__
        from watchlist_tracker.cli.main import app

        result = runner.invoke(app, ["version"])
        assert result.exit_code == 0
        assert f"watchlist-tracker version {__version__}" in result.output

    def test_version_flag(self) -> None:
        from watchlist_tracker.cli.main import app

        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert "watchlist-tracker version" in result.output

    def test_no_command_prints_help(self) -> None:
        from watchlist_tracker.cli.main import app

        result = runner.invoke(app, [])
        assert "sheet" in result.output
