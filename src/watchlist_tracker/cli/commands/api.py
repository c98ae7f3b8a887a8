"""API server CLI commands.

This module imports fastapi and uvicorn at module level.
If [api] extra is not installed, the import of this module will fail
with ModuleNotFoundError, which is caught in main.py to gracefully
hide the `api` subcommand.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated

import typer
import uvicorn

from watchlist_tracker.api.app import create_app
from watchlist_tracker.models.tracker_config import TrackerConfig
from watchlist_tracker.utils.config import load_tracker_config

api_app = typer.Typer(name="api", help="API server management")


@api_app.command("serve")
def serve(
    workspace: Annotated[
        str,
        typer.Option(
            "--workspace",
            "-w",
            envvar="WATCHLIST_WORKSPACE",
            help="Workspace path (or set WATCHLIST_WORKSPACE env var)",
        ),
    ],
    host: Annotated[
        str,
        typer.Option("--host", help="Bind host"),
    ] = "127.0.0.1",
    port: Annotated[
        int,
        typer.Option("--port", help="Bind port"),
    ] = 3000,
) -> None:
    """Start the watchlist/blog API server."""
    ws = Path(workspace)
    config = load_tracker_config(ws / "configs" / "tracker.toml") or TrackerConfig()
    db_path = ws / config.db_filename

    app = create_app(db_path=db_path)
    typer.echo(f"Database location: {db_path}")
    uvicorn.run(app, host=host, port=port)
