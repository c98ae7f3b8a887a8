"""Database management CLI commands.

Initializes the SQLite schema used by the REST backend.
"""

from pathlib import Path

import typer

db_app = typer.Typer(
    name="db",
    help="Database management commands",
)


@db_app.command("init")
def init_db(
    workspace: Path | None = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Workspace path (default: $WATCHLIST_WORKSPACE)",
    ),
) -> None:
    """Initialize the SQLite schema.

    Creates the snapshot, symbol, history, blog and image tables.
    Existing tables are left untouched (idempotent).
    """
    from watchlist_tracker.models.tracker_config import TrackerConfig
    from watchlist_tracker.storage import BlogStore, WatchlistStore
    from watchlist_tracker.utils.config import get_db_path, load_tracker_config

    try:
        if workspace is None:
            db_path = get_db_path()
        else:
            config = load_tracker_config(workspace / "configs" / "tracker.toml") or TrackerConfig()
            db_path = workspace / config.db_filename

        WatchlistStore(db_path).initialize_schema()
        BlogStore(db_path).initialize_schema()

        typer.echo(f"Database initialized: {db_path}")
    except (ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e
