"""Remote store CLI commands: save and load snapshots through the REST backend."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer

from watchlist_tracker.cli.commands.sheet import load_state
from watchlist_tracker.exceptions import RemoteStoreError
from watchlist_tracker.ingest.csv_reader import to_csv_text
from watchlist_tracker.models.defect import ValidationDefect
from watchlist_tracker.models.tracker_config import TrackerConfig
from watchlist_tracker.persistence.remote import RemoteWatchlistClient
from watchlist_tracker.utils.config import load_tracker_config
from watchlist_tracker.watchlist.state import ConfirmOverride, WatchlistState
from watchlist_tracker.watchlist.validator import DefectSummary, format_defect_report

remote_app = typer.Typer(
    name="remote",
    help="Save and load watchlist snapshots on the REST backend",
)

BaseUrlOption = Annotated[
    str | None,
    typer.Option(
        "--base-url",
        envvar="WATCHLIST_API_URL",
        help="API base URL (default: tracker.toml or http://localhost:3000/api)",
    ),
]
VerboseOption = Annotated[
    bool,
    typer.Option("--verbose", "-v", help="Enable verbose logging"),
]


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def _make_client(base_url: str | None) -> RemoteWatchlistClient:
    config = load_tracker_config() or TrackerConfig()
    return RemoteWatchlistClient(base_url=base_url or config.api_base_url, timeout=config.request_timeout)


def _confirm_prompt(assume_yes: bool) -> ConfirmOverride:
    def confirm(defects: list[ValidationDefect], summary: DefectSummary) -> bool:
        typer.echo("Validation Errors Found:", err=True)
        for line in format_defect_report(summary):
            typer.echo(line, err=True)
        if assume_yes:
            return True
        return typer.confirm("Do you want to save anyway?", default=False)

    return confirm


@remote_app.command("save")
def save(
    csv_path: Annotated[Path, typer.Argument(help="Watchlist CSV file")],
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Save even when validation finds issues"),
    ] = False,
    base_url: BaseUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Validate a CSV and save it as a new snapshot."""
    _setup_logging(verbose)
    state = load_state(csv_path)

    async def _run() -> None:
        async with _make_client(base_url) as client:
            outcome = await state.save_remote(client, _confirm_prompt(yes))
        if not outcome.saved:
            typer.echo(outcome.message, err=True)
            raise typer.Exit(code=1)
        typer.echo(outcome.message)
        for key, value in outcome.metadata.items():
            typer.echo(f"  {key}: {value}")

    asyncio.run(_run())


@remote_app.command("load")
def load(
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output CSV path (default: stdout)"),
    ] = None,
    base_url: BaseUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Load the latest snapshot and write it as CSV."""
    _setup_logging(verbose)
    state = WatchlistState()

    async def _run() -> None:
        async with _make_client(base_url) as client:
            outcome = await state.load_remote(client)
        if not outcome.loaded:
            typer.echo(outcome.message, err=True)
            raise typer.Exit(code=1)

        csv_text = to_csv_text(state.headers, state.rows)
        if output:
            out_path = Path(output)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(csv_text, encoding="utf-8")
            typer.echo(f"Saved to {out_path}")
        else:
            typer.echo(csv_text, nl=False)
        typer.echo(outcome.message, err=True)

    asyncio.run(_run())


@remote_app.command("info")
def info(
    base_url: BaseUrlOption = None,
    verbose: VerboseOption = False,
) -> None:
    """Show the backend database path and table row counts."""
    _setup_logging(verbose)

    async def _run() -> None:
        async with _make_client(base_url) as client:
            try:
                db_info = await client.db_info()
            except RemoteStoreError as e:
                typer.echo(f"Error: {e}", err=True)
                raise typer.Exit(code=1) from e
        typer.echo(f"Database: {db_info.db_path}")
        for table, count in db_info.tables.items():
            typer.echo(f"  {table}: {count}")

    asyncio.run(_run())
