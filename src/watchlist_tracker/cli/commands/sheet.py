"""Watchlist sheet CLI commands (validate, search, summary) on a CSV file."""

from __future__ import annotations

import logging
from datetime import datetime as dt
from pathlib import Path
from typing import Annotated

import typer

from watchlist_tracker.exceptions import CsvParseError
from watchlist_tracker.ingest.csv_reader import read_csv_file
from watchlist_tracker.models.row import SYMBOL, get_text
from watchlist_tracker.persistence.cache import FileSlotStore, LocalCache
from watchlist_tracker.utils.config import get_cache_dir, get_default_csv_path
from watchlist_tracker.watchlist.search import FilterCriteria
from watchlist_tracker.watchlist.state import LoadSource, WatchlistState
from watchlist_tracker.watchlist.summary import build_summary, render_markdown, symbol_preview
from watchlist_tracker.watchlist.validator import format_defect_report, summarize_defects

logger = logging.getLogger(__name__)

WORKSPACE_CSV_HELP = "Watchlist CSV file (default: $WATCHLIST_WORKSPACE cache, then its default CSV)"

sheet_app = typer.Typer(
    name="sheet",
    help="Inspect a watchlist CSV: validation, search and summary",
)


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.INFO if verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )


def load_workspace_state() -> WatchlistState:
    """Open the workspace watchlist: local cache first, then the default CSV."""
    try:
        cache = LocalCache(FileSlotStore(get_cache_dir()))
        default_csv = get_default_csv_path()
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    state = WatchlistState(cache=cache)
    source = state.bootstrap(default_csv)
    if source is LoadSource.EMPTY:
        typer.echo(f"Error: No cached watchlist and no readable {default_csv}", err=True)
        raise typer.Exit(code=1)
    logger.info("Loaded %d rows from %s", len(state.rows), source.value)
    return state


def load_state(csv_path: Path | None) -> WatchlistState:
    """Load a CSV (or the workspace watchlist) with display defaults applied."""
    if csv_path is None:
        state = load_workspace_state()
    else:
        try:
            table = read_csv_file(csv_path)
        except CsvParseError as e:
            typer.echo(f"Error: {e}", err=True)
            raise typer.Exit(code=1) from e
        state = WatchlistState()
        state.load_table(table, persist=False)

    # Applies the Skip default; the collection keeps its own order.
    state.display_rows()
    return state


@sheet_app.command("validate")
def validate(
    csv_path: Annotated[Path | None, typer.Argument(help=WORKSPACE_CSV_HELP)] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Report missing selections and Macro Trend checks.

    Exits with code 1 when any defect is found.
    """
    _setup_logging(verbose)
    state = load_state(csv_path)

    defects = state.validate()
    if not defects:
        typer.echo(f"{len(state.rows)} rows validated, no issues found")
        return

    summary = summarize_defects(defects)
    for line in format_defect_report(summary):
        typer.echo(line)
    typer.echo(
        f"\n{summary.missing_selection_count} missing selection(s), "
        f"{summary.macro_trend_count} missing Macro Trend(s)",
        err=True,
    )
    raise typer.Exit(code=1)


@sheet_app.command("search")
def search(
    csv_path: Annotated[Path, typer.Argument(help="Watchlist CSV file")],
    query: Annotated[str, typer.Argument(help="Search text; '*' matches any run of characters")] = "",
    daily: Annotated[
        str,
        typer.Option("--daily", help="Exact Daily selection (buy/sell/neutral)"),
    ] = "",
    weekly: Annotated[
        str,
        typer.Option("--weekly", help="Exact Weekly selection (buy/sell/neutral)"),
    ] = "",
    monthly: Annotated[
        str,
        typer.Option("--monthly", help="Exact Monthly selection (buy/sell/neutral)"),
    ] = "",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Filter rows by text or wildcard query and per-timeframe selection.

    Examples:
        watchlist-tracker sheet search watchlist.csv "AA*"
        watchlist-tracker sheet search watchlist.csv --daily buy --weekly sell
    """
    _setup_logging(verbose)
    state = load_state(csv_path)

    result = state.filter(FilterCriteria(query=query, daily=daily, weekly=weekly, monthly=monthly))
    for row in result.rows:
        typer.echo(f"{get_text(row, SYMBOL)}: {symbol_preview(row)}")
    typer.echo(f"{len(result.rows)} of {len(state.rows)} rows match", err=True)


@sheet_app.command("summary")
def summary(
    csv_path: Annotated[Path | None, typer.Argument(help=WORKSPACE_CSV_HELP)] = None,
    output: Annotated[
        str | None,
        typer.Option("--output", "-o", help="Output Markdown path (default: stdout)"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging"),
    ] = False,
) -> None:
    """Render the trade analysis summary of non-skipped symbols as Markdown."""
    _setup_logging(verbose)
    state = load_state(csv_path)

    markdown = render_markdown(build_summary(state.display_rows()), generated_at=dt.now())

    if output:
        out_path = Path(output)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(markdown, encoding="utf-8")
        typer.echo(f"Saved to {out_path}")
    else:
        typer.echo(markdown)
