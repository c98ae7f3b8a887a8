"""Export CLI commands.

Writes a watchlist CSV out as a normalized CSV or Parquet table via polars.
"""

from pathlib import Path

import typer

from watchlist_tracker.cli.commands.sheet import load_state
from watchlist_tracker.watchlist.export import rows_to_frame, write_table

export_app = typer.Typer(
    name="export",
    help="Table export commands",
)


@export_app.command("table")
def export_table(
    csv_path: Path = typer.Argument(..., help="Watchlist CSV file"),
    output: Path = typer.Option(
        ...,
        "--output",
        "-o",
        help="Output file (.csv or .parquet)",
    ),
) -> None:
    """Export the watchlist, in display order, with every trend and notes column."""
    state = load_state(csv_path)

    try:
        frame = rows_to_frame(state.headers, state.rows)
        path = write_table(frame, output)
    except (ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e

    typer.echo(f"Exported {frame.height} rows to {path}")
