"""CLI entry point for watchlist-tracker."""

import typer

from watchlist_tracker import __version__
from watchlist_tracker.cli.commands import db_app, export_app, remote_app, sheet_app

app = typer.Typer(
    name="watchlist-tracker",
    help="Personal stock watchlist tracker",
)

# Register subcommands
app.add_typer(db_app, name="db")
app.add_typer(export_app, name="export")
app.add_typer(remote_app, name="remote")
app.add_typer(sheet_app, name="sheet")

try:
    from watchlist_tracker.cli.commands.api import api_app

    app.add_typer(api_app, name="api")
except ModuleNotFoundError:
    # [api] extra not installed
    pass


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"watchlist-tracker version {__version__}")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", help="Show version information"),
) -> None:
    """Personal stock watchlist tracker."""
    if version_flag:
        typer.echo(f"watchlist-tracker version {__version__}")
        raise typer.Exit()
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())


if __name__ == "__main__":
    app()
