"""CLI command modules."""

from watchlist_tracker.cli.commands.db import db_app
from watchlist_tracker.cli.commands.export import export_app
from watchlist_tracker.cli.commands.remote import remote_app
from watchlist_tracker.cli.commands.sheet import sheet_app

__all__ = ["db_app", "export_app", "remote_app", "sheet_app"]
