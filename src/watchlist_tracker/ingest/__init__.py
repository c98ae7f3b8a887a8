"""CSV ingest for watchlist tables."""

from watchlist_tracker.ingest.csv_reader import parse_csv, read_csv_file, to_csv_text

__all__ = ["parse_csv", "read_csv_file", "to_csv_text"]
