"""Tabular export of the watchlist (CSV or Parquet) via polars."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

import polars as pl

from watchlist_tracker.models.row import Row, get_text

logger = logging.getLogger(__name__)


def export_columns(headers: Sequence[str], rows: Sequence[Row]) -> list[str]:
    """Header columns first, then any extra row keys in first-seen order."""
    columns = list(dict.fromkeys(header.strip() for header in headers))
    seen = set(columns)
    for row in rows:
        for key in row:
            if key not in seen:
                seen.add(key)
                columns.append(key)
    return columns


def rows_to_frame(headers: Sequence[str], rows: Sequence[Row]) -> pl.DataFrame:
    """Build a string-typed DataFrame; booleans become ``"true"``/``"false"``."""
    columns = export_columns(headers, rows)
    data = {column: [get_text(row, column) for row in rows] for column in columns}
    return pl.DataFrame(data, schema={column: pl.String for column in columns})


def write_table(frame: pl.DataFrame, path: Path) -> Path:
    """Write ``frame`` as CSV or Parquet depending on the file suffix.

    Raises:
        ValueError: If the suffix is neither ``.csv`` nor ``.parquet``.
    """
    suffix = path.suffix.lower()
    path.parent.mkdir(parents=True, exist_ok=True)
    if suffix == ".csv":
        frame.write_csv(path)
    elif suffix == ".parquet":
        frame.write_parquet(path)
    else:
        raise ValueError(f"Unsupported export format: {path.suffix!r} (use .csv or .parquet)")
    logger.info("Exported %d rows to %s", frame.height, path)
    return path
