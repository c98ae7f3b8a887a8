"""Watchlist CSV ingest.

The watchlist CSV format is deliberately simple: comma-delimited, a mandatory
header line, no quoting. Cells are split on every literal comma, so a value can
never contain one.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from watchlist_tracker.exceptions import CsvParseError
from watchlist_tracker.models.row import COMMENT, Row
from watchlist_tracker.models.table import ParsedTable

logger = logging.getLogger(__name__)

_LINE_SPLIT = re.compile(r"\r?\n")


def parse_csv(text: str) -> ParsedTable:
    """Parse watchlist CSV text into headers and rows.

    Header tokens are kept as split (rows use the trimmed token as key), and a
    ``Comment`` header is appended when missing. Missing trailing cells read
    as ``""``; cells beyond the header count are dropped. Blank lines inside the
    body become all-empty rows.

    Args:
        text: Raw CSV text.

    Returns:
        ParsedTable with the header list and one dict per data line.

    Raises:
        CsvParseError: If the text has no header line.
    """
    stripped = text.strip()
    if not stripped:
        raise CsvParseError("CSV text is empty; a header line is required")

    lines = _LINE_SPLIT.split(stripped)
    headers = lines[0].split(",")
    if COMMENT not in headers:
        headers.append(COMMENT)

    data: list[Row] = []
    for line in lines[1:]:
        values = line.split(",")
        row: Row = {}
        for index, header in enumerate(headers):
            value = values[index] if index < len(values) else ""
            row[header.strip()] = value.strip()
        data.append(row)

    logger.debug("Parsed %d rows with %d columns", len(data), len(headers))
    return ParsedTable(headers=headers, data=data)


def read_csv_file(path: Path) -> ParsedTable:
    """Read and parse a watchlist CSV file.

    Args:
        path: CSV file path.

    Returns:
        Parsed table.

    Raises:
        CsvParseError: If the file cannot be read or has no header line.
    """
    try:
        text = path.read_text(encoding="utf-8-sig")
    except OSError as e:
        raise CsvParseError(f"Cannot read CSV file {path}: {e}") from e
    return parse_csv(text)


def to_csv_text(headers: list[str], rows: list[Row]) -> str:
    """Serialize rows back to the watchlist CSV format (header columns only).

    Commas and newlines inside values are replaced by spaces, since the format
    has no quoting.
    """
    keys = [header.strip() for header in headers]
    lines = [",".join(keys)]
    for row in rows:
        cells = []
        for key in keys:
            value = row.get(key)
            if value is None:
                cell = ""
            elif isinstance(value, bool):
                cell = "true" if value else "false"
            else:
                cell = str(value)
            cells.append(re.sub(r"[,\r\n]+", " ", cell))
        lines.append(",".join(cells))
    return "\n".join(lines) + "\n"
