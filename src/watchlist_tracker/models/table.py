"""Parsed table container shared by CSV ingest and the local cache."""

from __future__ import annotations

from dataclasses import dataclass, field

from watchlist_tracker.models.row import Row


@dataclass
class ParsedTable:
    """Header list plus row list.

    ``headers`` is the CSV round-trip order and always contains ``Comment``
    when produced by ingest. Rows may carry extra keys not in ``headers``.
    """

    headers: list[str]
    data: list[Row] = field(default_factory=list)
