"""Unit tests for polars table export."""

from pathlib import Path

import polars as pl
import pytest

from watchlist_tracker.watchlist.export import export_columns, rows_to_frame, write_table


@pytest.fixture
def rows() -> list[dict[str, object]]:
    return [
        {"Symbol": "SPY", "Daily": "buy", "MacroTrendBull": True, "Comment": ""},
        {"Symbol": "AAPL", "Daily": "", "Comment": "earnings", "DailyNotes": "<p>x</p>"},
    ]


@pytest.mark.unit
class TestExportColumns:
    def test_headers_then_extra_keys(self, rows: list[dict[str, object]]) -> None:
        assert export_columns(["Symbol", "Daily", "Comment"], rows) == [
            "Symbol",
            "Daily",
            "Comment",
            "MacroTrendBull",
            "DailyNotes",
        ]

    def test_header_tokens_trimmed_and_unique(self) -> None:
        assert export_columns([" Symbol", "Symbol "], []) == ["Symbol"]


@pytest.mark.unit
class TestRowsToFrame:
    def test_string_frame(self, rows: list[dict[str, object]]) -> None:
        frame = rows_to_frame(["Symbol", "Daily", "Comment"], rows)
        assert frame.height == 2
        assert all(dtype == pl.String for dtype in frame.dtypes)
        assert frame["MacroTrendBull"].to_list() == ["true", ""]
        assert frame["DailyNotes"].to_list() == ["", "<p>x</p>"]


@pytest.mark.unit
class TestWriteTable:
    def test_csv(self, tmp_path: Path, rows: list[dict[str, object]]) -> None:
        frame = rows_to_frame(["Symbol", "Daily", "Comment"], rows)
        path = write_table(frame, tmp_path / "out" / "watchlist.csv")
        assert path.exists()
        assert pl.read_csv(path)["Symbol"].to_list() == ["SPY", "AAPL"]

    def test_parquet(self, tmp_path: Path, rows: list[dict[str, object]]) -> None:
        frame = rows_to_frame(["Symbol"], rows)
        path = write_table(frame, tmp_path / "watchlist.parquet")
        assert pl.read_parquet(path).equals(frame)

    def test_unsupported_suffix(self, tmp_path: Path, rows: list[dict[str, object]]) -> None:
        frame = rows_to_frame(["Symbol"], rows)
        with pytest.raises(ValueError, match="Unsupported export format"):
            write_table(frame, tmp_path / "watchlist.xlsx")
