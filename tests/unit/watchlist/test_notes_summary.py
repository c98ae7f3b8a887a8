"""Unit tests for notes binding, notes cleanup and the trade summary."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime

import pytest

from watchlist_tracker.watchlist.notes import NotesBinding, clean_notes_text
from watchlist_tracker.watchlist.state import WatchlistState
from watchlist_tracker.watchlist.summary import (
    build_summary,
    macro_trend_display,
    render_markdown,
    symbol_preview,
    timeframe_preview,
)


class _FakeWidget:
    """Minimal rich-text editor."""

    def __init__(self) -> None:
        self.content = ""
        self.callbacks: list[Callable[[], None]] = []

    def get_content(self) -> str:
        return self.content

    def set_content(self, html: str) -> None:
        self.content = html

    def on_change(self, callback: Callable[[], None]) -> None:
        self.callbacks.append(callback)

    def type(self, html: str) -> None:
        self.content = html
        for callback in self.callbacks:
            callback()


@pytest.mark.unit
class TestNotesBinding:
    def test_initial_content_and_edit(self) -> None:
        state = WatchlistState()
        state.load_csv_text("Symbol,WeeklyNotes\nAAPL,<b>old</b>\n", persist=False)
        widget = _FakeWidget()

        NotesBinding(state, "AAPL", "Weekly", widget)
        assert widget.content == "<b>old</b>"

        widget.type("<p>new idea</p>")
        assert state.find_row("AAPL")["WeeklyNotes"] == "<p>new idea</p>"

    def test_missing_notes_start_empty(self) -> None:
        state = WatchlistState()
        state.load_csv_text("Symbol\nAAPL\n", persist=False)
        widget = _FakeWidget()
        NotesBinding(state, "AAPL", "Daily", widget)
        assert widget.content == ""


@pytest.mark.unit
class TestCleanNotesText:
    def test_paragraphs_become_sentences(self) -> None:
        cleaned = clean_notes_text("<p>Strong support</p><p>Breakout!</p>")
        assert cleaned.text == "Strong support. Breakout!"

    def test_line_breaks_and_spacing(self) -> None:
        cleaned = clean_notes_text("Gap up<br>Volume high.<br/>Watch")
        assert cleaned.text == "Gap up. Volume high. Watch."

    def test_images_collected(self) -> None:
        html = '<p>Chart</p><p><img src="/api/images/3"></p>'
        cleaned = clean_notes_text(html)
        assert cleaned.images == ["/api/images/3"]
        assert cleaned.text == "Chart."

    @pytest.mark.parametrize("html", [None, ""])
    def test_empty(self, html: str | None) -> None:
        assert clean_notes_text(html).text == ""


@pytest.mark.unit
class TestPreviews:
    def test_timeframe_preview(self) -> None:
        row = {"Weekly": "buy", "WeeklyMacroTrendBull": True, "WeeklyMacroTrendBear": "true"}
        assert timeframe_preview(row, "Weekly") == "Buy / EMA: bull, bear / SMA: Unselected"

    def test_unselected(self) -> None:
        assert timeframe_preview({}, "Daily") == "Unselected / EMA: Unselected / SMA: Unselected"

    def test_symbol_preview(self) -> None:
        preview = symbol_preview({"Daily": "sell"})
        assert preview.startswith("Daily: Sell / EMA")
        assert preview.count("  |  ") == 2

    def test_macro_trend_display(self) -> None:
        assert macro_trend_display({"MacroTrendBull": True, "SMA200Bear": "true"}) == (
            "Macro Trend: EMA: Bull; SMA: Bear"
        )
        assert macro_trend_display({}) == ""


@pytest.mark.unit
class TestSummary:
    def _rows(self) -> list[dict[str, object]]:
        return [
            {"Symbol": "SPY", "Skip": "true", "Daily": "buy"},
            {
                "Symbol": "AAPL",
                "Skip": "false",
                "Daily": "buy",
                "Monthly": "neutral",
                "MacroTrendBull": True,
                "DailyNotes": "<p>Earnings next week</p>",
            },
        ]

    def test_skipped_rows_excluded(self) -> None:
        summaries = build_summary(self._rows())
        assert [s.symbol for s in summaries] == ["AAPL"]
        entry = summaries[0]
        assert entry.calls == {"Daily": "Buy", "Monthly": "Neutral"}
        assert entry.macro_trend == "Macro Trend: EMA: Bull"
        assert entry.notes == {"Daily": "Earnings next week."}

    def test_render_markdown(self) -> None:
        markdown = render_markdown(build_summary(self._rows()), datetime(2025, 1, 31, 9, 30, 0))
        assert markdown.startswith("# Trade Analysis Summary\n\nGenerated: 2025-01-31 09:30:00\n")
        assert "## AAPL" in markdown
        assert "- **Daily**: Buy (Macro Trend: EMA: Bull)" in markdown
        assert "- **Daily Notes**: Earnings next week." in markdown
        assert "SPY" not in markdown

    def test_render_empty(self) -> None:
        markdown = render_markdown([], datetime(2025, 1, 31))
        assert "No symbols selected for export." in markdown
