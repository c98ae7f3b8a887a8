"""Per-symbol previews and the trade analysis summary.

The summary lists non-skipped symbols with their timeframe calls, the Macro
Trend toggles, and cleaned notes. Rendering it to PDF is left to the caller;
``render_markdown`` gives a plain document.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime as dt

from watchlist_tracker.models.row import (
    MACRO_TREND,
    SMA200,
    SYMBOL,
    TIMEFRAMES,
    Row,
    active_trends,
    get_text,
    is_skipped,
    notes_field,
)
from watchlist_tracker.watchlist.notes import clean_notes_text

UNSELECTED = "Unselected"


def _capitalize(value: str) -> str:
    return value[:1].upper() + value[1:]


def timeframe_preview(row: Row, timeframe: str) -> str:
    """E.g. ``"Buy / EMA: bull, bear / SMA: Unselected"``."""
    selection = get_text(row, timeframe).strip()
    ema = [trend.lower() for trend in active_trends(row, timeframe, MACRO_TREND)]
    sma = [trend.lower() for trend in active_trends(row, timeframe, SMA200)]
    return (
        f"{_capitalize(selection) if selection else UNSELECTED}"
        f" / EMA: {', '.join(ema) if ema else UNSELECTED}"
        f" / SMA: {', '.join(sma) if sma else UNSELECTED}"
    )


def symbol_preview(row: Row) -> str:
    """One-line preview of all three timeframes."""
    return "  |  ".join(f"{timeframe}: {timeframe_preview(row, timeframe)}" for timeframe in TIMEFRAMES)


@dataclass
class SymbolSummary:
    """Summary entry for one non-skipped symbol."""

    symbol: str
    calls: dict[str, str] = field(default_factory=dict)
    macro_trend: str = ""
    notes: dict[str, str] = field(default_factory=dict)
    images: list[str] = field(default_factory=list)


def macro_trend_display(row: Row) -> str:
    """Daily EMA/SMA toggles as ``"Macro Trend: EMA: Bull; SMA: Bear"`` ("" when none)."""
    parts: list[str] = []
    ema = active_trends(row, "Daily", MACRO_TREND)
    sma = active_trends(row, "Daily", SMA200)
    if ema:
        parts.append(f"EMA: {', '.join(ema)}")
    if sma:
        parts.append(f"SMA: {', '.join(sma)}")
    return f"Macro Trend: {'; '.join(parts)}" if parts else ""


def build_summary(rows: Sequence[Row]) -> list[SymbolSummary]:
    """Summaries for non-skipped rows, in collection order."""
    summaries: list[SymbolSummary] = []
    for row in rows:
        if is_skipped(row):
            continue

        entry = SymbolSummary(symbol=get_text(row, SYMBOL) or "Unknown", macro_trend=macro_trend_display(row))
        for timeframe in TIMEFRAMES:
            selection = get_text(row, timeframe)
            if selection:
                entry.calls[timeframe] = _capitalize(selection)

            raw_notes = get_text(row, notes_field(timeframe))
            if raw_notes.strip():
                cleaned = clean_notes_text(raw_notes)
                entry.notes[timeframe] = cleaned.text
                entry.images.extend(cleaned.images)

        summaries.append(entry)
    return summaries


def render_markdown(summaries: Sequence[SymbolSummary], generated_at: dt) -> str:
    """Render summaries as a Markdown document."""
    lines = [
        "# Trade Analysis Summary",
        "",
        f"Generated: {generated_at:%Y-%m-%d %H:%M:%S}",
        "",
    ]

    if not summaries:
        lines.append("No symbols selected for export.")
        return "\n".join(lines) + "\n"

    for entry in summaries:
        lines.append(f"## {entry.symbol}")
        lines.append("")
        for timeframe, call in entry.calls.items():
            suffix = f" ({entry.macro_trend})" if entry.macro_trend else ""
            lines.append(f"- **{timeframe}**: {call}{suffix}")
        for timeframe, text in entry.notes.items():
            lines.append(f"- **{timeframe} Notes**: {text}")
        for src in entry.images:
            if not src.startswith("data:"):
                lines.append(f"  ![]({src})")
        lines.append("")

    return "\n".join(lines)
