"""Watchlist completeness validation.

Rules per non-skipped row, in this order:

1. Each of Daily / Weekly / Monthly must hold a selection.
2. A Daily selection needs at least one Daily Macro Trend toggle.
3. A Weekly selection needs at least one Weekly Macro Trend toggle.

Monthly selections are not checked for a Macro Trend.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from watchlist_tracker.models.defect import DefectType, ValidationDefect
from watchlist_tracker.models.row import (
    MACRO_TREND,
    SYMBOL,
    TIMEFRAMES,
    TREND_NAMES,
    Row,
    get_text,
    is_flag_set,
    is_skipped,
    trend_field,
)

# (timeframe, defect column) pairs that require a Macro Trend toggle
MACRO_TREND_CHECKS: tuple[tuple[str, str], ...] = (
    ("Daily", "Daily Macro Trend"),
    ("Weekly", "Weekly Macro Trend"),
)


def _has_macro_trend(row: Row, timeframe: str) -> bool:
    return any(is_flag_set(row.get(trend_field(timeframe, MACRO_TREND, trend))) for trend in TREND_NAMES)


def validate_rows(rows: Sequence[Row]) -> list[ValidationDefect]:
    """Collect defects for every non-skipped row.

    Args:
        rows: The underlying row collection (not the display order).

    Returns:
        Defects in row order, then rule order within a row.
    """
    defects: list[ValidationDefect] = []

    for index, row in enumerate(rows):
        if is_skipped(row):
            continue

        symbol = get_text(row, SYMBOL)

        for timeframe in TIMEFRAMES:
            if not get_text(row, timeframe).strip():
                defects.append(ValidationDefect(symbol, timeframe, index, DefectType.MISSING_SELECTION))

        for timeframe, column in MACRO_TREND_CHECKS:
            if get_text(row, timeframe).strip() and not _has_macro_trend(row, timeframe):
                defects.append(ValidationDefect(symbol, column, index, DefectType.MACRO_TREND))

    return defects


@dataclass
class DefectSummary:
    """Defects grouped for display.

    Attributes:
        missing_selection: Symbol -> missing timeframe columns, first-seen order.
        macro_trend: Symbol -> trend group labels lacking a toggle.
    """

    missing_selection: dict[str, list[str]] = field(default_factory=dict)
    macro_trend: dict[str, list[str]] = field(default_factory=dict)
    missing_selection_count: int = 0
    macro_trend_count: int = 0

    @property
    def total(self) -> int:
        return self.missing_selection_count + self.macro_trend_count

    @property
    def symbols(self) -> list[str]:
        """Unique affected symbols, first-seen order."""
        seen = dict.fromkeys(self.missing_selection)
        seen.update(dict.fromkeys(self.macro_trend))
        return list(seen)


def summarize_defects(defects: Sequence[ValidationDefect]) -> DefectSummary:
    """Group defects by type and symbol."""
    summary = DefectSummary()
    for defect in defects:
        if defect.type is DefectType.MISSING_SELECTION:
            summary.missing_selection.setdefault(defect.symbol, []).append(defect.column)
            summary.missing_selection_count += 1
        else:
            summary.macro_trend.setdefault(defect.symbol, []).append(defect.column)
            summary.macro_trend_count += 1
    return summary


def describe_defects(summary: DefectSummary) -> str:
    """Short count text, e.g. ``"2 missing selection(s), 1 missing Macro Trend(s)"``."""
    parts: list[str] = []
    if summary.missing_selection_count:
        parts.append(f"{summary.missing_selection_count} missing selection(s)")
    if summary.macro_trend_count:
        parts.append(f"{summary.macro_trend_count} missing Macro Trend(s)")
    return ", ".join(parts)


def format_defect_report(summary: DefectSummary) -> list[str]:
    """Render grouped defects as display lines."""
    lines: list[str] = []
    if summary.missing_selection:
        lines.append("Missing Selections:")
        for symbol, columns in summary.missing_selection.items():
            lines.append(f"  {symbol}: {', '.join(columns)}")
    if summary.macro_trend:
        lines.append("Missing Macro Trend Selection:")
        for symbol, columns in summary.macro_trend.items():
            lines.append(f"  {symbol}: {', '.join(columns)} (Bull, Bear, or Tumbling must be selected)")
    return lines
