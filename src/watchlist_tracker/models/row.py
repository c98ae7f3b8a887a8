"""Watchlist row schema helpers.

A row is a plain ``dict`` keyed by field name. Timeframe calls and notes are
strings, trend toggles are booleans (or the string ``"true"`` when they come
back from CSV/JSON), and any extra CSV columns pass through untouched.

Readers never raise on a missing key: absence is treated as empty/false.
"""

from __future__ import annotations

from typing import Any, TypeAlias

Row: TypeAlias = dict[str, Any]

SYMBOL = "Symbol"
SKIP = "Skip"
COMMENT = "Comment"

TIMEFRAMES: tuple[str, ...] = ("Daily", "Weekly", "Monthly")
SELECTION_VALUES: tuple[str, ...] = ("", "buy", "sell", "neutral")

MACRO_TREND = "MacroTrend"
SMA200 = "SMA200"
TREND_GROUPS: tuple[str, ...] = (MACRO_TREND, SMA200)
TREND_NAMES: tuple[str, ...] = ("Bull", "Bear", "Tumbling")


def timeframe_prefix(timeframe: str) -> str:
    """Field-name prefix for a timeframe (Daily fields carry no prefix)."""
    if timeframe not in TIMEFRAMES:
        raise ValueError(f"Unknown timeframe: {timeframe!r}")
    return "" if timeframe == "Daily" else timeframe


def trend_field(timeframe: str, group: str, trend: str) -> str:
    """Build a trend toggle field name, e.g. ``WeeklySMA200Bear``."""
    if group not in TREND_GROUPS:
        raise ValueError(f"Unknown trend group: {group!r}")
    if trend not in TREND_NAMES:
        raise ValueError(f"Unknown trend: {trend!r}")
    return f"{timeframe_prefix(timeframe)}{group}{trend}"


def notes_field(timeframe: str) -> str:
    """Rich-text notes field for a timeframe, e.g. ``DailyNotes``."""
    timeframe_prefix(timeframe)
    return f"{timeframe}Notes"


def all_trend_fields() -> list[str]:
    """All 18 trend toggle field names."""
    return [
        trend_field(timeframe, group, trend)
        for timeframe in TIMEFRAMES
        for group in TREND_GROUPS
        for trend in TREND_NAMES
    ]


def is_flag_set(value: Any) -> bool:
    """Return True for a toggled-on value (``True`` or ``"true"``)."""
    return value is True or value == "true"


def get_text(row: Row, field: str) -> str:
    """Read a field as text; missing/None reads as ``""``."""
    value = row.get(field)
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def is_skipped(row: Row) -> bool:
    """Return True if the row is excluded from validation and summaries."""
    return is_flag_set(row.get(SKIP))


def ensure_row_defaults(row: Row) -> Row:
    """Default ``Skip`` to ``"true"`` when absent or falsy. Mutates in place."""
    if not row.get(SKIP):
        row[SKIP] = "true"
    return row


def active_trends(row: Row, timeframe: str, group: str) -> list[str]:
    """Names of the toggled-on trends of one group, in Bull/Bear/Tumbling order."""
    return [trend for trend in TREND_NAMES if is_flag_set(row.get(trend_field(timeframe, group, trend)))]


__all__ = [
    "COMMENT",
    "MACRO_TREND",
    "Row",
    "SELECTION_VALUES",
    "SKIP",
    "SMA200",
    "SYMBOL",
    "TIMEFRAMES",
    "TREND_GROUPS",
    "TREND_NAMES",
    "active_trends",
    "all_trend_fields",
    "ensure_row_defaults",
    "get_text",
    "is_flag_set",
    "is_skipped",
    "notes_field",
    "timeframe_prefix",
    "trend_field",
]
