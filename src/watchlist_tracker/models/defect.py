"""Validation defect model."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class DefectType(StrEnum):
    """Kind of validation defect."""

    MISSING_SELECTION = "missing-selection"
    MACRO_TREND = "macro-trend"


@dataclass(frozen=True)
class ValidationDefect:
    """One incomplete annotation on a non-skipped row.

    Attributes:
        symbol: Row symbol ("" when the row has none).
        column: Timeframe column (``Daily``) or trend group label (``Daily Macro Trend``).
        row_index: Position of the row in the underlying collection.
        type: Defect kind.
    """

    symbol: str
    column: str
    row_index: int
    type: DefectType

    def to_dict(self) -> dict[str, str | int]:
        return {
            "symbol": self.symbol,
            "column": self.column,
            "rowIndex": self.row_index,
            "type": str(self.type),
        }
