"""Domain models and calculations for goalsheet.

This package contains the functional core:
- No I/O operations
- Derived values computed from current state
- Easy to test
- Business logic separated from infrastructure
"""

from goalsheet.domain.amounts import format_currency, normalize_amount, parse_amount
from goalsheet.domain.line_items import LineItem, LineItemList
from goalsheet.domain.models import DecimalText, SheetName
from goalsheet.domain.sheet import GoalProjection, GoalStatus, SavingsSheet, SheetSnapshot

__all__ = [
    "DecimalText",
    "GoalProjection",
    "GoalStatus",
    "LineItem",
    "LineItemList",
    "SavingsSheet",
    "SheetName",
    "SheetSnapshot",
    "format_currency",
    "normalize_amount",
    "parse_amount",
]
