"""Income and outgoing line items.

A LineItemList always holds at least one row so there is always a row to
fill in, even when logically there are no items.
"""

from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any

from goalsheet.domain.amounts import normalize_amount, parse_amount
from goalsheet.domain.models import DecimalText

APPEND_WARNING = "Please enter an amount first"
REMOVE_LAST_WARNING = "At least one row is required"


@dataclass(frozen=True)
class LineItem:
    """Immutable labeled amount."""

    label: str = ""
    amount: DecimalText = DecimalText("")

    def to_dict(self) -> dict[str, str]:
        return {"label": self.label, "amount": self.amount}

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LineItem":
        """Build a line item from its persisted form.

        Missing or null fields become empty strings. Stored amounts are kept
        as written; they are only normalized when edited.
        """
        label = data.get("label")
        amount = data.get("amount")
        return cls(
            label="" if label is None else str(label),
            amount=DecimalText("" if amount is None else str(amount)),
        )


class LineItemList:
    """Ordered list of line items for one side of a sheet."""

    def __init__(self, items: list[LineItem] | None = None) -> None:
        self._items: list[LineItem] = list(items) if items else [LineItem()]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[LineItem]:
        return iter(self._items)

    def __getitem__(self, index: int) -> LineItem:
        return self._items[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LineItemList):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"LineItemList({self._items!r})"

    def append(self) -> str | None:
        """Append a blank row.

        Returns:
            Warning message if the last row has no amount yet (nothing is
            appended), otherwise None.
        """
        if not self._items[-1].amount:
            return APPEND_WARNING
        self._items.append(LineItem())
        return None

    def remove_at(self, index: int) -> str | None:
        """Remove the row at index.

        Args:
            index: Position of the row to remove.

        Returns:
            Warning message if this is the only row (nothing is removed),
            otherwise None.

        Raises:
            IndexError: If index is out of range.
        """
        if not -len(self._items) <= index < len(self._items):
            raise IndexError(f"line item index out of range: {index}")
        if len(self._items) == 1:
            return REMOVE_LAST_WARNING
        del self._items[index]
        return None

    def update_label(self, index: int, text: str) -> None:
        self._items[index] = replace(self._items[index], label=text)

    def update_amount(self, index: int, text: str) -> None:
        self._items[index] = replace(self._items[index], amount=normalize_amount(text))

    def total(self) -> float:
        """Sum all amounts, counting empty or malformed ones as 0."""
        return sum((parse_amount(item.amount) for item in self._items), 0.0)

    def copy(self) -> "LineItemList":
        return LineItemList(self._items)

    def to_list(self) -> list[dict[str, str]]:
        return [item.to_dict() for item in self._items]

    @classmethod
    def from_list(cls, data: Any) -> "LineItemList":
        """Build a list from its persisted form.

        Entries that are not objects are skipped. An empty or non-list value
        gives a single blank row.
        """
        if not isinstance(data, list):
            return cls()
        return cls([LineItem.from_dict(entry) for entry in data if isinstance(entry, dict)])
