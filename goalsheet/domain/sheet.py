"""Savings sheet model and goal projection.

This module contains the functional core for sheets:
- No I/O operations (no database, no console, no files)
- Derived values are recomputed from current state on every read
- Easy to test

Amounts are floats in pounds; the canonical decimal strings are only
parsed when a derived value is read.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from goalsheet.domain.amounts import format_currency, normalize_amount, parse_amount
from goalsheet.domain.line_items import LineItemList
from goalsheet.domain.models import DecimalText, SheetName


class GoalStatus(Enum):
    """Where a sheet stands relative to its goal."""

    NO_GOAL = "no_goal"
    REACHED = "reached"
    ON_TRACK = "on_track"
    UNREACHABLE = "unreachable"


@dataclass(frozen=True)
class GoalProjection:
    """Immutable snapshot of a sheet's derived values."""

    total_income: float
    total_outgoings: float
    difference: float
    goal: float
    current_balance: float
    needed: float
    status: GoalStatus
    months_to_goal: int | None  # Only set when ON_TRACK


@dataclass
class SheetSnapshot:
    """Persisted form of a sheet. The name is the registry key."""

    goal: DecimalText
    current_balance: DecimalText
    incomes: LineItemList
    outgoings: LineItemList

    def copy(self) -> "SheetSnapshot":
        return SheetSnapshot(
            goal=self.goal,
            current_balance=self.current_balance,
            incomes=self.incomes.copy(),
            outgoings=self.outgoings.copy(),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "goal": self.goal,
            "currentBalance": self.current_balance,
            "incomes": self.incomes.to_list(),
            "outgoings": self.outgoings.to_list(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "SheetSnapshot":
        """Build a snapshot from its persisted form, filling gaps with blanks."""
        goal = data.get("goal")
        balance = data.get("currentBalance")
        return cls(
            goal=DecimalText("" if goal is None else str(goal)),
            current_balance=DecimalText("" if balance is None else str(balance)),
            incomes=LineItemList.from_list(data.get("incomes")),
            outgoings=LineItemList.from_list(data.get("outgoings")),
        )


def calculate_months_to_goal(needed: float, difference: float) -> int | None:
    """Calculate whole months needed to close the gap at the current rate.

    Args:
        needed: Remaining amount to save.
        difference: Monthly surplus (income minus outgoings).

    Returns:
        Months rounded up, or None if the surplus is zero or negative or the
        gap is too large to count in months.
    """
    if not difference > 0:
        return None
    months = needed / difference
    if not math.isfinite(months):
        return None
    return math.ceil(months)


def classify_goal(goal: float, current_balance: float, difference: float) -> GoalStatus:
    """Classify a sheet's goal state.

    A zero or unset goal is never reached. A goal with no finite month
    count is unreachable.
    """
    if goal <= 0:
        return GoalStatus.NO_GOAL
    if current_balance >= goal:
        return GoalStatus.REACHED
    if calculate_months_to_goal(goal - current_balance, difference) is not None:
        return GoalStatus.ON_TRACK
    return GoalStatus.UNREACHABLE


@dataclass
class SavingsSheet:
    """Working sheet being edited."""

    name: SheetName = SheetName("")
    goal: DecimalText = DecimalText("")
    current_balance: DecimalText = DecimalText("")
    incomes: LineItemList = field(default_factory=LineItemList)
    outgoings: LineItemList = field(default_factory=LineItemList)

    @property
    def total_income(self) -> float:
        return self.incomes.total()

    @property
    def total_outgoings(self) -> float:
        return self.outgoings.total()

    @property
    def difference(self) -> float:
        return self.total_income - self.total_outgoings

    @property
    def numeric_goal(self) -> float:
        return parse_amount(self.goal)

    @property
    def numeric_current_balance(self) -> float:
        return parse_amount(self.current_balance)

    @property
    def needed(self) -> float:
        return max(0.0, self.numeric_goal - self.numeric_current_balance)

    @property
    def reached_goal(self) -> bool:
        return self.numeric_goal > 0 and self.numeric_current_balance >= self.numeric_goal

    @property
    def months_to_goal(self) -> int | None:
        return calculate_months_to_goal(self.needed, self.difference)

    def projection(self) -> GoalProjection:
        """Compute all derived values at once."""
        goal = self.numeric_goal
        balance = self.numeric_current_balance
        difference = self.difference
        status = classify_goal(goal, balance, difference)

        return GoalProjection(
            total_income=self.total_income,
            total_outgoings=self.total_outgoings,
            difference=difference,
            goal=goal,
            current_balance=balance,
            needed=self.needed,
            status=status,
            months_to_goal=self.months_to_goal if status is GoalStatus.ON_TRACK else None,
        )

    def set_goal(self, text: str) -> None:
        self.goal = normalize_amount(text)

    def set_current_balance(self, text: str) -> None:
        self.current_balance = normalize_amount(text)

    def reset(self) -> None:
        """Return to the blank default state."""
        self.name = SheetName("")
        self.goal = DecimalText("")
        self.current_balance = DecimalText("")
        self.incomes = LineItemList()
        self.outgoings = LineItemList()

    def load_from(self, name: SheetName, snapshot: SheetSnapshot | None) -> None:
        """Replace the sheet's contents with a saved snapshot.

        Args:
            name: Name the snapshot is saved under.
            snapshot: Saved snapshot, or None if no sheet has that name, in
                which case the sheet is reset to blank.
        """
        if snapshot is None:
            self.reset()
            return

        self.name = name
        self.goal = snapshot.goal
        self.current_balance = snapshot.current_balance
        self.incomes = snapshot.incomes.copy()
        self.outgoings = snapshot.outgoings.copy()

    def snapshot(self) -> SheetSnapshot:
        """Copy of the sheet's contents for saving."""
        return SheetSnapshot(
            goal=self.goal,
            current_balance=self.current_balance,
            incomes=self.incomes.copy(),
            outgoings=self.outgoings.copy(),
        )


def describe_projection(projection: GoalProjection) -> list[str]:
    """Build user-facing messages for a projection.

    Args:
        projection: Projection to describe.

    Returns:
        Messages in display order (empty when no goal is set).
    """
    if projection.status is GoalStatus.REACHED:
        return ["You have reached your goal!"]

    if projection.status is GoalStatus.ON_TRACK:
        return [
            f"You need {format_currency(projection.needed)} more to reach your goal.",
            f"Estimated months to reach goal: {projection.months_to_goal}",
        ]

    if projection.status is GoalStatus.UNREACHABLE:
        return ["Your monthly surplus is zero or negative, so the goal cannot be reached at this rate."]

    return []
