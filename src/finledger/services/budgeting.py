"""Budget threshold policy and the advisories returned by ``add_expense``."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Optional

from ..models.budget import Budget
from ..money import format_amount

NINETY_PERCENT = Decimal("0.9")
EIGHTY_PERCENT = Decimal("0.8")


class Usage(str, Enum):
    """How much of a monthly limit has been used, most severe first."""

    OVER = "over"
    NINETY = "90%+"
    EIGHTY = "80%+"
    UNSPENT = "unspent"
    OK = "ok"


def classify_usage(spent: Decimal, limit: Decimal) -> Usage:
    """Pick the usage tier; tiers are checked over, 90%, 80%, then zero."""

    if spent > limit:
        return Usage.OVER
    if spent >= NINETY_PERCENT * limit:
        return Usage.NINETY
    if spent >= EIGHTY_PERCENT * limit:
        return Usage.EIGHTY
    if spent == 0:
        return Usage.UNSPENT
    return Usage.OK


@dataclass(frozen=True, slots=True)
class Advisory:
    """Non-blocking notice produced alongside a recorded expense."""

    kind: ClassVar[str] = "advisory"

    @property
    def message(self) -> str:  # pragma: no cover - overridden
        raise NotImplementedError

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True, slots=True)
class NoBudget(Advisory):
    kind: ClassVar[str] = "no_budget"

    category: str

    @property
    def message(self) -> str:
        return f"Warning: no budget set for category '{self.category}'."


@dataclass(frozen=True, slots=True)
class _Threshold(Advisory):
    category: str
    spent: Decimal
    limit: Decimal


@dataclass(frozen=True, slots=True)
class EightyPercent(_Threshold):
    kind: ClassVar[str] = "eighty_percent"

    @property
    def message(self) -> str:
        return (
            f"Warning: more than 80% of the '{self.category}' budget used. "
            f"Spent {format_amount(self.spent)} of {format_amount(self.limit)}."
        )


@dataclass(frozen=True, slots=True)
class NinetyPercent(_Threshold):
    kind: ClassVar[str] = "ninety_percent"

    @property
    def message(self) -> str:
        return (
            f"Careful: 90% of the '{self.category}' budget reached. "
            f"Spent {format_amount(self.spent)} of {format_amount(self.limit)}."
        )


@dataclass(frozen=True, slots=True)
class OverBudget(_Threshold):
    kind: ClassVar[str] = "over_budget"

    @property
    def overspend(self) -> Decimal:
        return self.spent - self.limit

    @property
    def message(self) -> str:
        return (
            f"ATTENTION: budget for '{self.category}' exceeded. "
            f"Spent {format_amount(self.spent)} of {format_amount(self.limit)} "
            f"(overspend {format_amount(self.overspend)})."
        )


@dataclass(frozen=True, slots=True)
class LowBalance(Advisory):
    kind: ClassVar[str] = "low_balance"

    balance: Decimal

    @property
    def message(self) -> str:
        return f"ATTENTION: your balance is zero or negative ({format_amount(self.balance)})."


def evaluate_budget(category: str, budget: Optional[Budget], spent: Decimal) -> Optional[Advisory]:
    """Return the budget advisory for a category's month-to-date spend.

    ``category`` is the label as the user typed it; threshold advisories use
    the budget's display name instead.
    """

    if budget is None:
        return NoBudget(category=category)
    usage = classify_usage(spent, budget.monthly_limit)
    tier = {
        Usage.OVER: OverBudget,
        Usage.NINETY: NinetyPercent,
        Usage.EIGHTY: EightyPercent,
    }.get(usage)
    if tier is None:
        return None
    return tier(category=budget.display_name, spent=spent, limit=budget.monthly_limit)


def evaluate_balance(balance: Decimal) -> Optional[Advisory]:
    if balance <= 0:
        return LowBalance(balance=balance)
    return None


__all__ = [
    "Advisory",
    "EightyPercent",
    "LowBalance",
    "NinetyPercent",
    "NoBudget",
    "OverBudget",
    "Usage",
    "classify_usage",
    "evaluate_balance",
    "evaluate_budget",
]
