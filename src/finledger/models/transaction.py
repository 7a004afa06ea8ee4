"""Ledger transaction entities."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import NamedTuple

from ..keys import normalize_category


class TransactionType(str, Enum):
    """Direction of a transaction."""

    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class YearMonth(NamedTuple):
    """Calendar month used for budget periods."""

    year: int
    month: int

    @classmethod
    def of(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    def __str__(self) -> str:
        return f"{self.month:02d}.{self.year}"


@dataclass(slots=True)
class Transaction:
    """A single income or expense entry.

    Only ``category`` may change after creation (category rename rewrites it
    in place).
    """

    type: TransactionType
    amount: Decimal
    category: str
    description: str
    occurred_on: date

    @property
    def category_key(self) -> str:
        return normalize_category(self.category)

    @property
    def year_month(self) -> YearMonth:
        return YearMonth.of(self.occurred_on)

    @property
    def is_income(self) -> bool:
        return self.type is TransactionType.INCOME

    @property
    def is_expense(self) -> bool:
        return self.type is TransactionType.EXPENSE
