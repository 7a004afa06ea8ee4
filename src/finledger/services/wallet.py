"""Wallet engine: validated mutations and month aggregates for one account."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional

from ..errors import NotFoundError, ValidationError
from ..keys import is_blank, normalize_category
from ..logging_config import get_logger
from ..models.budget import Budget
from ..models.transaction import Transaction, TransactionType, YearMonth
from ..models.wallet import ZERO, Wallet
from ..money import AmountLike, require_positive
from .budgeting import Advisory, evaluate_balance, evaluate_budget

logger = get_logger(__name__)


def _require_category(category: Optional[str]) -> str:
    if is_blank(category):
        raise ValidationError("Category cannot be empty.")
    return category.strip()


def _record(
    wallet: Wallet,
    tx_type: TransactionType,
    *,
    amount: AmountLike,
    category: str,
    description: str,
    occurred_on: Optional[date],
) -> Transaction:
    value = require_positive(amount)
    label = _require_category(category)
    tx = Transaction(
        type=tx_type,
        amount=value,
        category=label,
        description=(description or "").strip(),
        occurred_on=occurred_on or date.today(),
    )
    wallet.append(tx)
    logger.info(
        "Transaction recorded",
        extra={"type": tx_type.value, "category": tx.category_key, "amount": str(value)},
    )
    return tx


def add_income(
    wallet: Wallet,
    *,
    amount: AmountLike,
    category: str,
    description: str = "",
    occurred_on: Optional[date] = None,
) -> Transaction:
    """Record an income; ``occurred_on`` defaults to today."""

    return _record(
        wallet,
        TransactionType.INCOME,
        amount=amount,
        category=category,
        description=description,
        occurred_on=occurred_on,
    )


def add_expense(
    wallet: Wallet,
    *,
    amount: AmountLike,
    category: str,
    description: str = "",
    occurred_on: Optional[date] = None,
) -> list[Advisory]:
    """Record an expense and return advisories about budget and balance.

    The expense is always recorded. The result holds at most one budget
    advisory followed by at most one balance advisory; the budget check uses
    the month of the expense's date, including the expense itself.
    """

    tx = _record(
        wallet,
        TransactionType.EXPENSE,
        amount=amount,
        category=category,
        description=description,
        occurred_on=occurred_on,
    )

    advisories: list[Advisory] = []
    spent = spent_for_category_in_month(wallet, tx.category, tx.year_month)
    budget_notice = evaluate_budget(tx.category, get_budget(wallet, tx.category), spent)
    if budget_notice is not None:
        advisories.append(budget_notice)
    balance_notice = evaluate_balance(wallet.balance)
    if balance_notice is not None:
        advisories.append(balance_notice)
    return advisories


def set_budget(wallet: Wallet, *, category: str, limit: AmountLike) -> Budget:
    """Create or replace the monthly budget for a category."""

    value = require_positive(limit, what="Limit")
    label = _require_category(category)
    budget = Budget(display_name=label, monthly_limit=value)
    wallet.put_budget(budget.key, budget)
    logger.info("Budget set", extra={"category": budget.key, "limit": str(value)})
    return budget


def get_budget(wallet: Wallet, category: str) -> Optional[Budget]:
    return wallet.budgets.get(normalize_category(category))


def rename_category(wallet: Wallet, *, old_category: str, new_category: str) -> None:
    """Rename a category across all transactions and its budget.

    Raises NotFoundError, leaving the wallet untouched, only when neither a
    transaction nor a budget uses ``old_category``.
    """

    old_label = _require_category(old_category)
    new_label = _require_category(new_category)
    old_key = normalize_category(old_label)
    new_key = normalize_category(new_label)
    if old_key == new_key:
        raise ValidationError("Old and new category are the same.", details={"category": old_key})

    matching = [tx for tx in wallet.transactions if tx.category_key == old_key]
    if not matching and old_key not in wallet.budgets:
        raise NotFoundError(
            f"Category '{old_label}' not found in transactions or budgets.",
            details={"category": old_key},
        )

    for tx in matching:
        tx.category = new_label
    old_budget = wallet.pop_budget(old_key)
    if old_budget is not None:
        wallet.put_budget(new_key, Budget(display_name=new_label, monthly_limit=old_budget.monthly_limit))

    logger.info(
        "Category renamed",
        extra={
            "old": old_key,
            "new": new_key,
            "transactions": len(matching),
            "budget_moved": old_budget is not None,
        },
    )


def total_by_type(wallet: Wallet, tx_type: TransactionType) -> Decimal:
    return sum((tx.amount for tx in wallet.transactions if tx.type is tx_type), ZERO)


def spent_for_category_in_month(wallet: Wallet, category: str, year_month: YearMonth) -> Decimal:
    """Sum the expenses of one category within one calendar month."""

    key = normalize_category(category)
    return sum(
        (
            tx.amount
            for tx in wallet.transactions
            if tx.is_expense and tx.category_key == key and tx.year_month == year_month
        ),
        ZERO,
    )


def expenses_by_category_for_month(wallet: Wallet, year_month: YearMonth) -> dict[str, Decimal]:
    """Group a month's expenses by normalized category, in first-seen order."""

    totals: dict[str, Decimal] = {}
    for tx in wallet.transactions:
        if tx.is_expense and tx.year_month == year_month:
            totals[tx.category_key] = totals.get(tx.category_key, ZERO) + tx.amount
    return totals


__all__ = [
    "add_expense",
    "add_income",
    "expenses_by_category_for_month",
    "get_budget",
    "rename_category",
    "set_budget",
    "spent_for_category_in_month",
    "total_by_type",
]
