"""Reporting: summaries, filtered reports and spending charts over a wallet.

All functions here are read-only; they return display lines (or a figure)
and never mutate the wallet.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, Optional

from matplotlib.figure import Figure

from ..errors import TransferError, ValidationError
from ..models.transaction import Transaction, TransactionType, YearMonth
from ..models.wallet import ZERO, Wallet
from ..money import format_amount
from .budgeting import Usage, classify_usage
from .wallet import expenses_by_category_for_month, total_by_type

DEFAULT_RECENT_LIMIT = 50

STATUS_LABELS = {
    Usage.OVER: "Overspent",
    Usage.NINETY: "90%+",
    Usage.EIGHTY: "80%+",
    Usage.UNSPENT: "Not spent",
    Usage.OK: "OK",
}

TYPE_LABELS = {TransactionType.INCOME: "Income", TransactionType.EXPENSE: "Expense"}

_TX_HEADER = f"{'Date':<10} | {'Type':<7} | {'Category':<15} | {'Amount':<10} | Description"
_TX_RULE = "-----------+---------+-----------------+------------+------------------------"
_CATEGORY_HEADER = f"{'Category':<20} | {'Spent':<10}"
_CATEGORY_RULE = "---------------------+------------"


@dataclass(slots=True)
class BudgetStatus:
    """Month-to-date position of one budget."""

    category: str
    display_name: str
    spent: Decimal
    limit: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.limit - self.spent

    @property
    def usage(self) -> Usage:
        return classify_usage(self.spent, self.limit)

    @property
    def status(self) -> str:
        return STATUS_LABELS[self.usage]


def budget_statuses(wallet: Wallet, year_month: YearMonth) -> list[BudgetStatus]:
    """Return one status per budget, in budget insertion order."""

    spent_by_category = expenses_by_category_for_month(wallet, year_month)
    return [
        BudgetStatus(
            category=key,
            display_name=budget.display_name,
            spent=spent_by_category.get(key, ZERO),
            limit=budget.monthly_limit,
        )
        for key, budget in wallet.budgets.items()
    ]


def build_summary(wallet: Wallet, today: date) -> list[str]:
    """Balance, totals and the current month's budget table."""

    year_month = YearMonth.of(today)
    lines = [
        f"Current balance: {format_amount(wallet.balance)}",
        "Total income: {}, total expenses: {}".format(
            format_amount(total_by_type(wallet, TransactionType.INCOME)),
            format_amount(total_by_type(wallet, TransactionType.EXPENSE)),
        ),
        "",
        f"Current month: {year_month}",
        "Budgets and spending by category (current month):",
        f"{'Category':<20} | {'Spent':<10} | {'Limit':<10} | {'Remaining':<10} | {'Status':<12}",
        "---------------------+------------+------------+------------+-------------",
    ]

    if not wallet.budgets:
        lines.append("No budgets defined.")
    else:
        for item in budget_statuses(wallet, year_month):
            lines.append(
                f"{item.category:<20} | {item.spent:<10.2f} | {item.limit:<10.2f} | "
                f"{item.remaining:<10.2f} | {item.status:<12}"
            )

    unbudgeted = [
        (key, spent)
        for key, spent in expenses_by_category_for_month(wallet, year_month).items()
        if key not in wallet.budgets
    ]
    if unbudgeted:
        lines.extend(["", "Categories without budget:", _CATEGORY_HEADER, _CATEGORY_RULE])
        lines.extend(f"{key:<20} | {spent:<10.2f}" for key, spent in unbudgeted)

    return lines


def validate_date_range(date_from: Optional[date], date_to: Optional[date]) -> None:
    if date_from is not None and date_to is not None and date_to < date_from:
        raise ValidationError(
            "Invalid range: end date is before start date.",
            details={"from": date_from.isoformat(), "to": date_to.isoformat()},
        )


def _describe_period(date_from: Optional[date], date_to: Optional[date]) -> str:
    if date_from is None and date_to is None:
        return "all dates"
    if date_to is None:
        return f"from {date_from.isoformat()} onwards"
    if date_from is None:
        return f"up to {date_to.isoformat()}"
    return f"from {date_from.isoformat()} to {date_to.isoformat()}"


def filter_transactions(
    transactions: Iterable[Transaction],
    *,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    categories: Optional[set[str]] = None,
) -> list[Transaction]:
    """Keep transactions inside the inclusive date range and category set."""

    selected = []
    for tx in transactions:
        if date_from is not None and tx.occurred_on < date_from:
            continue
        if date_to is not None and tx.occurred_on > date_to:
            continue
        if categories and tx.category_key not in categories:
            continue
        selected.append(tx)
    return selected


def _transaction_row(tx: Transaction) -> str:
    return (
        f"{tx.occurred_on.isoformat():<10} | {TYPE_LABELS[tx.type]:<7} | "
        f"{tx.category:<15} | {tx.amount:<10.2f} | {tx.description}"
    )


def build_filtered_report(
    wallet: Wallet,
    *,
    date_from: Optional[date] = None,
    date_to: Optional[date] = None,
    categories: Optional[set[str]] = None,
) -> list[str]:
    """Report over a period and an optional set of normalized categories.

    Matching transactions are listed in storage order, followed by income and
    expense totals and an expense breakdown per category. The range itself is
    checked by callers (see :func:`validate_date_range`).
    """

    matched = filter_transactions(
        wallet.transactions, date_from=date_from, date_to=date_to, categories=categories
    )

    lines = [
        f"Period: {_describe_period(date_from, date_to)}",
        "Categories: {}".format(", ".join(sorted(categories)) if categories else "all categories"),
        "",
    ]
    if not matched:
        lines.append("No data for the selected period/categories.")
        return lines

    total_income = ZERO
    total_expense = ZERO
    expense_by_category: dict[str, Decimal] = {}
    lines.extend(["Transactions:", _TX_HEADER, _TX_RULE])
    for tx in matched:
        if tx.is_income:
            total_income += tx.amount
        else:
            total_expense += tx.amount
            expense_by_category[tx.category_key] = (
                expense_by_category.get(tx.category_key, ZERO) + tx.amount
            )
        lines.append(_transaction_row(tx))

    lines.extend(
        [
            "",
            f"Total income: {format_amount(total_income)}",
            f"Total expenses: {format_amount(total_expense)}",
        ]
    )
    if expense_by_category:
        lines.extend(["", "Expenses by category:", _CATEGORY_HEADER, _CATEGORY_RULE])
        lines.extend(f"{key:<20} | {spent:<10.2f}" for key, spent in expense_by_category.items())
    return lines


def list_recent(wallet: Wallet, limit: int = DEFAULT_RECENT_LIMIT) -> list[Transaction]:
    """Newest transactions first, at most ``limit`` of them.

    Order among transactions sharing a date is not part of the contract.
    """

    return sorted(wallet.transactions, key=lambda tx: tx.occurred_on, reverse=True)[:limit]


def build_transactions_table(transactions: Iterable[Transaction]) -> list[str]:
    rows = [_transaction_row(tx) for tx in transactions]
    if not rows:
        return ["No transactions yet."]
    return [_TX_HEADER, _TX_RULE, *rows]


def build_budget_table(wallet: Wallet) -> list[str]:
    if not wallet.budgets:
        return ["No budgets defined."]
    lines = [f"{'Category':<20} | {'Limit':<12}", "---------------------+--------------"]
    lines.extend(
        f"{budget.display_name:<20} | {budget.monthly_limit:<12.2f}"
        for budget in wallet.budgets.values()
    )
    return lines


def build_spending_chart(wallet: Wallet, year_month: YearMonth) -> Figure:
    """Donut chart of a month's expenses by category."""

    totals = sorted(
        expenses_by_category_for_month(wallet, year_month).items(),
        key=lambda item: item[1],
        reverse=True,
    )
    grand_total = sum((amount for _, amount in totals), ZERO)

    fig = Figure(figsize=(8, 6))
    ax = fig.add_subplot()
    if totals:
        labels = [key for key, _ in totals]
        sizes = [float(amount) for _, amount in totals]
        wedges, _texts, _autotexts = ax.pie(
            sizes,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            pctdistance=0.78,
        )
        ax.text(0, 0, format_amount(grand_total), ha="center", va="center", fontsize=14, fontweight="bold")
        ax.legend(
            wedges,
            [f"{label}: {format_amount(amount)}" for label, amount in totals],
            title="Categories",
            loc="center left",
            bbox_to_anchor=(1.0, 0.5),
        )
        ax.axis("equal")
    else:
        ax.text(0.5, 0.5, "No expense data", ha="center", va="center", fontsize=14, color="#666")
        ax.axis("off")
    ax.set_title(f"Spending by category, {year_month}")
    fig.tight_layout()
    return fig


def export_spending_png(wallet: Wallet, year_month: YearMonth, output_path: Path) -> Path:
    """Render the spending chart to PNG and return the path."""

    fig = build_spending_chart(wallet, year_month)
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.savefig(output_path, bbox_inches="tight", dpi=120)
    except OSError as exc:
        raise TransferError(
            f"Could not write chart: {exc}", details={"path": str(output_path)}, original_error=exc
        ) from exc
    return output_path


__all__ = [
    "BudgetStatus",
    "DEFAULT_RECENT_LIMIT",
    "budget_statuses",
    "build_budget_table",
    "build_filtered_report",
    "build_spending_chart",
    "build_summary",
    "build_transactions_table",
    "export_spending_png",
    "filter_transactions",
    "list_recent",
    "validate_date_range",
]
