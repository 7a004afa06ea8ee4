"""Report engine tests."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from finledger.errors import ValidationError
from finledger.models import YearMonth
from finledger.services import reports
from finledger.services import wallet as ledger


@pytest.fixture
def populated(wallet, today):
    ledger.add_income(wallet, amount=5000, category="Salary", description="march pay", occurred_on=today)
    ledger.add_expense(wallet, amount=1700, category="Food", description="groceries", occurred_on=today)
    ledger.add_expense(wallet, amount=300, category="Taxi", description="rides", occurred_on=date(2025, 3, 2))
    ledger.add_expense(wallet, amount=50, category="Food", description="old", occurred_on=date(2025, 2, 20))
    ledger.set_budget(wallet, category="Food", limit=2000)
    ledger.set_budget(wallet, category="Rent", limit=1000)
    return wallet


def _line_for(lines, prefix):
    return next(line for line in lines if line.startswith(prefix))


def test_budget_statuses_in_budget_order(populated):
    statuses = reports.budget_statuses(populated, YearMonth(2025, 3))

    assert [s.category for s in statuses] == ["food", "rent"]
    food, rent = statuses
    assert (food.spent, food.limit, food.remaining, food.status) == (
        Decimal("1700"),
        Decimal("2000"),
        Decimal("300"),
        "80%+",
    )
    assert rent.status == "Not spent"


@pytest.mark.parametrize(
    "spent, status",
    [("2001", "Overspent"), ("1800", "90%+"), ("1600", "80%+"), ("10", "OK")],
)
def test_budget_status_labels(spent, status):
    item = reports.BudgetStatus(category="food", display_name="Food", spent=Decimal(spent), limit=Decimal("2000"))
    assert item.status == status


def test_summary_lines(populated, today):
    lines = reports.build_summary(populated, today)

    assert lines[0] == "Current balance: 2950.00"
    assert lines[1] == "Total income: 5000.00, total expenses: 2050.00"
    assert "Current month: 03.2025" in lines
    food = _line_for(lines, "food ")
    assert "1700.00" in food and "2000.00" in food and "300.00" in food and "80%+" in food
    assert "Not spent" in _line_for(lines, "rent ")


def test_summary_lists_unbudgeted_categories(populated, today):
    lines = reports.build_summary(populated, today)

    start = lines.index("Categories without budget:")
    tail = lines[start:]
    assert any(line.startswith("taxi ") and "300.00" in line for line in tail)
    assert not any(line.startswith("food ") for line in tail)


def test_summary_without_budgets(wallet, today):
    ledger.add_expense(wallet, amount=10, category="Food", occurred_on=today)

    lines = reports.build_summary(wallet, today)

    assert "No budgets defined." in lines
    assert "Categories without budget:" in lines


def test_summary_empty_wallet(wallet, today):
    lines = reports.build_summary(wallet, today)
    assert lines[0] == "Current balance: 0.00"
    assert "Categories without budget:" not in lines


def test_filtered_report_today_food_only(populated, today):
    ledger.add_expense(populated, amount=15, category="Cinema", occurred_on=today)

    lines = reports.build_filtered_report(populated, date_from=today, date_to=today, categories={"food"})

    assert lines[0] == f"Period: from {today.isoformat()} to {today.isoformat()}"
    assert lines[1] == "Categories: food"
    rows = [line for line in lines if line.startswith(today.isoformat())]
    assert len(rows) == 1
    assert "Food" in rows[0] and "1700.00" in rows[0]
    assert not any("Cinema" in line or "Salary" in line for line in lines)
    assert "Total income: 0.00" in lines
    assert "Total expenses: 1700.00" in lines


def test_filtered_report_all_dates_keeps_storage_order(populated):
    lines = reports.build_filtered_report(populated)

    assert lines[0] == "Period: all dates"
    assert lines[1] == "Categories: all categories"
    dated = [line[:10] for line in lines if line[:4] == "2025"]
    assert dated == ["2025-03-15", "2025-03-15", "2025-03-02", "2025-02-20"]
    assert "Total income: 5000.00" in lines
    assert "Total expenses: 2050.00" in lines
    breakdown = lines[lines.index("Expenses by category:") + 3 :]
    assert [line.split("|")[0].strip() for line in breakdown] == ["food", "taxi"]
    assert "1750.00" in breakdown[0]


def test_filtered_report_open_ranges(populated):
    since = reports.build_filtered_report(populated, date_from=date(2025, 3, 1))
    until = reports.build_filtered_report(populated, date_to=date(2025, 2, 28))

    assert since[0] == "Period: from 2025-03-01 onwards"
    assert not any(line.startswith("2025-02-20") for line in since)
    assert until[0] == "Period: up to 2025-02-28"
    assert [line[:10] for line in until if line.startswith("2025")] == ["2025-02-20"]


def test_filtered_report_no_data(populated):
    lines = reports.build_filtered_report(populated, categories={"cinema"})
    assert lines[-1] == "No data for the selected period/categories."
    assert len(lines) == 4


def test_filtered_report_income_only_has_no_breakdown(populated):
    lines = reports.build_filtered_report(populated, categories={"salary"})
    assert "Expenses by category:" not in lines
    assert "Total expenses: 0.00" in lines


def test_validate_date_range():
    reports.validate_date_range(date(2025, 1, 1), date(2025, 1, 1))
    reports.validate_date_range(None, date(2025, 1, 1))
    with pytest.raises(ValidationError):
        reports.validate_date_range(date(2025, 1, 2), date(2025, 1, 1))


def test_list_recent_sorts_by_date_descending(populated):
    recent = reports.list_recent(populated)
    assert [tx.occurred_on for tx in recent] == sorted(
        (tx.occurred_on for tx in populated.transactions), reverse=True
    )
    assert len(reports.list_recent(populated, limit=2)) == 2


def test_list_recent_limit(wallet):
    for day in range(1, 29):
        ledger.add_income(wallet, amount=1, category="Tips", occurred_on=date(2025, 2, day))
    for day in range(1, 31):
        ledger.add_income(wallet, amount=1, category="Tips", occurred_on=date(2025, 4, day))

    recent = reports.list_recent(wallet)

    assert len(recent) == 50
    assert recent[0].occurred_on == date(2025, 4, 30)


def test_transactions_and_budget_tables(populated):
    table = reports.build_transactions_table(reports.list_recent(populated))
    assert table[0].startswith("Date")
    assert len(table) == 2 + len(populated.transactions)

    budgets = reports.build_budget_table(populated)
    assert any(line.startswith("Food") and "2000.00" in line for line in budgets)
    assert any(line.startswith("Rent") for line in budgets)


def test_tables_when_empty():
    from finledger.models import Wallet

    empty = Wallet()
    assert reports.build_transactions_table([]) == ["No transactions yet."]
    assert reports.build_budget_table(empty) == ["No budgets defined."]


def test_spending_chart_png(populated, tmp_path):
    path = reports.export_spending_png(populated, YearMonth(2025, 3), tmp_path / "charts" / "march.png")

    assert path.exists()
    assert path.read_bytes()[:8] == b"\x89PNG\r\n\x1a\n"


def test_spending_chart_without_expenses(wallet):
    fig = reports.build_spending_chart(wallet, YearMonth(2025, 3))
    assert fig.axes[0].get_title() == "Spending by category, 03.2025"
