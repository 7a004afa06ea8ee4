"""End-to-end workflows across auth, wallet, reports, CSV and persistence."""

from __future__ import annotations

from decimal import Decimal

import pytest

from finledger.context import create_app_context
from finledger.models import Wallet
from finledger.services import auth, export_csv, import_csv, reports
from finledger.services import wallet as ledger

pytestmark = pytest.mark.integration


def test_salary_and_food_budget_month(registry, today):
    auth.register(username="ivan", password="1234", registry=registry)
    account = auth.login(username="ivan", password="1234", registry=registry)

    ledger.add_income(account.wallet, amount=5000, category="ЗП", description="зарплата", occurred_on=today)
    ledger.set_budget(account.wallet, category="Еда", limit=2000)
    advisories = ledger.add_expense(
        account.wallet, amount=1000, category="Еда", description="продукты", occurred_on=today
    )

    assert advisories == []
    assert account.wallet.balance == Decimal("4000.00")
    assert len(account.wallet.transactions) == 2
    lines = reports.build_summary(account.wallet, today)
    food = next(line for line in lines if line.startswith("еда"))
    assert "1000.00" in food
    assert "2000.00" in food


def test_rename_then_report_and_export(wallet, today, tmp_path):
    ledger.add_income(wallet, amount=3000, category="Salary", description="pay", occurred_on=today)
    ledger.set_budget(wallet, category="Cafe", limit=500)
    ledger.add_expense(wallet, amount=420, category="cafe", description="coffee", occurred_on=today)
    ledger.rename_category(wallet, old_category="Cafe", new_category="Restaurants")

    report = reports.build_filtered_report(wallet, categories={"restaurants"})
    assert "Total expenses: 420.00" in report
    summary = reports.build_summary(wallet, today)
    assert any(line.startswith("restaurants") and "80%+" in line for line in summary)

    path = export_csv.export_transactions_csv(transactions=wallet.transactions, output_path=tmp_path / "w.csv")
    copy = Wallet()
    assert import_csv.import_transactions_csv(copy, csv_path=path).imported == 2
    assert copy.balance == wallet.balance == Decimal("2580")


def test_context_round_trip_through_store(config):
    app = create_app_context(config)
    account = auth.register(username="Maria", password="pass", registry=app.registry)
    ledger.add_income(account.wallet, amount="120.75", category="Gift", occurred_on=app.today())
    app.store.save(app.registry)
    app.store.engine.dispose()

    again = create_app_context(config)
    try:
        restored = auth.login(username="maria", password="pass", registry=again.registry)
        assert restored.username == "Maria"
        assert restored.wallet.balance == Decimal("120.75")
        assert again.prompt_label == "[guest]"
    finally:
        again.store.engine.dispose()
