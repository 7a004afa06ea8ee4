"""Interactive command shell for FinLedger."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Callable, Optional

import click

from .config import BaseConfig
from .context import AppContext, create_app_context
from .errors import FinLedgerError, StorageError, ValidationError
from .keys import is_blank, parse_category_list
from .logging_config import get_logger, setup_logging
from .models.transaction import YearMonth
from .money import format_amount, require_positive
from .services import auth, export_csv, import_csv, reports, wallet

logger = get_logger(__name__)

Handler = Callable[[AppContext], None]


@dataclass(frozen=True)
class ShellCommand:
    name: str
    summary: str
    handler: Handler
    requires_login: bool


COMMANDS: dict[str, ShellCommand] = {}


def command(name: str, summary: str, *, requires_login: bool = True) -> Callable[[Handler], Handler]:
    """Register a shell command under ``name``."""

    def decorator(func: Handler) -> Handler:
        COMMANDS[name] = ShellCommand(name, summary, func, requires_login)
        return func

    return decorator


# ---------- input helpers ----------


def _positive_amount(text: str) -> Decimal:
    try:
        return require_positive(text)
    except ValidationError as exc:
        raise click.BadParameter(exc.message) from exc


def _non_blank(text: str) -> str:
    if is_blank(text):
        raise click.BadParameter("Value cannot be empty.")
    return text.strip()


def _optional_date(text: str) -> Optional[date]:
    text = (text or "").strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise click.BadParameter("Invalid date, use YYYY-MM-DD, e.g. 2025-01-15.") from exc


def prompt_amount(label: str) -> Decimal:
    return click.prompt(label, value_proc=_positive_amount)


def prompt_text(label: str) -> str:
    return click.prompt(label, value_proc=_non_blank)


def prompt_optional_date(label: str) -> Optional[date]:
    return click.prompt(label, default="", show_default=False, value_proc=_optional_date)


def echo_lines(lines) -> None:
    for line in lines:
        click.echo(line)


# ---------- commands ----------


@command("help", "show this help", requires_login=False)
def show_help(app: AppContext) -> None:
    click.echo("=== Commands ===")
    for item in COMMANDS.values():
        if item.requires_login and app.current_account is None:
            continue
        click.echo(f"  {item.name:<17} - {item.summary}")
    click.echo(f"  {'exit':<17} - save data and quit")


@command("register", "register a new user", requires_login=False)
def register_user(app: AppContext) -> None:
    if app.current_account is not None:
        click.echo("Log out first with 'logout'.")
        return
    username = prompt_text("Username")
    password = click.prompt(f"Password (at least {auth.MIN_PASSWORD_LENGTH} characters)", hide_input=True)
    app.current_account = auth.register(username=username, password=password, registry=app.registry)
    click.echo(f"User '{app.current_account.username}' registered and logged in.")


@command("login", "log in", requires_login=False)
def login_user(app: AppContext) -> None:
    if app.current_account is not None:
        click.echo("Already logged in. Use 'logout' first.")
        return
    username = prompt_text("Username")
    password = click.prompt("Password", hide_input=True)
    app.current_account = auth.login(username=username, password=password, registry=app.registry)
    click.echo(f"Welcome, {app.current_account.username}!")


@command("logout", "log out", requires_login=False)
def logout_user(app: AppContext) -> None:
    app.current_account = None
    click.echo("Logged out.")


@command("add_income", "add an income")
def add_income(app: AppContext) -> None:
    account = app.require_account()
    amount = prompt_amount("Income amount")
    category = prompt_text("Category (e.g. Salary, Bonus)")
    description = prompt_text("Description")
    wallet.add_income(
        account.wallet, amount=amount, category=category, description=description, occurred_on=app.today()
    )
    click.echo(f"Income added. Current balance: {format_amount(account.wallet.balance)}")


@command("add_expense", "add an expense")
def add_expense(app: AppContext) -> None:
    account = app.require_account()
    amount = prompt_amount("Expense amount")
    category = prompt_text("Category (e.g. Food, Rent)")
    description = prompt_text("Description")
    advisories = wallet.add_expense(
        account.wallet, amount=amount, category=category, description=description, occurred_on=app.today()
    )
    click.echo(f"Expense added. Current balance: {format_amount(account.wallet.balance)}")
    for advisory in advisories:
        click.echo(advisory.message)


@command("list_tx", "list recent transactions")
def list_transactions(app: AppContext) -> None:
    account = app.require_account()
    echo_lines(reports.build_transactions_table(reports.list_recent(account.wallet, app.config.RECENT_LIMIT)))


@command("set_budget", "set or replace a category budget")
def set_budget(app: AppContext) -> None:
    account = app.require_account()
    category = prompt_text("Category")
    limit = prompt_amount("Monthly limit")
    budget = wallet.set_budget(account.wallet, category=category, limit=limit)
    click.echo(f"Budget for '{budget.display_name}' set: {format_amount(budget.monthly_limit)}")


@command("edit_budget", "change an existing budget")
def edit_budget(app: AppContext) -> None:
    account = app.require_account()
    category = prompt_text("Budget category to change")
    existing = wallet.get_budget(account.wallet, category)
    if existing is None:
        click.echo("No budget for this category. Use 'set_budget' to create one.")
        return
    click.echo(f"Current limit: {format_amount(existing.monthly_limit)}")
    limit = prompt_amount("New monthly limit")
    wallet.set_budget(account.wallet, category=category, limit=limit)
    click.echo("Budget updated.")


@command("budgets", "show all budgets")
def list_budgets(app: AppContext) -> None:
    echo_lines(reports.build_budget_table(app.require_account().wallet))


@command("rename_category", "rename a category in transactions and budgets")
def rename_category(app: AppContext) -> None:
    account = app.require_account()
    old = prompt_text("Old category")
    new = prompt_text("New category")
    wallet.rename_category(account.wallet, old_category=old, new_category=new)
    click.echo(f"Category '{old}' renamed to '{new}'.")


@command("summary", "summary of balance and budgets for the current month")
def summary(app: AppContext) -> None:
    account = app.require_account()
    click.echo("===== Summary =====")
    echo_lines(reports.build_summary(account.wallet, app.today()))
    click.echo("===================")


@command("report", "report for a period and a set of categories")
def report(app: AppContext) -> None:
    account = app.require_account()
    date_from = prompt_optional_date("Start date (YYYY-MM-DD, empty for no limit)")
    date_to = prompt_optional_date("End date   (YYYY-MM-DD, empty for no limit)")
    reports.validate_date_range(date_from, date_to)
    categories = parse_category_list(
        click.prompt("Categories, comma separated (empty for all)", default="", show_default=False)
    )
    click.echo("===== Report =====")
    echo_lines(
        reports.build_filtered_report(
            account.wallet, date_from=date_from, date_to=date_to, categories=categories or None
        )
    )
    click.echo("==================")


@command("export_csv", "export transactions to CSV")
def export_transactions(app: AppContext) -> None:
    account = app.require_account()
    path = Path(prompt_text("File name (e.g. report.csv)"))
    export_csv.export_transactions_csv(transactions=account.wallet.transactions, output_path=path)
    click.echo(f"Transactions exported to: {path}")


@command("import_csv", "import transactions from CSV")
def import_transactions(app: AppContext) -> None:
    account = app.require_account()
    path = Path(prompt_text("CSV file name"))
    result = import_csv.import_transactions_csv(account.wallet, csv_path=path)
    click.echo(f"Import finished. Transactions added: {result.imported}")
    if result.skipped:
        click.echo(f"Rows skipped: {result.skipped}")
    click.echo(f"Current balance: {format_amount(account.wallet.balance)}")


@command("chart", "save this month's spending chart as PNG")
def spending_chart(app: AppContext) -> None:
    account = app.require_account()
    path = Path(prompt_text("PNG file name (e.g. spending.png)"))
    reports.export_spending_png(account.wallet, YearMonth.of(app.today()), path)
    click.echo(f"Chart saved to: {path}")


# ---------- loop ----------


def run_shell(app: AppContext) -> None:
    """Read commands until 'exit' or end of input, then save the registry."""

    logger.info("Shell started", extra={"accounts": len(app.registry)})
    click.echo("Finance tracker. Type 'help' for a list of commands.")
    while True:
        try:
            line = click.prompt(app.prompt_label, default="", show_default=False, prompt_suffix=" > ")
        except click.Abort:
            break
        words = line.split()
        if not words:
            continue
        name = words[0].lower()
        if name == "exit":
            break
        item = COMMANDS.get(name)
        if item is None:
            click.echo(f"Unknown command '{name}'. Type 'help' for a list of commands.")
            continue
        try:
            item.handler(app)
        except click.Abort:
            break
        except ValidationError as exc:
            click.echo(f"Invalid data: {exc.message}")
        except FinLedgerError as exc:
            click.echo(f"Error: {exc.message}")

    try:
        app.store.save(app.registry)
    except StorageError as exc:
        click.echo(f"Error while saving data: {exc.message}")
        return
    click.echo("Data saved. Goodbye!")


@click.group(invoke_without_command=True)
@click.pass_context
def main(ctx: click.Context) -> None:
    """FinLedger personal finance tracker."""

    if ctx.invoked_subcommand is None:
        ctx.invoke(shell)


@main.command()
def shell() -> None:
    """Start the interactive shell (default)."""

    config = BaseConfig()
    setup_logging(config)
    run_shell(create_app_context(config))
