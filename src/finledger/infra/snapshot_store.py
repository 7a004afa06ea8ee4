"""Persistence gateway: load and save the whole account registry."""

from __future__ import annotations

from datetime import date
from decimal import InvalidOperation
from typing import Optional

from sqlalchemy import delete
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col, select

from ..config import BaseConfig
from ..errors import StorageError
from ..logging_config import get_logger
from ..models.account import Account
from ..models.budget import Budget
from ..models.registry import Registry
from ..models.snapshot import AccountRecord, BudgetRecord, TransactionRecord
from ..models.transaction import Transaction, TransactionType
from ..models.wallet import Wallet
from ..money import plain_amount, to_decimal
from .database import create_db_engine, init_database, session_scope

logger = get_logger(__name__)


class SnapshotStore:
    """Snapshot the registry into SQLite tables and restore it.

    ``load`` never raises: a missing, unreadable or corrupt snapshot yields an
    empty registry. ``save`` replaces the previous snapshot atomically. A store
    without an engine (the database URL was unusable) loads nothing and fails
    every save with StorageError.
    """

    def __init__(self, engine: Optional[Engine]):
        self.engine = engine

    @classmethod
    def from_config(cls, config: BaseConfig) -> "SnapshotStore":
        try:
            engine = create_db_engine(config)
        except (SQLAlchemyError, ImportError) as exc:
            logger.warning(
                "Could not create database engine",
                extra={"url": config.DATABASE_URL, "error": str(exc)},
            )
            engine = None
        return cls(engine)

    def load(self) -> Registry:
        if self.engine is None:
            logger.warning("No usable database, starting with an empty registry")
            return Registry()
        try:
            init_database(self.engine)
            registry = self._read()
        except (SQLAlchemyError, ValueError, InvalidOperation) as exc:
            logger.warning(
                "Could not load snapshot, starting with an empty registry",
                extra={"error": str(exc)},
            )
            return Registry()
        logger.info("Snapshot loaded", extra={"accounts": len(registry)})
        return registry

    def save(self, registry: Registry) -> None:
        if self.engine is None:
            raise StorageError("No usable database is configured.")
        try:
            init_database(self.engine)
            self._write(registry)
        except SQLAlchemyError as exc:
            logger.error("Snapshot save failed", extra={"error": str(exc)})
            raise StorageError(f"Could not save data: {exc}", original_error=exc) from exc
        logger.info("Snapshot saved", extra={"accounts": len(registry)})

    def _read(self) -> Registry:
        registry = Registry()
        with session_scope(self.engine) as session:
            records = session.exec(select(AccountRecord).order_by(col(AccountRecord.id))).all()
            for record in records:
                tx_rows = session.exec(
                    select(TransactionRecord)
                    .where(TransactionRecord.account_id == record.id)
                    .order_by(col(TransactionRecord.position))
                ).all()
                budget_rows = session.exec(
                    select(BudgetRecord)
                    .where(BudgetRecord.account_id == record.id)
                    .order_by(col(BudgetRecord.position))
                ).all()
                wallet = Wallet.from_log(_to_transaction(row) for row in tx_rows)
                for row in budget_rows:
                    wallet.put_budget(row.category_key, _to_budget(row))
                registry.add(Account(username=record.username, password=record.password, wallet=wallet))
        return registry

    def _write(self, registry: Registry) -> None:
        with session_scope(self.engine) as session:
            session.execute(delete(TransactionRecord))
            session.execute(delete(BudgetRecord))
            session.execute(delete(AccountRecord))
            for account in registry:
                record = AccountRecord(key=account.key, username=account.username, password=account.password)
                session.add(record)
                session.flush()
                for position, tx in enumerate(account.wallet.transactions):
                    session.add(
                        TransactionRecord(
                            account_id=record.id,
                            position=position,
                            type=tx.type.value,
                            amount=plain_amount(tx.amount),
                            category=tx.category,
                            description=tx.description,
                            occurred_on=tx.occurred_on,
                        )
                    )
                for position, (key, budget) in enumerate(account.wallet.budgets.items()):
                    session.add(
                        BudgetRecord(
                            account_id=record.id,
                            position=position,
                            category_key=key,
                            display_name=budget.display_name,
                            monthly_limit=plain_amount(budget.monthly_limit),
                        )
                    )


def _to_transaction(row: TransactionRecord) -> Transaction:
    occurred_on = row.occurred_on
    if isinstance(occurred_on, str):
        occurred_on = date.fromisoformat(occurred_on)
    return Transaction(
        type=TransactionType(row.type),
        amount=to_decimal(row.amount),
        category=row.category,
        description=row.description,
        occurred_on=occurred_on,
    )


def _to_budget(row: BudgetRecord) -> Budget:
    return Budget(display_name=row.display_name, monthly_limit=to_decimal(row.monthly_limit))
