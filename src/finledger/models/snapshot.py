"""SQLModel tables holding the persisted registry snapshot.

These rows exist only at the persistence boundary; the ledger works on the
plain dataclasses in this package.
"""

from __future__ import annotations

from datetime import date
from typing import ClassVar, Optional

from sqlmodel import Field, SQLModel


class AccountRecord(SQLModel, table=True):
    """One registered account."""

    __tablename__: ClassVar[str] = "account_record"

    id: Optional[int] = Field(default=None, primary_key=True)
    key: str = Field(nullable=False, unique=True, index=True, max_length=128)
    username: str = Field(nullable=False, max_length=128)
    password: str = Field(nullable=False, max_length=255)


class TransactionRecord(SQLModel, table=True):
    """One wallet transaction; ``position`` preserves entry order."""

    __tablename__: ClassVar[str] = "transaction_record"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account_record.id", nullable=False, index=True)
    position: int = Field(nullable=False)
    type: str = Field(nullable=False, max_length=16)
    # Decimal text; SQLite has no exact numeric storage.
    amount: str = Field(nullable=False, max_length=64)
    category: str = Field(nullable=False, max_length=255)
    description: str = Field(default="", max_length=1024)
    occurred_on: date = Field(nullable=False)


class BudgetRecord(SQLModel, table=True):
    """One category budget; ``position`` preserves insertion order."""

    __tablename__: ClassVar[str] = "budget_record"

    id: Optional[int] = Field(default=None, primary_key=True)
    account_id: int = Field(foreign_key="account_record.id", nullable=False, index=True)
    position: int = Field(nullable=False)
    category_key: str = Field(nullable=False, max_length=255)
    display_name: str = Field(nullable=False, max_length=255)
    monthly_limit: str = Field(nullable=False, max_length=64)
