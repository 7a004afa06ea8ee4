"""Ledger entity exports."""

from .account import Account
from .budget import Budget
from .registry import Registry
from .snapshot import AccountRecord, BudgetRecord, TransactionRecord
from .transaction import Transaction, TransactionType, YearMonth
from .wallet import Wallet

__all__ = [
    "Account",
    "AccountRecord",
    "Budget",
    "BudgetRecord",
    "Registry",
    "Transaction",
    "TransactionRecord",
    "TransactionType",
    "Wallet",
    "YearMonth",
]
