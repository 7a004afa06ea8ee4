"""Wallet: the complete financial state of one account."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable, Optional

from .budget import Budget
from .transaction import Transaction, TransactionType

ZERO = Decimal("0.00")


@dataclass
class Wallet:
    """Balance, append-only transaction log and budgets keyed by category.

    ``balance`` always equals total income minus total expense. It is only
    ever changed by :meth:`append`, so it cannot be assigned through the
    constructor.
    """

    transactions: list[Transaction] = field(default_factory=list, init=False)
    budgets: dict[str, Budget] = field(default_factory=dict, init=False)
    balance: Decimal = field(default=ZERO, init=False)

    @classmethod
    def from_log(
        cls,
        transactions: Iterable[Transaction],
        budgets: Iterable[Budget] = (),
    ) -> "Wallet":
        """Rebuild a wallet by replaying a transaction log."""

        wallet = cls()
        for tx in transactions:
            wallet.append(tx)
        for budget in budgets:
            wallet.put_budget(budget.key, budget)
        return wallet

    def append(self, tx: Transaction) -> None:
        # Balance first: the log only grows once the new balance is known.
        if tx.type is TransactionType.INCOME:
            balance = self.balance + tx.amount
        else:
            balance = self.balance - tx.amount
        self.transactions.append(tx)
        self.balance = balance

    def put_budget(self, key: str, budget: Budget) -> None:
        self.budgets[key] = budget

    def pop_budget(self, key: str) -> Optional[Budget]:
        return self.budgets.pop(key, None)
