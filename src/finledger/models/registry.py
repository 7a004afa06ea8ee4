"""Account registry keyed by normalized username."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Optional

from ..keys import normalize_username
from .account import Account


@dataclass
class Registry:
    """All accounts known to the process. Accounts are never removed."""

    accounts: dict[str, Account] = field(default_factory=dict)

    def get(self, username: str) -> Optional[Account]:
        return self.accounts.get(normalize_username(username))

    def add(self, account: Account) -> None:
        self.accounts[account.key] = account

    def __contains__(self, username: object) -> bool:
        return isinstance(username, str) and normalize_username(username) in self.accounts

    def __iter__(self) -> Iterator[Account]:
        return iter(self.accounts.values())

    def __len__(self) -> int:
        return len(self.accounts)
