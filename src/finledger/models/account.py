"""User account holding a wallet."""

from __future__ import annotations

from dataclasses import dataclass, field

from ..keys import normalize_username
from .wallet import Wallet


@dataclass(eq=False)
class Account:
    """Registered user. ``username`` keeps the casing it was registered with."""

    username: str
    password: str = field(repr=False)
    wallet: Wallet = field(default_factory=Wallet)

    @property
    def key(self) -> str:
        return normalize_username(self.username)

    def check_password(self, raw: str) -> bool:
        # Plaintext equality; passwords are not hashed.
        return self.password == raw
