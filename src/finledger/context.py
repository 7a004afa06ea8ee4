"""Application context shared by the command shell."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Callable, Optional

from .config import BaseConfig
from .errors import AuthError
from .infra.snapshot_store import SnapshotStore
from .models.account import Account
from .models.registry import Registry


@dataclass
class AppContext:
    """Configuration, persistence gateway, registry and session state."""

    config: BaseConfig
    store: SnapshotStore
    registry: Registry
    current_account: Optional[Account] = None
    clock: Callable[[], date] = field(default=date.today)

    def today(self) -> date:
        return self.clock()

    def require_account(self) -> Account:
        """Return the logged-in account or raise if nobody is logged in."""

        if self.current_account is None:
            raise AuthError("Log in first (use 'register' or 'login').")
        return self.current_account

    @property
    def prompt_label(self) -> str:
        if self.current_account is None:
            return "[guest]"
        return f"[{self.current_account.username}]"


def create_app_context(config: Optional[BaseConfig] = None) -> AppContext:
    """Build the context and restore the registry from the last snapshot."""

    if config is None:
        config = BaseConfig()
    store = SnapshotStore.from_config(config)
    return AppContext(config=config, store=store, registry=store.load())
