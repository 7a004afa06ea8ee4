"""Monthly category budgets."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from ..keys import normalize_category


@dataclass(frozen=True, slots=True)
class Budget:
    """A monthly spending ceiling attached to one category.

    Budgets are replaced wholesale, never edited in place.
    """

    display_name: str
    monthly_limit: Decimal

    @property
    def key(self) -> str:
        return normalize_category(self.display_name)
