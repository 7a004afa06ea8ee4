"""Canonical lookup keys for categories and usernames."""

from __future__ import annotations

from typing import Optional


def normalize_category(category: str) -> str:
    """Return the lookup key for a category label (trimmed, lowercased)."""

    return category.strip().lower()


def normalize_username(username: str) -> str:
    """Return the registry key for a username.

    Same transform as categories, but usernames and categories never share a
    key-space.
    """

    return username.strip().lower()


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def parse_category_list(raw_value: Optional[str]) -> set[str]:
    """Split a comma-separated category list into normalized keys."""

    if not raw_value:
        return set()
    return {normalize_category(part) for part in raw_value.split(",") if part.strip()}
