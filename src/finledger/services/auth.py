"""Registration and login against the account registry."""

from __future__ import annotations

from typing import Optional

from ..errors import AuthError, ConflictError, ValidationError
from ..keys import is_blank, normalize_username
from ..logging_config import get_logger
from ..models.account import Account
from ..models.registry import Registry

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 4


def _require_username(username: Optional[str]) -> str:
    if is_blank(username):
        raise ValidationError("Username cannot be empty.")
    return username.strip()


def register(*, username: str, password: str, registry: Registry) -> Account:
    """Create an account with an empty wallet and add it to the registry."""

    display_name = _require_username(username)
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        raise ValidationError(
            f"Password is too short (minimum {MIN_PASSWORD_LENGTH} characters)."
        )
    key = normalize_username(display_name)
    if key in registry.accounts:
        logger.info("Registration rejected: username taken", extra={"username": key})
        raise ConflictError("A user with this username already exists.", details={"username": key})

    account = Account(username=display_name, password=password)
    registry.add(account)
    logger.info("User registered", extra={"username": key})
    return account


def login(*, username: str, password: str, registry: Registry) -> Account:
    """Return the stored account when the password matches exactly."""

    display_name = _require_username(username)
    account = registry.get(display_name)
    if account is None or not account.check_password(password):
        logger.info("Login failed", extra={"username": normalize_username(display_name)})
        raise AuthError("Invalid username or password.")
    logger.info("User logged in", extra={"username": account.key})
    return account


__all__ = ["MIN_PASSWORD_LENGTH", "login", "register"]
