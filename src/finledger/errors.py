"""Exception hierarchy shared by the ledger services and collaborators."""

from __future__ import annotations

from typing import Optional


class FinLedgerError(Exception):
    """Base class for every error raised by finledger.

    Attributes:
        message: Human-readable error message
        details: Optional mapping with additional context
        original_error: Underlying exception, when one caused this error
    """

    def __init__(
        self,
        message: str,
        details: Optional[dict] = None,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        self.original_error = original_error

    def __str__(self) -> str:
        msg = self.message
        if self.details:
            detail_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            msg = f"{msg} ({detail_str})"
        return msg


class ValidationError(FinLedgerError, ValueError):
    """Raised for malformed or out-of-range input before any mutation happens."""


class ConflictError(FinLedgerError):
    """Raised when registering a username that is already taken."""


class AuthError(FinLedgerError):
    """Raised for an unknown username or a wrong password."""


class NotFoundError(FinLedgerError, LookupError):
    """Raised when a rename target matches no transaction and no budget."""


class StorageError(FinLedgerError):
    """Raised when the registry snapshot cannot be written."""


class TransferError(FinLedgerError):
    """Raised when an import/export file cannot be opened, read or written."""


__all__ = [
    "FinLedgerError",
    "ValidationError",
    "ConflictError",
    "AuthError",
    "NotFoundError",
    "StorageError",
    "TransferError",
]
