"""Service module exports."""

from . import auth, budgeting, export_csv, import_csv, reports, wallet

__all__ = [
    "auth",
    "budgeting",
    "export_csv",
    "import_csv",
    "reports",
    "wallet",
]
