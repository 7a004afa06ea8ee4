"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {value!r}") from exc


class BaseConfig:
    """Configuration resolved from the environment at construction time."""

    APP_NAME = "FinLedger"
    DB_FILENAME = "finledger.db"
    LOG_FILENAME = "finledger.log"
    SQLITE_PRAGMAS = {"foreign_keys": "on"}

    def __init__(self) -> None:
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("FINLEDGER_DEV_MODE", default=True)
        self.LOG_TO_FILE = _env_bool("FINLEDGER_LOG_TO_FILE", default=True)
        self.RECENT_LIMIT = _env_int("FINLEDGER_RECENT_LIMIT", 50)
        self.DATABASE_URL = os.getenv("FINLEDGER_DATABASE_URL", self._build_sqlite_url())
        if self.RECENT_LIMIT <= 0:
            raise ValueError("FINLEDGER_RECENT_LIMIT must be positive.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the snapshot database and logs live."""

        data_root = os.getenv("FINLEDGER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        return f"sqlite:///{self.DATA_DIR / self.DB_FILENAME}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        if self.DATABASE_URL.startswith("sqlite"):
            return {"connect_args": {"check_same_thread": False}}
        return {}
