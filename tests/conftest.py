"""Pytest configuration and shared fixtures for FinLedger tests.

Fixtures build in-memory registries and wallets, and isolate configuration
and the snapshot database under ``tmp_path`` so tests never touch a real
data directory.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal

import pytest

from finledger.config import BaseConfig
from finledger.infra.database import create_db_engine
from finledger.infra.snapshot_store import SnapshotStore
from finledger.logging_config import ROOT_LOGGER_NAME
from finledger.models import Registry, Transaction, TransactionType, Wallet
from finledger.services import auth

TODAY = date(2025, 3, 15)


@pytest.fixture(autouse=True)
def _reset_finledger_logging():
    """Drop handlers installed by setup_logging so streams closed by a test are not reused."""
    yield
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# =============================================================================
# Configuration & persistence
# =============================================================================


@pytest.fixture
def data_dir(tmp_path, monkeypatch):
    """Point FINLEDGER_* settings at an isolated directory."""

    directory = tmp_path / "instance"
    monkeypatch.setenv("FINLEDGER_DATA_DIR", str(directory))
    monkeypatch.delenv("FINLEDGER_DATABASE_URL", raising=False)
    monkeypatch.setenv("FINLEDGER_DEV_MODE", "false")
    monkeypatch.setenv("FINLEDGER_LOG_TO_FILE", "false")
    return directory


@pytest.fixture
def config(data_dir) -> BaseConfig:
    return BaseConfig()


@pytest.fixture
def snapshot_store(config) -> SnapshotStore:
    store = SnapshotStore(create_db_engine(config))
    yield store
    store.engine.dispose()


# =============================================================================
# Ledger fixtures
# =============================================================================


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def registry() -> Registry:
    return Registry()


@pytest.fixture
def account(registry):
    """A registered account named 'ivan' with password '1234'."""

    return auth.register(username="ivan", password="1234", registry=registry)


@pytest.fixture
def wallet() -> Wallet:
    return Wallet()


@pytest.fixture
def transaction_factory():
    """Factory for building Transaction instances with sensible defaults."""

    def _create(
        amount="10.00",
        category: str = "Food",
        tx_type: TransactionType = TransactionType.EXPENSE,
        description: str = "",
        occurred_on: date = TODAY,
    ) -> Transaction:
        return Transaction(
            type=tx_type,
            amount=Decimal(str(amount)),
            category=category,
            description=description,
            occurred_on=occurred_on,
        )

    return _create
