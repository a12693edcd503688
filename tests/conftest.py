"""Shared fixtures for the ledger core tests."""

from datetime import date
from decimal import Decimal

import pytest

from pf_dashboard.events import LedgerEventLogger
from pf_dashboard.models.ledger import Ledger, Transaction, TransactionType
from pf_dashboard.services.persistence import LedgerPersistence
from pf_dashboard.services.storage import InMemoryKeyValueStorage
from pf_dashboard.store import LedgerStore


class RecordingLogger:
    """Stands in for the structlog logger and keeps every call."""

    def __init__(self):
        self.records: list[tuple[str, str, dict]] = []

    def debug(self, event, **kw):
        self.records.append(("debug", event, kw))

    def info(self, event, **kw):
        self.records.append(("info", event, kw))

    def warning(self, event, **kw):
        self.records.append(("warning", event, kw))

    def error(self, event, **kw):
        self.records.append(("error", event, kw))

    @property
    def events(self) -> list[str]:
        return [name for _, name, _ in self.records]


@pytest.fixture
def recorder():
    return RecordingLogger()


@pytest.fixture
def event_logger(recorder):
    return LedgerEventLogger(recorder)


@pytest.fixture
def storage():
    return InMemoryKeyValueStorage()


@pytest.fixture
def persistence(storage, event_logger):
    return LedgerPersistence(storage, event_logger=event_logger)


@pytest.fixture
def store(persistence, event_logger):
    return LedgerStore(persistence, event_logger=event_logger)


def make_tx(
    tx_id: str,
    tx_type: str,
    amount: str,
    on: date,
    category: str = "Food",
    description: str = "",
) -> Transaction:
    return Transaction(
        id=tx_id,
        type=TransactionType(tx_type),
        description=description,
        amount=Decimal(amount),
        date=on,
        category=category,
    )


@pytest.fixture
def sample_ledger():
    """Two months of activity with a same-day pair in March."""
    return Ledger(
        categories=["Food", "Bills", "Transportation", "Savings", "Shopping"],
        transactions=[
            make_tx("inc0001", "income", "5000", date(2024, 2, 1), "Savings", "Salary"),
            make_tx("exp0001", "expense", "120.50", date(2024, 2, 14), "Food", "Dinner"),
            make_tx("exp0002", "expense", "100", date(2024, 3, 5), "Bills"),
            make_tx("exp0003", "expense", "300", date(2024, 3, 6), "Food", "Groceries"),
            make_tx("exp0004", "expense", "45", date(2024, 3, 6), "Transportation"),
            make_tx("inc0002", "income", "250", date(2024, 3, 10), "Savings", "Refund"),
        ],
    )
