"""
Main Orchestrator for the Personal Finance Dashboard

This module ties the components together and is the single seam the
presentation layer talks to:
1. Start-up (storage → persistence → start-up policy → hydrated store)
2. Mutations (delegated to the LedgerStore, persisted before returning)
3. Re-render (one call that recomputes every derived view)

DESIGN DECISION: There is no module-level ledger. Whoever renders the
dashboard constructs a DashboardApp and holds on to it; tests build their own.
"""

from datetime import date
from typing import Optional

from pf_dashboard.config import LedgerSettings, get_settings
from pf_dashboard.events import LedgerEventLogger
from pf_dashboard.models.ledger import (
    ALL_MONTHS,
    DashboardView,
    Transaction,
)
from pf_dashboard.queries import (
    analytics_for_current_month,
    filter_by_month,
    months_present,
    recent,
    summary,
)
from pf_dashboard.services.persistence import LedgerPersistence
from pf_dashboard.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
)
from pf_dashboard.store import LedgerStore
from pf_dashboard.utils.formatting import (
    DEFAULT_CURRENCY_SYMBOL,
    format_money,
    format_signed_amount,
)
from pf_dashboard.validation import DraftValidator
from pf_dashboard.validation.validator import DraftInput


class DashboardApp:
    """
    The core as seen from the presentation layer.

    Mutations return what the store returns and raise what it raises
    (NotFoundError, InvalidInputError). After any of them the caller is
    expected to call render() again.
    """

    def __init__(
        self,
        store: LedgerStore,
        currency_symbol: str = DEFAULT_CURRENCY_SYMBOL,
        recent_limit: int = 6,
    ):
        self._store = store
        self._currency_symbol = currency_symbol
        self._recent_limit = recent_limit

    @property
    def store(self) -> LedgerStore:
        return self._store

    # Mutations

    def add_transaction(self, draft: DraftInput) -> Transaction:
        return self._store.add_transaction(draft)

    def update_transaction(self, transaction_id: str, draft: DraftInput) -> Transaction:
        return self._store.update_transaction(transaction_id, draft)

    def delete_transaction(self, transaction_id: str) -> bool:
        return self._store.delete_transaction(transaction_id)

    def add_category(self, name: str) -> bool:
        return self._store.add_category(name)

    def clear_all(self) -> None:
        """Destructive reset; the caller is responsible for confirming first."""
        self._store.reset()

    def export(self) -> str:
        return self._store.export()

    # Views

    def render(
        self,
        month: str = ALL_MONTHS,
        today: Optional[date] = None,
    ) -> DashboardView:
        """
        Recompute every view from the current ledger.

        Args:
            month: Month key for the transaction list, or ALL_MONTHS
            today: Reference date for the analytics card; defaults to today
        """
        ledger = self._store.ledger
        return DashboardView(
            categories=list(ledger.categories),
            summary=summary(ledger),
            recent=recent(ledger, self._recent_limit),
            months=months_present(ledger),
            selected_month=month,
            transactions=filter_by_month(ledger, month),
            analytics=analytics_for_current_month(ledger, today or date.today()),
        )

    def money(self, value) -> str:
        return format_money(value, self._currency_symbol)

    def signed_amount(self, transaction: Transaction) -> str:
        return format_signed_amount(transaction, self._currency_symbol)


def create_storage(settings: LedgerSettings) -> KeyValueStorageInterface:
    """Build the configured storage backend."""
    if settings.storage_backend == "memory":
        return InMemoryKeyValueStorage()
    return JsonFileKeyValueStorage(settings.storage_dir)


def create_app_components(
    settings: Optional[LedgerSettings] = None,
    storage: Optional[KeyValueStorageInterface] = None,
    event_logger: Optional[LedgerEventLogger] = None,
) -> DashboardApp:
    """
    Factory function to create all application components.

    Args:
        settings: Ledger settings; loaded from the environment if omitted
        storage: Storage backend; built from settings if omitted

    Returns:
        A DashboardApp holding a store hydrated from storage
    """
    settings = settings or get_settings().ledger
    storage = storage or create_storage(settings)
    event_logger = event_logger or LedgerEventLogger()

    persistence = LedgerPersistence(
        storage,
        key=settings.storage_key,
        clear_on_startup=settings.clear_storage_on_startup,
        event_logger=event_logger,
    )
    persistence.startup()

    store = LedgerStore.hydrate(
        persistence,
        validator=DraftValidator(settings.input_policy),
        event_logger=event_logger,
    )

    return DashboardApp(
        store,
        currency_symbol=settings.currency_symbol,
        recent_limit=settings.recent_limit,
    )
