"""
Ledger Persistence

Loads and saves the whole ledger as one JSON document under a fixed key.

GUARANTEES:
- load() never raises. Missing or broken data falls back to defaults
  field by field, so a good ``categories`` list survives a broken
  ``transactions`` list and vice versa.
- save() and clear() never raise. A failure is logged and reported through
  the return value; the in-memory ledger stays authoritative.
"""

import json
from typing import Any, Optional

from pydantic import ValidationError

from pf_dashboard.events import LedgerEventLogger
from pf_dashboard.models.ledger import DEFAULT_CATEGORIES, Ledger, Transaction
from pf_dashboard.services.storage.interface import (
    KeyValueStorageInterface,
    MalformedStateError,
    StorageError,
)

DEFAULT_STORAGE_KEY = "pf_dashboard_v1"

# Record fields that fall back to their default when stored as null
OPTIONAL_RECORD_FIELDS = ("description", "category")


class LedgerPersistence:
    """Reads and writes the serialized ledger through a key-value store."""

    def __init__(
        self,
        storage: KeyValueStorageInterface,
        key: str = DEFAULT_STORAGE_KEY,
        clear_on_startup: bool = False,
        event_logger: Optional[LedgerEventLogger] = None,
    ):
        """
        Args:
            storage: Backend the JSON text is written to
            key: Storage key for the ledger
            clear_on_startup: Remove the stored ledger when startup() runs
            event_logger: Where load/save problems are reported
        """
        self._storage = storage
        self._key = key
        self._clear_on_startup = clear_on_startup
        self._events = event_logger or LedgerEventLogger()

    @property
    def key(self) -> str:
        return self._key

    @property
    def clear_on_startup(self) -> bool:
        return self._clear_on_startup

    def startup(self) -> bool:
        """
        Apply the start-up policy.

        Returns True if stored state was cleared.
        """
        if not self._clear_on_startup:
            return False
        return self.clear()

    def load(self) -> Ledger:
        """Load the stored ledger, falling back to defaults for anything unusable."""
        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            self._events.storage_unavailable(self._key, "load", str(e))
            return Ledger.default()

        if raw is None:
            return Ledger.default()

        try:
            payload = self._parse(raw)
        except MalformedStateError as e:
            self._events.malformed_state(self._key, "payload", str(e))
            return Ledger.default()

        ledger = Ledger(
            categories=self._decode_categories(payload),
            transactions=self._decode_transactions(payload),
        )
        self._events.ledger_loaded(
            self._key, len(ledger.categories), len(ledger.transactions)
        )
        return ledger

    def save(self, ledger: Ledger) -> bool:
        """Write the full ledger. Returns False if the store refused it."""
        text = ledger.to_json()
        try:
            self._storage.set_item(self._key, text)
        except StorageError as e:
            self._events.save_failed(self._key, str(e))
            return False
        self._events.state_saved(self._key, len(text.encode("utf-8")))
        return True

    def clear(self) -> bool:
        """Remove the stored ledger. Safe to call when nothing is stored."""
        try:
            self._storage.remove_item(self._key)
        except StorageError as e:
            self._events.storage_unavailable(self._key, "clear", str(e))
            return False
        self._events.storage_cleared(self._key)
        return True

    def export(self) -> str:
        """The stored JSON text verbatim, or ``{}`` when nothing is stored."""
        try:
            raw = self._storage.get_item(self._key)
        except StorageError as e:
            self._events.storage_unavailable(self._key, "export", str(e))
            return "{}"
        return raw if raw is not None else "{}"

    def _parse(self, raw: str) -> dict:
        try:
            payload = json.loads(raw)
        except ValueError as e:
            raise MalformedStateError(f"Stored ledger is not valid JSON: {e}") from e
        if not isinstance(payload, dict):
            raise MalformedStateError(
                f"Stored ledger must be an object, got {type(payload).__name__}"
            )
        return payload

    def _decode_categories(self, payload: dict) -> list[str]:
        value: Any = payload.get("categories")
        if not isinstance(value, list):
            self._events.malformed_state(
                self._key, "categories", f"expected a list, got {type(value).__name__}"
            )
            return list(DEFAULT_CATEGORIES)

        categories: list[str] = []
        for item in value:
            if not isinstance(item, str) or not item.strip():
                self._events.malformed_state(
                    self._key, "categories", f"dropped invalid category {item!r}"
                )
                continue
            name = item.strip()
            if name not in categories:
                categories.append(name)
        return categories

    def _decode_transactions(self, payload: dict) -> list[Transaction]:
        value: Any = payload.get("transactions")
        if not isinstance(value, list):
            self._events.malformed_state(
                self._key, "transactions", f"expected a list, got {type(value).__name__}"
            )
            return []

        transactions: list[Transaction] = []
        seen: set[str] = set()
        for item in value:
            if isinstance(item, dict):
                item = {
                    k: v for k, v in item.items()
                    if not (v is None and k in OPTIONAL_RECORD_FIELDS)
                }
            try:
                tx = Transaction.model_validate(item)
            except ValidationError as e:
                self._events.malformed_state(
                    self._key, "transactions", f"skipped record: {e.error_count()} error(s)"
                )
                continue
            if tx.id in seen:
                self._events.malformed_state(
                    self._key, "transactions", f"skipped duplicate id {tx.id}"
                )
                continue
            seen.add(tx.id)
            transactions.append(tx)
        return transactions
