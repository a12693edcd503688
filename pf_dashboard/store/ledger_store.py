"""
Ledger Store

The only owner of the Ledger. Every mutation goes through here.

GUARANTEES:
- Every mutation is persisted before the method returns
- New state is visible to the next read immediately
- A rejected draft or an unknown id leaves the ledger exactly as it was
- A failed save is logged and does not roll back memory; the in-memory
  ledger stays the source of truth for the session
- Readers get deep copies and cannot change the ledger behind our back
"""

from typing import Optional

from pf_dashboard.events import LedgerEventLogger
from pf_dashboard.models.ledger import (
    Ledger,
    Transaction,
    ValidationIssue,
    ValidationResult,
)
from pf_dashboard.services.persistence import LedgerPersistence
from pf_dashboard.services.storage.interface import NotFoundError
from pf_dashboard.utils.formatting import generate_id
from pf_dashboard.validation.validator import (
    DraftInput,
    DraftValidator,
    InvalidInputError,
)


class LedgerStore:
    """In-memory ledger with synchronous write-through persistence."""

    def __init__(
        self,
        persistence: LedgerPersistence,
        ledger: Optional[Ledger] = None,
        validator: Optional[DraftValidator] = None,
        event_logger: Optional[LedgerEventLogger] = None,
    ):
        """
        Args:
            persistence: Where every mutation is written
            ledger: Starting state. Defaults to the seed ledger.
            validator: Draft validator; defaults to the COERCE policy
            event_logger: Where mutations and problems are reported
        """
        self._persistence = persistence
        self._ledger = (
            ledger.model_copy(deep=True) if ledger is not None else Ledger.default()
        )
        self._validator = validator or DraftValidator()
        self._events = event_logger or LedgerEventLogger()
        self._last_issues: list[ValidationIssue] = []

    @classmethod
    def hydrate(
        cls,
        persistence: LedgerPersistence,
        validator: Optional[DraftValidator] = None,
        event_logger: Optional[LedgerEventLogger] = None,
    ) -> "LedgerStore":
        """Create a store from whatever the persistence layer has saved."""
        return cls(
            persistence,
            ledger=persistence.load(),
            validator=validator,
            event_logger=event_logger,
        )

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    @property
    def ledger(self) -> Ledger:
        """A deep copy of the current ledger."""
        return self._ledger.model_copy(deep=True)

    @property
    def categories(self) -> list[str]:
        return list(self._ledger.categories)

    @property
    def transactions(self) -> list[Transaction]:
        return list(self._ledger.transactions)

    @property
    def last_issues(self) -> list[ValidationIssue]:
        """Issues reported for the most recent add or update, including warnings."""
        return list(self._last_issues)

    @property
    def validator(self) -> DraftValidator:
        return self._validator

    def get_transaction(self, transaction_id: str) -> Optional[Transaction]:
        idx = self._ledger.index_of(transaction_id)
        if idx is None:
            return None
        return self._ledger.transactions[idx]

    def export(self) -> str:
        """The persisted JSON verbatim, as the clipboard export hands it out."""
        return self._persistence.export()

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def add_transaction(self, draft: DraftInput) -> Transaction:
        """
        Validate a draft, store it under a fresh id and persist.

        Raises:
            InvalidInputError: If the draft is rejected (ledger unchanged)
        """
        existing = {tx.id for tx in self._ledger.transactions}
        transaction = self._build(draft, generate_id(existing))

        self._ledger.transactions.append(transaction)
        self._commit()

        self._events.transaction_added(
            transaction.id, transaction.type.value, str(transaction.amount)
        )
        return transaction

    def update_transaction(self, transaction_id: str, draft: DraftInput) -> Transaction:
        """
        Replace a transaction with one built from a draft, keeping its id.

        Raises:
            NotFoundError: If no transaction has this id (ledger unchanged)
            InvalidInputError: If the draft is rejected (ledger unchanged)
        """
        idx = self._ledger.index_of(transaction_id)
        if idx is None:
            self._events.not_found(transaction_id, "update")
            raise NotFoundError(transaction_id)

        transaction = self._build(draft, transaction_id)

        self._ledger.transactions[idx] = transaction
        self._commit()

        self._events.transaction_updated(transaction.id, str(transaction.amount))
        return transaction

    def delete_transaction(self, transaction_id: str) -> bool:
        """Remove a transaction. Returns False (and writes nothing) if absent."""
        idx = self._ledger.index_of(transaction_id)
        if idx is None:
            return False

        del self._ledger.transactions[idx]
        self._commit()

        self._events.transaction_deleted(transaction_id)
        return True

    def add_category(self, name: str) -> bool:
        """
        Append a category if it is non-empty and new (exact match).

        Returns True if the category was added.
        """
        name = (name or "").strip()
        if not name or name in self._ledger.categories:
            return False

        self._ledger.categories.append(name)
        self._commit()

        self._events.category_added(name)
        return True

    def reset(self) -> None:
        """Restore the seed ledger, purge stored state, then save the clean state."""
        self._ledger = Ledger.default()
        self._last_issues = []
        self._persistence.clear()
        self._commit()

        self._events.ledger_reset()

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _build(self, draft: DraftInput, transaction_id: str) -> Transaction:
        try:
            transaction, result = self._validator.build(
                draft,
                transaction_id,
                categories=self._ledger.categories,
            )
        except InvalidInputError as e:
            self._last_issues = list(e.issues)
            self._events.invalid_input(self._dump_issues(e.issues), transaction_id)
            raise

        self._record_warnings(result, transaction_id)
        return transaction

    def _record_warnings(self, result: ValidationResult, transaction_id: str) -> None:
        self._last_issues = list(result.issues)
        if result.warnings:
            self._events.input_coerced(self._dump_issues(result.warnings), transaction_id)

    def _commit(self) -> bool:
        return self._persistence.save(self._ledger)

    @staticmethod
    def _dump_issues(issues: list[ValidationIssue]) -> list[dict]:
        return [issue.model_dump() for issue in issues]
