"""
Ledger Event Models

Every mutation and every storage problem produces a LedgerEvent that is
written to the structured log. Events are not persisted anywhere; they exist
so a failed save or a coerced amount is never silent.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import BaseModel, Field


class LedgerEventType(str, Enum):
    """Types of events the ledger reports."""
    # Mutations
    TRANSACTION_ADDED = "transaction_added"
    TRANSACTION_UPDATED = "transaction_updated"
    TRANSACTION_DELETED = "transaction_deleted"
    CATEGORY_ADDED = "category_added"
    LEDGER_RESET = "ledger_reset"

    # Persistence
    LEDGER_LOADED = "ledger_loaded"
    STATE_SAVED = "state_saved"
    SAVE_FAILED = "save_failed"
    STORAGE_CLEARED = "storage_cleared"
    STORAGE_UNAVAILABLE = "storage_unavailable"
    MALFORMED_STATE = "malformed_state"

    # Rejected or coerced input
    INVALID_INPUT = "invalid_input"
    INPUT_COERCED = "input_coerced"
    NOT_FOUND = "not_found"


class EventSeverity(str, Enum):
    """Severity level for ledger events."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LedgerEvent(BaseModel):
    """A single structured log event."""

    event_id: UUID = Field(default_factory=uuid4)
    timestamp: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the event occurred (UTC)"
    )
    event_type: LedgerEventType
    severity: EventSeverity = EventSeverity.INFO

    transaction_id: Optional[str] = Field(
        default=None,
        description="Transaction the event relates to, if any"
    )
    description: str
    details: dict[str, Any] = Field(default_factory=dict)
    error_message: Optional[str] = None

    def to_log_dict(self) -> dict:
        """Convert to keyword arguments for the structured logger."""
        return {
            "event_id": str(self.event_id),
            "timestamp": self.timestamp.isoformat(),
            "event_type": self.event_type.value,
            "severity": self.severity.value,
            "transaction_id": self.transaction_id,
            "description": self.description,
            "details": self.details,
            "error_message": self.error_message,
        }


class LedgerEventBuilder:
    """
    Helper class to build ledger events with common patterns.

    Usage:
        event = LedgerEventBuilder.transaction_added(tx_id, "expense", "100")
    """

    @staticmethod
    def transaction_added(
        transaction_id: str,
        transaction_type: str,
        amount: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_ADDED,
            transaction_id=transaction_id,
            description=f"Added {transaction_type} of {amount}",
            details={"type": transaction_type, "amount": amount},
        )

    @staticmethod
    def transaction_updated(transaction_id: str, amount: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_UPDATED,
            transaction_id=transaction_id,
            description=f"Updated transaction {transaction_id}",
            details={"amount": amount},
        )

    @staticmethod
    def transaction_deleted(transaction_id: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.TRANSACTION_DELETED,
            transaction_id=transaction_id,
            description=f"Deleted transaction {transaction_id}",
        )

    @staticmethod
    def category_added(name: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.CATEGORY_ADDED,
            description=f"Added category {name}",
            details={"category": name},
        )

    @staticmethod
    def ledger_reset() -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_RESET,
            severity=EventSeverity.WARNING,
            description="Ledger reset to default state",
        )

    @staticmethod
    def ledger_loaded(
        key: str,
        category_count: int,
        transaction_count: int,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.LEDGER_LOADED,
            description=f"Loaded ledger from {key}",
            details={
                "key": key,
                "categories": category_count,
                "transactions": transaction_count,
            },
        )

    @staticmethod
    def state_saved(key: str, size: int) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STATE_SAVED,
            severity=EventSeverity.DEBUG,
            description=f"Saved ledger to {key}",
            details={"key": key, "bytes": size},
        )

    @staticmethod
    def save_failed(key: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.SAVE_FAILED,
            severity=EventSeverity.ERROR,
            description="Could not save state",
            details={"key": key},
            error_message=error_message,
        )

    @staticmethod
    def storage_cleared(key: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STORAGE_CLEARED,
            description=f"Removed {key} from storage",
            details={"key": key},
        )

    @staticmethod
    def storage_unavailable(key: str, operation: str, error_message: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.STORAGE_UNAVAILABLE,
            severity=EventSeverity.WARNING,
            description=f"Storage unavailable during {operation}",
            details={"key": key, "operation": operation},
            error_message=error_message,
        )

    @staticmethod
    def malformed_state(
        key: str,
        field: str,
        error_message: str,
    ) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.MALFORMED_STATE,
            severity=EventSeverity.WARNING,
            description=f"Persisted {field} unusable, falling back to defaults",
            details={"key": key, "field": field},
            error_message=error_message,
        )

    @staticmethod
    def invalid_input(issues: list[dict], transaction_id: Optional[str] = None) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.INVALID_INPUT,
            severity=EventSeverity.WARNING,
            transaction_id=transaction_id,
            description=f"Rejected draft with {len(issues)} issue(s)",
            details={"issues": issues},
        )

    @staticmethod
    def input_coerced(issues: list[dict], transaction_id: Optional[str] = None) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.INPUT_COERCED,
            severity=EventSeverity.WARNING,
            transaction_id=transaction_id,
            description=f"Accepted draft with {len(issues)} warning(s)",
            details={"issues": issues},
        )

    @staticmethod
    def not_found(transaction_id: str, operation: str) -> LedgerEvent:
        return LedgerEvent(
            event_type=LedgerEventType.NOT_FOUND,
            severity=EventSeverity.WARNING,
            transaction_id=transaction_id,
            description=f"No transaction {transaction_id} to {operation}",
            details={"operation": operation},
        )
