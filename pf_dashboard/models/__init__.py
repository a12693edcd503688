"""
Data Models Package

This package contains all Pydantic models used by the ledger core.
"""

from pf_dashboard.models.ledger import (
    ALL_MONTHS,
    DEFAULT_CATEGORIES,
    NO_CATEGORY,
    DashboardView,
    InputPolicy,
    Ledger,
    MonthlyAnalytics,
    Summary,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)
from pf_dashboard.models.events import (
    EventSeverity,
    LedgerEvent,
    LedgerEventBuilder,
    LedgerEventType,
)

__all__ = [
    # Ledger models
    "ALL_MONTHS",
    "DEFAULT_CATEGORIES",
    "NO_CATEGORY",
    "DashboardView",
    "InputPolicy",
    "Ledger",
    "MonthlyAnalytics",
    "Summary",
    "Transaction",
    "TransactionDraft",
    "TransactionType",
    "ValidationIssue",
    "ValidationResult",
    # Event models
    "EventSeverity",
    "LedgerEvent",
    "LedgerEventBuilder",
    "LedgerEventType",
]
