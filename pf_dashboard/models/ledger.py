"""
Core Data Models for the Personal Finance Dashboard

These models define the schemas for everything the ledger stores and derives.
They are designed to:
1. Enforce type safety at runtime
2. Keep the persisted JSON layout stable and tolerant of extra fields
3. Make derived fields impossible to set from the outside

DESIGN DECISION: Transactions are frozen. An edit builds a new record with
the same id and replaces the old one, so the cached ``month`` key can never
drift away from ``date``.
"""

from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    computed_field,
    field_serializer,
    field_validator,
)

from pf_dashboard.utils.formatting import month_key


DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Bills",
    "Transportation",
    "Savings",
    "Shopping",
)

# Month filter value meaning "no month restriction"
ALL_MONTHS = "all"

# Shown as the top category when a month has no expenses
NO_CATEGORY = "—"


# =============================================================================
# ENUMS
# =============================================================================

class TransactionType(str, Enum):
    """Direction of a transaction. The stored amount is always non-negative."""
    INCOME = "income"
    EXPENSE = "expense"


class InputPolicy(str, Enum):
    """
    What to do with input that cannot be used as-is.

    COERCE is permissive (bad amounts become zero) but reports every
    coercion as a warning issue.
    REJECT refuses the mutation and leaves the ledger untouched.
    """
    COERCE = "coerce"
    REJECT = "reject"


# =============================================================================
# LEDGER MODELS
# =============================================================================

class Transaction(BaseModel):
    """
    A single income or expense record.

    ``month`` is computed from ``date`` on every access and serialized for
    the persisted layout; an incoming ``month`` is ignored.
    """
    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        extra="ignore",
    )

    id: str = Field(
        ...,
        min_length=1,
        description="Opaque identifier, assigned once at creation"
    )
    type: TransactionType
    description: str = Field(
        default="",
        description="Free-text label, may be empty"
    )
    amount: Decimal = Field(
        ...,
        ge=0,
        description="Non-negative amount; the sign comes from type"
    )
    date: date
    category: str = Field(
        default="",
        description="Category name; not enforced as a foreign key"
    )

    @computed_field
    @property
    def month(self) -> str:
        return month_key(self.date)

    @field_validator("amount", mode="before")
    @classmethod
    def float_amount_via_str(cls, v: Any) -> Any:
        """Avoid binary float expansion when reading JSON numbers."""
        if isinstance(v, float):
            return Decimal(str(v))
        return v

    @field_serializer("amount", when_used="json")
    def serialize_amount(self, amount: Decimal) -> Union[int, float, str]:
        """
        JSON number when the value survives the trip through float,
        otherwise the exact decimal text.
        """
        if amount == amount.to_integral_value():
            return int(amount)
        as_float = float(amount)
        if Decimal(str(as_float)) == amount:
            return as_float
        return str(amount)


class TransactionDraft(BaseModel):
    """
    Raw transaction input as collected by the presentation layer.

    Nothing is validated here; DraftValidator decides what is usable.
    """
    model_config = ConfigDict(extra="ignore")

    type: Any = TransactionType.EXPENSE.value
    description: Any = ""
    amount: Any = None
    date: Any = None
    category: Any = ""


class Ledger(BaseModel):
    """The full set of categories and transactions under management."""

    categories: list[str] = Field(
        default_factory=lambda: list(DEFAULT_CATEGORIES)
    )
    transactions: list[Transaction] = Field(default_factory=list)

    @classmethod
    def default(cls) -> "Ledger":
        """Fresh seed state: default categories, no transactions."""
        return cls()

    def index_of(self, transaction_id: str) -> Optional[int]:
        for idx, tx in enumerate(self.transactions):
            if tx.id == transaction_id:
                return idx
        return None

    def to_json(self) -> str:
        """Serialize to the persisted layout."""
        return self.model_dump_json()


# =============================================================================
# DERIVED VIEWS
# =============================================================================

class Summary(BaseModel):
    """All-time totals."""

    balance: Decimal
    total_income: Decimal
    total_expense: Decimal


class MonthlyAnalytics(BaseModel):
    """Analytics card for one calendar month."""

    month: str = Field(..., description="Month key the figures refer to")
    month_income: Decimal
    month_expense: Decimal
    top_category: str = Field(
        default=NO_CATEGORY,
        description="Category with the largest expense total this month"
    )
    highest_expense: Decimal = Field(
        default=Decimal("0"),
        description="Largest single expense across all months"
    )


class DashboardView(BaseModel):
    """Everything the presentation layer needs for one full re-render."""

    categories: list[str]
    summary: Summary
    recent: list[Transaction]
    months: list[str]
    selected_month: str = ALL_MONTHS
    transactions: list[Transaction]
    analytics: MonthlyAnalytics


# =============================================================================
# VALIDATION MODELS
# =============================================================================

class ValidationIssue(BaseModel):
    """A single problem found in a transaction draft."""

    field: str = Field(
        ...,
        description="Field with the issue"
    )
    issue_type: str = Field(
        ...,
        description="Type of issue (e.g., 'missing', 'invalid_value', 'unknown_category')"
    )
    message: str = Field(
        ...,
        description="Human-readable description of the issue"
    )
    severity: str = Field(
        ...,
        pattern="^(error|warning|info)$",
        description="Issue severity"
    )


class ValidationResult(BaseModel):
    """Outcome of validating one draft."""

    policy: InputPolicy
    issues: list[ValidationIssue] = Field(default_factory=list)

    @property
    def has_errors(self) -> bool:
        return any(issue.severity == "error" for issue in self.issues)

    @property
    def error_count(self) -> int:
        return sum(1 for issue in self.issues if issue.severity == "error")

    @property
    def warnings(self) -> list[ValidationIssue]:
        return [issue for issue in self.issues if issue.severity == "warning"]

    @property
    def is_valid(self) -> bool:
        return not self.has_errors
