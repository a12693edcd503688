"""
Transaction Draft Validation

Drafts arrive from the presentation layer as raw values. Validation runs in
two stages:

STAGE 1 - SCHEMA VALIDATION:
- Type is income or expense
- Date is present and ISO formatted; a time part after "T" is dropped
  with a warning, any other trailing text is an error
- Amount parses as a finite number

STAGE 2 - SEMANTIC VALIDATION:
- Amount is not negative
- Category is present and known to the ledger

Anything that cannot be used as-is becomes a ValidationIssue. Under the
COERCE policy a bad amount is replaced by zero and reported as a warning;
under REJECT it is an error. Missing type, date or category are errors under
both policies, since there is no safe value to substitute.
"""

from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Optional, Union

from pf_dashboard.models.ledger import (
    InputPolicy,
    Transaction,
    TransactionDraft,
    TransactionType,
    ValidationIssue,
    ValidationResult,
)


class InvalidInputError(ValueError):
    """A draft was rejected; ``issues`` says why."""

    def __init__(self, issues: list[ValidationIssue]):
        self.issues = issues
        messages = "; ".join(issue.message for issue in issues if issue.severity == "error")
        super().__init__(f"Invalid transaction: {messages}")


DraftInput = Union[TransactionDraft, dict]


class DraftValidator:
    """Turns raw drafts into Transactions according to an InputPolicy."""

    def __init__(self, policy: InputPolicy = InputPolicy.COERCE):
        self._policy = InputPolicy(policy)

    @property
    def policy(self) -> InputPolicy:
        return self._policy

    def validate(
        self,
        draft: DraftInput,
        categories: Optional[Iterable[str]] = None,
    ) -> ValidationResult:
        """Run both stages and collect every issue found."""
        _, issues = self._check(self._as_draft(draft), categories)
        return ValidationResult(policy=self._policy, issues=issues)

    def build(
        self,
        draft: DraftInput,
        transaction_id: str,
        categories: Optional[Iterable[str]] = None,
    ) -> tuple[Transaction, ValidationResult]:
        """
        Build a Transaction from a draft.

        Raises:
            InvalidInputError: If any error-level issue was found
        """
        values, issues = self._check(self._as_draft(draft), categories)
        result = ValidationResult(policy=self._policy, issues=issues)
        if result.has_errors:
            raise InvalidInputError(result.issues)

        transaction = Transaction(id=transaction_id, **values)
        return transaction, result

    def _as_draft(self, draft: DraftInput) -> TransactionDraft:
        if isinstance(draft, TransactionDraft):
            return draft
        return TransactionDraft.model_validate(draft)

    def _check(
        self,
        draft: TransactionDraft,
        categories: Optional[Iterable[str]],
    ) -> tuple[dict[str, Any], list[ValidationIssue]]:
        values: dict[str, Any] = {}
        issues: list[ValidationIssue] = []

        self._validate_schema(draft, values, issues)
        self._validate_semantic(draft, categories, values, issues)

        description = draft.description
        values["description"] = "" if description is None else str(description).strip()
        return values, issues

    def _validate_schema(
        self,
        draft: TransactionDraft,
        values: dict[str, Any],
        issues: list[ValidationIssue],
    ) -> None:
        """Stage 1: type, date and amount parse correctly."""
        raw_type = draft.type
        if isinstance(raw_type, TransactionType):
            values["type"] = raw_type
        else:
            try:
                values["type"] = TransactionType(str(raw_type).strip().lower())
            except ValueError:
                issues.append(ValidationIssue(
                    field="type",
                    issue_type="invalid_value",
                    message=f"Type must be 'income' or 'expense', got {raw_type!r}",
                    severity="error",
                ))

        parsed_date, time_dropped = self._parse_date(draft.date)
        if parsed_date is None:
            issues.append(ValidationIssue(
                field="date",
                issue_type="missing" if draft.date in (None, "") else "invalid_format",
                message=f"Date must be an ISO date (YYYY-MM-DD), got {draft.date!r}",
                severity="error",
            ))
        else:
            values["date"] = parsed_date
            if time_dropped:
                issues.append(ValidationIssue(
                    field="date",
                    issue_type="time_dropped",
                    message=f"Only the date of {draft.date!r} is kept",
                    severity="warning",
                ))

        amount = self._parse_amount(draft.amount)
        if amount is None:
            self._amount_issue(
                values,
                issues,
                "missing" if draft.amount in (None, "") else "not_numeric",
                f"Amount must be a number, got {draft.amount!r}",
            )
        else:
            values["amount"] = amount

    def _validate_semantic(
        self,
        draft: TransactionDraft,
        categories: Optional[Iterable[str]],
        values: dict[str, Any],
        issues: list[ValidationIssue],
    ) -> None:
        """Stage 2: amount sign and category membership."""
        amount = values.get("amount")
        if amount is not None and amount < 0:
            self._amount_issue(
                values,
                issues,
                "negative",
                f"Amount cannot be negative, got {amount}",
            )

        category = "" if draft.category is None else str(draft.category).strip()
        if not category:
            issues.append(ValidationIssue(
                field="category",
                issue_type="missing",
                message="Category is required",
                severity="error",
            ))
            return

        values["category"] = category
        if categories is not None and category not in set(categories):
            issues.append(ValidationIssue(
                field="category",
                issue_type="unknown_category",
                message=f"Category {category!r} is not in the ledger",
                severity="error" if self._policy == InputPolicy.REJECT else "warning",
            ))

    def _amount_issue(
        self,
        values: dict[str, Any],
        issues: list[ValidationIssue],
        issue_type: str,
        message: str,
    ) -> None:
        if self._policy == InputPolicy.COERCE:
            values["amount"] = Decimal("0")
            issues.append(ValidationIssue(
                field="amount",
                issue_type=issue_type,
                message=f"{message}; using 0",
                severity="warning",
            ))
        else:
            values.pop("amount", None)
            issues.append(ValidationIssue(
                field="amount",
                issue_type=issue_type,
                message=message,
                severity="error",
            ))

    @staticmethod
    def _parse_amount(value: Any) -> Optional[Decimal]:
        if value is None or isinstance(value, bool):
            return None
        if isinstance(value, Decimal):
            number = value
        else:
            try:
                number = Decimal(str(value).strip())
            except (InvalidOperation, ValueError):
                return None
        if not number.is_finite():
            return None
        return number

    @staticmethod
    def _parse_date(value: Any) -> tuple[Optional[date], bool]:
        """Returns the date and whether a time part was dropped to get it."""
        if isinstance(value, datetime):
            return value.date(), True
        if isinstance(value, date):
            return value, False
        if not isinstance(value, str) or not value.strip():
            return None, False
        text = value.strip()
        try:
            return date.fromisoformat(text), False
        except ValueError:
            pass
        # Only a full ISO datetime ("YYYY-MM-DDTHH:MM...") may carry extra text
        if len(text) > 10 and text[10] == "T":
            if text.endswith("Z"):
                text = text[:-1] + "+00:00"
            try:
                return datetime.fromisoformat(text).date(), True
            except ValueError:
                return None, False
        return None, False
