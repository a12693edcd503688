"""Tests for draft validation under both input policies."""

from datetime import date, datetime
from decimal import Decimal

import pytest

from pf_dashboard.models.ledger import InputPolicy, TransactionDraft, TransactionType
from pf_dashboard.validation import DraftValidator, InvalidInputError

CATEGORIES = ["Food", "Bills"]


def draft(**overrides):
    values = {
        "type": "expense",
        "description": " Lunch ",
        "amount": "12.50",
        "date": "2024-03-05",
        "category": "Food",
    }
    values.update(overrides)
    return values


class TestValidDrafts:
    """Drafts that need no correction."""

    def test_builds_transaction(self):
        tx, result = DraftValidator().build(draft(), "abc1234", CATEGORIES)
        assert tx.id == "abc1234"
        assert tx.type == TransactionType.EXPENSE
        assert tx.description == "Lunch"
        assert tx.amount == Decimal("12.50")
        assert tx.date == date(2024, 3, 5)
        assert tx.month == "2024-03"
        assert result.issues == []

    def test_accepts_draft_model_and_native_types(self):
        model = TransactionDraft(
            type=TransactionType.INCOME,
            amount=5000,
            date=date(2024, 1, 10),
            category="Food",
        )
        tx, _ = DraftValidator().build(model, "abc1234", CATEGORIES)
        assert tx.type == TransactionType.INCOME
        assert tx.amount == 5000

    def test_type_is_case_insensitive(self):
        tx, _ = DraftValidator().build(draft(type=" Income "), "abc1234", CATEGORIES)
        assert tx.type == TransactionType.INCOME

    def test_missing_description_is_empty(self):
        tx, _ = DraftValidator().build(draft(description=None), "abc1234", CATEGORIES)
        assert tx.description == ""

    def test_category_check_skipped_without_category_list(self):
        result = DraftValidator(InputPolicy.REJECT).validate(draft(category="Travel"))
        assert result.is_valid


class TestCoercePolicy:
    """Bad amounts become zero and are reported as warnings."""

    @pytest.mark.parametrize(
        "amount, issue_type",
        [
            (None, "missing"),
            ("", "missing"),
            ("abc", "not_numeric"),
            ("NaN", "not_numeric"),
            ("-5", "negative"),
        ],
    )
    def test_bad_amount_coerced_to_zero(self, amount, issue_type):
        tx, result = DraftValidator(InputPolicy.COERCE).build(
            draft(amount=amount), "abc1234", CATEGORIES
        )
        assert tx.amount == Decimal("0")
        assert [i.issue_type for i in result.warnings] == [issue_type]
        assert result.is_valid

    def test_unknown_category_is_a_warning(self):
        tx, result = DraftValidator(InputPolicy.COERCE).build(
            draft(category="Travel"), "abc1234", CATEGORIES
        )
        assert tx.category == "Travel"
        assert result.warnings[0].issue_type == "unknown_category"


class TestRejectPolicy:
    """Anything unusable rejects the whole draft."""

    @pytest.mark.parametrize("amount", [None, "abc", "-5", "inf"])
    def test_bad_amount_rejected(self, amount):
        with pytest.raises(InvalidInputError) as exc_info:
            DraftValidator(InputPolicy.REJECT).build(draft(amount=amount), "abc1234", CATEGORIES)
        assert [i.field for i in exc_info.value.issues] == ["amount"]

    def test_unknown_category_rejected(self):
        result = DraftValidator(InputPolicy.REJECT).validate(draft(category="Travel"), CATEGORIES)
        assert result.error_count == 1


class TestAlwaysRejected:
    """Fields with no safe substitute are errors under both policies."""

    @pytest.mark.parametrize("policy", list(InputPolicy))
    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"type": "transfer"}, "type"),
            ({"date": None}, "date"),
            ({"date": "05/03/2024"}, "date"),
            ({"category": "  "}, "category"),
        ],
    )
    def test_rejected(self, policy, overrides, field):
        with pytest.raises(InvalidInputError) as exc_info:
            DraftValidator(policy).build(draft(**overrides), "abc1234", CATEGORIES)
        assert field in [i.field for i in exc_info.value.issues if i.severity == "error"]

    def test_error_message_lists_problems(self):
        with pytest.raises(InvalidInputError, match="Category is required"):
            DraftValidator().build(draft(category=""), "abc1234", CATEGORIES)


class TestDateParsing:
    """Only exact ISO dates or full ISO datetimes are accepted."""

    @pytest.mark.parametrize("policy", list(InputPolicy))
    @pytest.mark.parametrize("value", ["2024-01-10garbage", "2024-01-10 12:00", "2024-01-10T25:00"])
    def test_trailing_text_is_rejected(self, policy, value):
        with pytest.raises(InvalidInputError) as exc_info:
            DraftValidator(policy).build(draft(date=value), "abc1234", CATEGORIES)
        assert [i.field for i in exc_info.value.issues] == ["date"]

    def test_surrounding_whitespace_is_ignored(self):
        tx, result = DraftValidator().build(draft(date=" 2024-01-10 "), "abc1234", CATEGORIES)
        assert tx.date == date(2024, 1, 10)
        assert result.issues == []

    @pytest.mark.parametrize("value", ["2024-01-10T09:30:00", "2024-01-10T23:59:59Z"])
    def test_time_part_is_dropped_with_warning(self, value):
        tx, result = DraftValidator(InputPolicy.REJECT).build(draft(date=value), "abc1234", CATEGORIES)
        assert tx.date == date(2024, 1, 10)
        assert [(i.field, i.issue_type, i.severity) for i in result.issues] == [
            ("date", "time_dropped", "warning"),
        ]

    def test_datetime_value_keeps_its_date(self):
        tx, result = DraftValidator().build(
            draft(date=datetime(2024, 1, 10, 18, 45)), "abc1234", CATEGORIES
        )
        assert tx.date == date(2024, 1, 10)
        assert result.warnings[0].issue_type == "time_dropped"
