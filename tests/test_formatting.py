"""Tests for formatting and identifier helpers."""

from datetime import date
from decimal import Decimal

import pytest

from pf_dashboard.models.ledger import Transaction
from pf_dashboard.utils.formatting import (
    ID_LENGTH,
    display_label,
    format_money,
    format_signed_amount,
    generate_id,
    month_key,
    to_decimal,
)


class TestFormatMoney:
    """Tests for the money formatter."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0, "₱0.00"),
            (5000, "₱5,000.00"),
            (1234.5, "₱1,234.50"),
            (Decimal("1234567.891"), "₱1,234,567.89"),
            ("300", "₱300.00"),
        ],
    )
    def test_formats_with_grouping_and_two_decimals(self, value, expected):
        assert format_money(value) == expected

    @pytest.mark.parametrize("value", [None, "", "abc", float("nan"), True])
    def test_non_numeric_renders_as_zero(self, value):
        assert format_money(value) == "₱0.00"

    def test_custom_symbol(self):
        assert format_money(12, symbol="$") == "$12.00"


class TestTransactionDisplay:
    """Tests for per-transaction display helpers."""

    def test_expense_is_prefixed_with_minus(self):
        tx = Transaction(id="a", type="expense", amount=100, date=date(2024, 1, 1))
        assert format_signed_amount(tx) == "-₱100.00"

    def test_income_is_unsigned(self):
        tx = Transaction(id="a", type="income", amount=100, date=date(2024, 1, 1))
        assert format_signed_amount(tx) == "₱100.00"

    def test_label_falls_back_to_category(self):
        tx = Transaction(id="a", type="expense", amount=1, date=date(2024, 1, 1), category="Bills")
        assert display_label(tx) == "Bills"

    def test_label_prefers_description(self):
        tx = Transaction(
            id="a", type="expense", amount=1, date=date(2024, 1, 1),
            category="Bills", description="Electricity",
        )
        assert display_label(tx) == "Electricity"


class TestHelpers:
    """Tests for month keys, decimals and ids."""

    def test_month_key_is_zero_padded(self):
        assert month_key(date(2024, 3, 15)) == "2024-03"

    def test_to_decimal_parses_strings(self):
        assert to_decimal(" 12.50 ") == Decimal("12.50")

    def test_to_decimal_rejects_infinity(self):
        assert to_decimal("inf") == Decimal("0")

    def test_generate_id_shape(self):
        new_id = generate_id()
        assert len(new_id) == ID_LENGTH
        assert new_id.isalnum() and new_id == new_id.lower()

    def test_generate_id_avoids_existing(self, monkeypatch):
        draws = iter("aaaaaaa" + "bbbbbbb")
        monkeypatch.setattr(
            "pf_dashboard.utils.formatting.secrets.choice", lambda _: next(draws)
        )
        assert generate_id(existing={"aaaaaaa"}) == "bbbbbbb"
