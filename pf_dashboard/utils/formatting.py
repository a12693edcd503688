"""
Formatting and identifier helpers.

These are the only display-oriented helpers the core ships. Everything else
about presentation belongs to whoever renders the dashboard.
"""

import secrets
import string
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

DEFAULT_CURRENCY_SYMBOL = "₱"

ID_LENGTH = 7
_ID_ALPHABET = string.digits + string.ascii_lowercase


def to_decimal(value: Any) -> Decimal:
    """
    Convert anything to a finite Decimal, falling back to zero.

    Floats go through str() so 0.1 becomes Decimal("0.1"), not its binary
    expansion.
    """
    if isinstance(value, bool) or value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        number = value
    else:
        try:
            number = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return Decimal("0")
    if not number.is_finite():
        return Decimal("0")
    return number


def format_money(value: Any, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Format an amount as ``₱1,234.50``. Non-numeric input renders as zero."""
    number = to_decimal(value)
    return f"{symbol}{number:,.2f}"


def format_signed_amount(transaction, symbol: str = DEFAULT_CURRENCY_SYMBOL) -> str:
    """Expenses get a leading minus, income is shown as-is."""
    text = format_money(transaction.amount, symbol)
    if transaction.type.value == "expense":
        return "-" + text
    return text


def display_label(transaction) -> str:
    """Description if there is one, otherwise the category name."""
    return transaction.description or transaction.category


def month_key(value: date) -> str:
    return f"{value.year:04d}-{value.month:02d}"


def generate_id(existing: Iterable[str] = ()) -> str:
    """
    Generate a short random base-36 identifier.

    Draws again on collision with ``existing``.
    """
    taken = set(existing)
    while True:
        candidate = "".join(secrets.choice(_ID_ALPHABET) for _ in range(ID_LENGTH))
        if candidate not in taken:
            return candidate
