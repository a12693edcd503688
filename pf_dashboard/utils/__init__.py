"""Formatting and identifier helpers."""

from pf_dashboard.utils.formatting import (
    DEFAULT_CURRENCY_SYMBOL,
    display_label,
    format_money,
    format_signed_amount,
    generate_id,
    month_key,
    to_decimal,
)

__all__ = [
    "DEFAULT_CURRENCY_SYMBOL",
    "display_label",
    "format_money",
    "format_signed_amount",
    "generate_id",
    "month_key",
    "to_decimal",
]
