"""Derived views over the ledger."""

from pf_dashboard.queries.derivations import (
    analytics_for_current_month,
    category_totals,
    filter_by_month,
    months_present,
    recent,
    summary,
)

__all__ = [
    "analytics_for_current_month",
    "category_totals",
    "filter_by_month",
    "months_present",
    "recent",
    "summary",
]
