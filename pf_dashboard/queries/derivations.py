"""
Derivation Engine

DESIGN DECISION: Every view the dashboard shows is computed from scratch
from the ledger on each call. There are no cached or incremental aggregates,
so a view can never disagree with the transactions it was built from.

All functions here are pure. They read the ledger and never modify it.
Sorting is stable: transactions sharing a date keep their stored order.
"""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal

from pf_dashboard.models.ledger import (
    ALL_MONTHS,
    NO_CATEGORY,
    Ledger,
    MonthlyAnalytics,
    Summary,
    Transaction,
    TransactionType,
)
from pf_dashboard.utils.formatting import month_key

ZERO = Decimal("0")


def _total(transactions: Iterable[Transaction], tx_type: TransactionType) -> Decimal:
    return sum((tx.amount for tx in transactions if tx.type == tx_type), ZERO)


def _newest_first(transactions: Iterable[Transaction]) -> list[Transaction]:
    return sorted(transactions, key=lambda tx: tx.date, reverse=True)


def summary(ledger: Ledger) -> Summary:
    """All-time income, expense and the balance between them."""
    income = _total(ledger.transactions, TransactionType.INCOME)
    expense = _total(ledger.transactions, TransactionType.EXPENSE)
    return Summary(
        balance=income - expense,
        total_income=income,
        total_expense=expense,
    )


def recent(ledger: Ledger, n: int = 6) -> list[Transaction]:
    """The ``n`` newest transactions, newest first."""
    if n <= 0:
        return []
    return _newest_first(ledger.transactions)[:n]


def months_present(ledger: Ledger) -> list[str]:
    """Distinct month keys, latest first. YYYY-MM sorts chronologically as text."""
    return sorted({tx.month for tx in ledger.transactions}, reverse=True)


def filter_by_month(ledger: Ledger, month: str = ALL_MONTHS) -> list[Transaction]:
    """
    Transactions newest first, restricted to one month.

    ``ALL_MONTHS`` returns every transaction.
    """
    ordered = _newest_first(ledger.transactions)
    if month == ALL_MONTHS:
        return ordered
    return [tx for tx in ordered if tx.month == month]


def category_totals(ledger: Ledger, month: str) -> dict[str, Decimal]:
    """
    Expense total per category within one month.

    Keys appear in the order their first expense was stored.
    """
    totals: dict[str, Decimal] = {}
    for tx in ledger.transactions:
        if tx.type == TransactionType.EXPENSE and tx.month == month:
            totals[tx.category] = totals.get(tx.category, ZERO) + tx.amount
    return totals


def analytics_for_current_month(ledger: Ledger, reference_date: date) -> MonthlyAnalytics:
    """
    Analytics card for the month containing ``reference_date``.

    The caller supplies the date; nothing here reads the clock.
    """
    mkey = month_key(reference_date)
    in_month = [tx for tx in ledger.transactions if tx.month == mkey]

    totals = category_totals(ledger, mkey)
    # max() keeps the first of equal values, so ties go to the earliest category
    top_category = max(totals, key=totals.__getitem__) if totals else NO_CATEGORY

    expenses = [
        tx.amount for tx in ledger.transactions if tx.type == TransactionType.EXPENSE
    ]

    return MonthlyAnalytics(
        month=mkey,
        month_income=_total(in_month, TransactionType.INCOME),
        month_expense=_total(in_month, TransactionType.EXPENSE),
        top_category=top_category,
        highest_expense=max(expenses) if expenses else ZERO,
    )
