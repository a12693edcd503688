"""Ledger store package."""

from pf_dashboard.store.ledger_store import LedgerStore

__all__ = ["LedgerStore"]
