"""Structured event logging package."""

from pf_dashboard.events.logger import LedgerEventLogger

__all__ = ["LedgerEventLogger"]
