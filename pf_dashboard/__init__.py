"""
Personal Finance Dashboard - Ledger Core

The state and aggregation engine behind a personal finance dashboard:
a categorized transaction ledger, its persistence, and the balances,
monthly breakdowns and analytics derived from it.

DESIGN PRINCIPLES:
1. One owner of the ledger, explicit construction, no globals
2. Every mutation is committed before it returns
3. Derived views are recomputed, never cached
4. Bad input and storage failures are reported, never fatal
"""

__version__ = "1.0.0"
__author__ = "Personal Finance Dashboard Team"
