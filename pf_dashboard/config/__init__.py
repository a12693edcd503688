"""Configuration package."""

from pf_dashboard.config.settings import (
    LedgerSettings,
    Settings,
    get_settings,
    validate_all_settings,
)

__all__ = [
    "LedgerSettings",
    "Settings",
    "get_settings",
    "validate_all_settings",
]
