"""Draft validation package."""

from pf_dashboard.validation.validator import DraftValidator, InvalidInputError

__all__ = ["DraftValidator", "InvalidInputError"]
