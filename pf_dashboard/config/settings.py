"""
Configuration Management for the Personal Finance Dashboard

Uses pydantic-settings for type-safe configuration from environment variables.

DESIGN DECISION: All configuration is centralized here, including the
start-up storage policy. ``clear_storage_on_startup`` wipes saved state on
every launch ("always start fresh"). It is off by default so saved data
survives a restart.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pf_dashboard.models.ledger import InputPolicy
from pf_dashboard.utils.formatting import DEFAULT_CURRENCY_SYMBOL


class LedgerSettings(BaseSettings):
    """Ledger storage and input handling configuration."""

    model_config = SettingsConfigDict(
        env_prefix="PF_DASHBOARD_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    storage_backend: str = Field(
        default="file",
        pattern="^(memory|file)$",
        description="Where the ledger is persisted: 'memory' or 'file'"
    )
    storage_dir: str = Field(
        default=".pf_dashboard",
        description="Directory holding one JSON file per storage key"
    )
    storage_key: str = Field(
        default="pf_dashboard_v1",
        min_length=1,
        description="Key the serialized ledger is stored under"
    )
    clear_storage_on_startup: bool = Field(
        default=False,
        description="Remove the stored ledger once when the app starts"
    )
    input_policy: InputPolicy = Field(
        default=InputPolicy.COERCE,
        description="'coerce' invalid amounts to zero or 'reject' the draft"
    )
    currency_symbol: str = Field(
        default=DEFAULT_CURRENCY_SYMBOL,
        description="Prefix used by the money formatter"
    )
    recent_limit: int = Field(
        default=6,
        ge=1,
        le=100,
        description="How many transactions the recent list shows"
    )

    @field_validator("storage_key")
    @classmethod
    def validate_storage_key(cls, v: str) -> str:
        """Keys become file names for the file backend."""
        if any(sep in v for sep in ("/", "\\")) or v in (".", ".."):
            raise ValueError(f"Storage key cannot contain path separators: {v}")
        return v


class Settings(BaseSettings):
    """
    Root settings container.

    Aggregates all sub-settings for easy access.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def ledger(self) -> LedgerSettings:
        return LedgerSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()


def validate_all_settings() -> dict[str, bool]:
    """
    Validate all settings are properly configured.

    Returns a dict of {setting_name: is_valid}, plus an ``<name>_error``
    entry for each failure. Useful for startup checks.
    """
    results = {}

    settings = get_settings()

    try:
        _ = settings.ledger
        results["ledger"] = True
    except Exception as e:
        results["ledger"] = False
        results["ledger_error"] = str(e)

    return results
