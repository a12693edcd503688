"""Services package."""

from pf_dashboard.services.persistence import DEFAULT_STORAGE_KEY, LedgerPersistence
from pf_dashboard.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    KeyValueStorageInterface,
    MalformedStateError,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)

__all__ = [
    # Persistence
    "DEFAULT_STORAGE_KEY",
    "LedgerPersistence",
    # Storage services
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
    "KeyValueStorageInterface",
    "MalformedStateError",
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
]
