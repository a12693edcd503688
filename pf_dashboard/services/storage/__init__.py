"""
Storage Services Package

Provides the key-value storage interface the ledger is persisted through,
plus in-memory and JSON-file implementations.
"""

from pf_dashboard.services.storage.interface import (
    KeyValueStorageInterface,
    MalformedStateError,
    NotFoundError,
    StorageError,
    StorageUnavailableError,
)
from pf_dashboard.services.storage.json_file import JsonFileKeyValueStorage
from pf_dashboard.services.storage.memory import InMemoryKeyValueStorage

__all__ = [
    # Interface
    "KeyValueStorageInterface",
    # Exceptions
    "MalformedStateError",
    "NotFoundError",
    "StorageError",
    "StorageUnavailableError",
    # Implementations
    "InMemoryKeyValueStorage",
    "JsonFileKeyValueStorage",
]
