"""
Abstract Storage Interface

DESIGN DECISION: The ledger is persisted as one text blob under one key,
the same contract as a browser's local storage. Defining it as an interface
lets us:
1. Keep state in memory for tests and throwaway sessions
2. Write it to a JSON file on disk for real use
3. Swap in another key-value store later without touching the ledger

The interface is intentionally tiny: get, set, remove.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for text key-value storage.

    Implementations raise StorageUnavailableError when the backend cannot
    be read or written (missing permissions, disk or quota full).
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the text stored under a key.

        Args:
            key: Storage key

        Returns:
            The stored text, or None if nothing is stored

        Raises:
            StorageUnavailableError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Store text under a key, replacing any previous value.

        Raises:
            StorageUnavailableError: If the backend cannot be written
        """
        pass

    @abstractmethod
    def remove_item(self, key: str) -> None:
        """
        Remove a key. Removing a missing key is not an error.

        Raises:
            StorageUnavailableError: If the backend cannot be written
        """
        pass


class StorageError(Exception):
    """Base exception for ledger storage operations."""
    pass


class StorageUnavailableError(StorageError):
    """The persistent store could not be read or written."""
    pass


class MalformedStateError(StorageError):
    """The persisted ledger could not be parsed."""
    pass


class NotFoundError(StorageError):
    """A mutation referenced a transaction id that does not exist."""

    def __init__(self, transaction_id: str):
        super().__init__(f"Transaction not found: {transaction_id}")
        self.transaction_id = transaction_id
