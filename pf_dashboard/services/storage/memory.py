"""
In-Memory Storage Implementation

Keeps values in a dict for the life of the process. Useful for tests and for
sessions that should not touch the disk. An optional quota reproduces the
"storage full" failure of a browser store.
"""

from typing import Optional

from pf_dashboard.services.storage.interface import (
    KeyValueStorageInterface,
    StorageUnavailableError,
)


class InMemoryKeyValueStorage(KeyValueStorageInterface):
    """Dict-backed key-value storage with an optional size quota."""

    def __init__(self, quota_bytes: Optional[int] = None):
        """
        Args:
            quota_bytes: Maximum total UTF-8 size of all stored values.
                        None means unlimited.
        """
        self._items: dict[str, str] = {}
        self._quota_bytes = quota_bytes

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        if self._quota_bytes is not None:
            others = sum(
                len(v.encode("utf-8")) for k, v in self._items.items() if k != key
            )
            if others + len(value.encode("utf-8")) > self._quota_bytes:
                raise StorageUnavailableError(
                    f"Quota of {self._quota_bytes} bytes exceeded writing {key}"
                )
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._items)
