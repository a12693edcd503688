"""
JSON File Storage Implementation

Each key is stored as ``<directory>/<key>.json``. Writes go to a temporary
file in the same directory and are moved into place with os.replace, so a
crash mid-write leaves either the old file or the new one, never half of
each.

TRADEOFFS:
- One file per key, no index (we only ever have one key)
- No file locking; two processes sharing a directory are last-writer-wins
"""

import os
import tempfile
from pathlib import Path
from typing import Optional

from pf_dashboard.services.storage.interface import (
    KeyValueStorageInterface,
    StorageUnavailableError,
)


class JsonFileKeyValueStorage(KeyValueStorageInterface):
    """Directory-backed key-value storage with atomic writes."""

    def __init__(self, directory: str, fsync_after_write: bool = True):
        self._directory = Path(directory)
        self._fsync_after_write = fsync_after_write

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, key: str) -> Path:
        return self._directory / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageUnavailableError(f"Failed to read {path}: {e}") from e

    def set_item(self, key: str, value: str) -> None:
        path = self.path_for(key)
        tmp_name: Optional[str] = None
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="wb",
                prefix=f"{key}-",
                suffix=".tmp",
                dir=self._directory,
                delete=False,
            ) as tmp:
                tmp_name = tmp.name
                tmp.write(value.encode("utf-8"))
                tmp.flush()
                if self._fsync_after_write:
                    os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
            tmp_name = None
        except OSError as e:
            raise StorageUnavailableError(f"Failed to write {path}: {e}") from e
        finally:
            # Only set when the replace did not happen
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    def remove_item(self, key: str) -> None:
        path = self.path_for(key)
        try:
            path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            raise StorageUnavailableError(f"Failed to remove {path}: {e}") from e
