"""Tests for the key-value storage backends."""

import pytest

from pf_dashboard.services.storage import (
    InMemoryKeyValueStorage,
    JsonFileKeyValueStorage,
    StorageUnavailableError,
)


class TestInMemoryStorage:
    """Tests for the dict-backed store."""

    def test_get_missing_key_returns_none(self):
        assert InMemoryKeyValueStorage().get_item("nope") is None

    def test_set_get_remove(self):
        storage = InMemoryKeyValueStorage()
        storage.set_item("k", "value")
        assert storage.get_item("k") == "value"
        storage.remove_item("k")
        assert storage.get_item("k") is None

    def test_remove_is_idempotent(self):
        storage = InMemoryKeyValueStorage()
        storage.remove_item("k")
        storage.remove_item("k")
        assert storage.keys() == []

    def test_quota_exceeded_raises_and_keeps_old_value(self):
        storage = InMemoryKeyValueStorage(quota_bytes=10)
        storage.set_item("k", "short")
        with pytest.raises(StorageUnavailableError):
            storage.set_item("k", "much too long for the quota")
        assert storage.get_item("k") == "short"

    def test_quota_counts_replaced_value_once(self):
        storage = InMemoryKeyValueStorage(quota_bytes=10)
        storage.set_item("k", "0123456789")
        storage.set_item("k", "9876543210")
        assert storage.get_item("k") == "9876543210"


class TestJsonFileStorage:
    """Tests for the directory-backed store."""

    def test_missing_file_returns_none(self, tmp_path):
        assert JsonFileKeyValueStorage(str(tmp_path)).get_item("ledger") is None

    def test_write_creates_directory_and_file(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path / "nested"))
        storage.set_item("ledger", '{"a": 1}')
        assert storage.path_for("ledger").read_text(encoding="utf-8") == '{"a": 1}'
        assert storage.get_item("ledger") == '{"a": 1}'

    def test_overwrite_leaves_no_temp_files(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path), fsync_after_write=False)
        storage.set_item("ledger", "one")
        storage.set_item("ledger", "two")
        assert [p.name for p in tmp_path.iterdir()] == ["ledger.json"]
        assert storage.get_item("ledger") == "two"

    def test_unicode_round_trip(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path))
        storage.set_item("ledger", "₱ — café")
        assert storage.get_item("ledger") == "₱ — café"

    def test_remove_is_idempotent(self, tmp_path):
        storage = JsonFileKeyValueStorage(str(tmp_path))
        storage.set_item("ledger", "x")
        storage.remove_item("ledger")
        storage.remove_item("ledger")
        assert storage.get_item("ledger") is None

    def test_unwritable_location_raises_storage_unavailable(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")
        storage = JsonFileKeyValueStorage(str(blocker / "sub"))
        with pytest.raises(StorageUnavailableError):
            storage.set_item("ledger", "x")
