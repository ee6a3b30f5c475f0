import json

import pytest

from packstore.adapters.status_store import StatusStore
from packstore.domain.errors import DataCorruptionError, StoreIOError
from packstore.domain.models import StatusRecord


def test_read_without_status_file_returns_empty_record(status_store):
    record = status_store.read()
    assert record == StatusRecord()
    assert record.current_package_hash is None
    assert record.previous_package_hash is None


def test_write_then_read(status_store, paths):
    status_store.write(StatusRecord(current_package_hash="h2", previous_package_hash="h1"))

    raw = json.loads(paths.status_file_path().read_text(encoding="utf-8"))
    assert raw == {"currentPackageHash": "h2", "previousPackageHash": "h1"}
    assert status_store.read() == StatusRecord("h2", "h1")


def test_absent_pointers_are_not_written(status_store, paths):
    status_store.write(StatusRecord(current_package_hash="h1"))
    raw = json.loads(paths.status_file_path().read_text(encoding="utf-8"))
    assert raw == {"currentPackageHash": "h1"}


def test_legacy_keys_and_nulls_are_accepted(status_store, app_root):
    (app_root / "status.json").write_text(
        json.dumps({"currentPackage": "old", "previousPackage": None}), encoding="utf-8"
    )
    assert status_store.read() == StatusRecord(current_package_hash="old")


def test_unparsable_status_file_is_data_corruption(status_store, app_root):
    (app_root / "status.json").write_text("{not json", encoding="utf-8")
    with pytest.raises(DataCorruptionError):
        status_store.read()


def test_wrong_shape_is_data_corruption(status_store, app_root):
    (app_root / "status.json").write_text(json.dumps({"currentPackageHash": 5}), encoding="utf-8")
    with pytest.raises(DataCorruptionError):
        status_store.read()


def test_write_failure_is_io_failure(paths):
    class _BrokenRecords:
        def read_record(self, path):
            raise AssertionError("unused")

        def write_record(self, path, payload):
            raise OSError("disk full")

    store = StatusStore(paths, _BrokenRecords())
    with pytest.raises(StoreIOError) as excinfo:
        store.write(StatusRecord(current_package_hash="h1"))
    assert isinstance(excinfo.value.cause, OSError)


def test_status_path_occupied_by_a_directory_is_io_failure(status_store, app_root):
    (app_root / "status.json").mkdir()
    with pytest.raises(StoreIOError) as excinfo:
        status_store.read()
    assert isinstance(excinfo.value.cause, OSError)
