import pytest

from conftest import make_package
from packstore.domain.errors import RollbackFailedError, StoreIOError
from packstore.domain.models import StatusRecord
from packstore.usecases.install_package import InstallPackage
from packstore.usecases.rollback_package import RollbackPackage


@pytest.fixture()
def rollback(paths, status_store, fs):
    return RollbackPackage(paths, status_store, fs)


@pytest.fixture()
def install(paths, status_store, fs):
    return InstallPackage(paths, status_store, fs)


def test_rollback_after_two_installs_restores_first(install, rollback, status_store, app_root):
    make_package(app_root, "h1", {})
    install(package_hash="h1")
    make_package(app_root, "h2", {})
    install(package_hash="h2")

    record = rollback()

    assert record == StatusRecord(current_package_hash="h1", previous_package_hash=None)
    assert status_store.read() == record
    assert not (app_root / "h2").exists()
    assert (app_root / "h1").exists()


def test_rollback_without_previous_leaves_no_current(rollback, status_store, app_root, set_status):
    make_package(app_root, "h1", {})
    set_status("h1")

    rollback()

    assert status_store.read() == StatusRecord()
    assert not (app_root / "h1").exists()


def test_rollback_with_nothing_installed_fails(rollback, app_root):
    with pytest.raises(RollbackFailedError):
        rollback()


def test_rollback_with_missing_current_folder_fails(rollback, status_store, app_root, set_status):
    set_status("ghost", "p")

    with pytest.raises(RollbackFailedError):
        rollback()

    assert status_store.read() == StatusRecord("ghost", "p")


def test_failed_write_keeps_current_folder(rollback, status_store, app_root, set_status, monkeypatch):
    make_package(app_root, "p", {})
    make_package(app_root, "c", {})
    set_status("c", "p")

    def _fail(record):
        raise StoreIOError("read-only filesystem")

    monkeypatch.setattr(status_store, "write", _fail)

    with pytest.raises(RollbackFailedError) as excinfo:
        rollback()

    assert isinstance(excinfo.value.cause, StoreIOError)
    assert (app_root / "c").exists()
    monkeypatch.undo()
    assert status_store.read() == StatusRecord("c", "p")
