"""End-to-end lifecycle through ``PackageUpdateManager`` with a fake transport."""

from __future__ import annotations

import json

import pytest

from conftest import APP_NAME, FakeFetcher, zip_bytes
from packstore.app.config import StoreConfig
from packstore.app.update_manager import PackageUpdateManager
from packstore.domain.errors import (
    ConfigurationError,
    DownloadFailedError,
    EntryPointMissingError,
    RollbackFailedError,
)
from packstore.domain.models import PackageRecord, StatusRecord

FULL_URL = "https://cdn.example/h1.zip"
DIFF_URL = "https://cdn.example/h2.zip"
PLAIN_URL = "https://cdn.example/h3.jsbundle"


def _bodies():
    return {
        FULL_URL: zip_bytes(
            {
                "CodePush/main.jsbundle": "bundle-v1",
                "CodePush/a.txt": "a1",
                "CodePush/b.txt": "b1",
            }
        ),
        DIFF_URL: zip_bytes(
            {
                "CodePush/b.txt": "b2",
                "CodePush/hotcodepush.json": json.dumps({"retainedFiles": ["a.txt", "main.jsbundle"]}),
            }
        ),
        PLAIN_URL: b"console.log('v3');",
    }


@pytest.fixture()
def manager(tmp_path):
    cfg = StoreConfig(documents_dir=tmp_path, app_name=APP_NAME)
    return PackageUpdateManager(cfg, fetcher=FakeFetcher(_bodies()))


def _stage_and_install(manager, package_hash, url, label):
    entry = manager.stage_update(package_hash, url, "main.jsbundle")
    manager.save_package(PackageRecord(package_hash=package_hash, app_version="1.0.0", label=label))
    manager.install_package(package_hash)
    return entry


def test_full_then_diff_then_rollback(manager, tmp_path):
    app_root = tmp_path / APP_NAME

    entry_v1 = _stage_and_install(manager, "h1", FULL_URL, "v1")
    assert entry_v1 == (app_root / "h1" / APP_NAME / "main.jsbundle").resolve()
    assert manager.current_package().label == "v1"

    entry_v2 = _stage_and_install(manager, "h2", DIFF_URL, "v2")
    h2_app = app_root / "h2" / APP_NAME
    assert entry_v2 == (h2_app / "main.jsbundle").resolve()
    assert (h2_app / "a.txt").read_text() == "a1"
    assert (h2_app / "b.txt").read_text() == "b2"
    assert (h2_app / "main.jsbundle").read_text() == "bundle-v1"
    assert sorted(p.name for p in (app_root / "h2").iterdir()) == [APP_NAME, "package.json"]
    assert manager.status() == StatusRecord(current_package_hash="h2", previous_package_hash="h1")
    assert manager.previous_package().label == "v1"

    manager.rollback_package()

    assert manager.status() == StatusRecord(current_package_hash="h1", previous_package_hash=None)
    assert not (app_root / "h2").exists()
    assert manager.current_package_path() == app_root / "h1"


def test_plain_bundle_is_stored_under_entry_point_name(manager, tmp_path):
    entry = manager.stage_update("h3", PLAIN_URL, "bundles/main.jsbundle")

    assert entry == (tmp_path / APP_NAME / "h3" / APP_NAME / "main.jsbundle").resolve()
    assert entry.read_text() == "console.log('v3');"


def test_third_install_drops_oldest_package(manager, tmp_path):
    _stage_and_install(manager, "h1", FULL_URL, "v1")
    _stage_and_install(manager, "h2", DIFF_URL, "v2")
    _stage_and_install(manager, "h3", PLAIN_URL, "v3")

    assert manager.status() == StatusRecord(current_package_hash="h3", previous_package_hash="h2")
    assert not (tmp_path / APP_NAME / "h1").exists()


def test_missing_entry_point_discards_staged_folder(manager, tmp_path):
    with pytest.raises(EntryPointMissingError):
        manager.stage_update("h1", FULL_URL, "index.android.bundle")

    assert not (tmp_path / APP_NAME / "h1").exists()
    assert manager.status() == StatusRecord()


def test_download_failure_surfaces_download_failed(tmp_path):
    cfg = StoreConfig(documents_dir=tmp_path, app_name=APP_NAME)
    manager = PackageUpdateManager(cfg, fetcher=FakeFetcher(error=TimeoutError("slow")))

    with pytest.raises(DownloadFailedError):
        manager.stage_update("h1", FULL_URL, "main.jsbundle")

    assert not (tmp_path / APP_NAME / "h1").exists()


def test_rollback_on_fresh_store_fails(manager):
    with pytest.raises(RollbackFailedError):
        manager.rollback_package()


def test_unconfigured_app_name_is_rejected(tmp_path):
    manager = PackageUpdateManager(
        StoreConfig(documents_dir=tmp_path, app_name=None), fetcher=FakeFetcher(_bodies())
    )
    with pytest.raises(ConfigurationError):
        manager.stage_update("h1", FULL_URL, "main.jsbundle")


def test_sweep_removes_retired_folders(manager, tmp_path):
    _stage_and_install(manager, "h1", FULL_URL, "v1")
    orphan = tmp_path / APP_NAME / ".h0.displaced-0123abcd"
    (orphan / APP_NAME).mkdir(parents=True)

    assert manager.sweep_retired_folders() == 1
    assert not orphan.exists()
    assert (tmp_path / APP_NAME / "h1").exists()
