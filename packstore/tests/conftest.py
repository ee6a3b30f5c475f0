"""Shared fixtures for package-store tests."""

from __future__ import annotations

import io
import json
import zipfile
from pathlib import Path
from typing import Dict, Iterable, Optional

import pytest

from packstore.adapters.json_records import JsonRecordSerializer
from packstore.adapters.local_fs import LocalFileSystem
from packstore.adapters.package_store import PackageRecordStore
from packstore.adapters.status_store import StatusStore
from packstore.domain.models import StatusRecord
from packstore.domain.paths import PathResolver

APP_NAME = "DemoApp"


class FakeFetcher:
    """FetchPort double serving canned bodies keyed by URL."""

    def __init__(self, bodies: Optional[Dict[str, bytes]] = None, error: Optional[Exception] = None) -> None:
        self.bodies = dict(bodies or {})
        self.error = error
        self.calls = []

    def fetch(self, url, destination, *, cancel_event=None, timeout=None):
        self.calls.append((url, Path(destination), timeout))
        destination = Path(destination)
        destination.parent.mkdir(parents=True, exist_ok=True)
        if self.error is not None:
            destination.write_bytes(b"partial")
            raise self.error
        destination.write_bytes(self.bodies[url])
        return destination


def zip_bytes(files: Dict[str, bytes | str], *, dirs: Iterable[str] = ()) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
        for name in dirs:
            archive.writestr(name.rstrip("/") + "/", "")
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


def make_package(root: Path, package_hash: str, files: Dict[str, str], *, app_name: str = APP_NAME) -> Path:
    """Create ``<root>/<hash>/package.json`` plus app files."""
    folder = root / package_hash
    for relative, content in files.items():
        target = folder / app_name / relative
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(content, encoding="utf-8")
    folder.mkdir(parents=True, exist_ok=True)
    (folder / "package.json").write_text(
        json.dumps({"packageHash": package_hash, "appVersion": "1.0.0", "label": f"v-{package_hash}"}),
        encoding="utf-8",
    )
    return folder


@pytest.fixture()
def paths(tmp_path: Path) -> PathResolver:
    return PathResolver(documents_dir=tmp_path, app_name=APP_NAME)


@pytest.fixture()
def app_root(paths: PathResolver) -> Path:
    root = paths.app_root()
    root.mkdir(parents=True, exist_ok=True)
    return root


@pytest.fixture()
def fs() -> LocalFileSystem:
    return LocalFileSystem()


@pytest.fixture()
def records() -> JsonRecordSerializer:
    return JsonRecordSerializer()


@pytest.fixture()
def status_store(paths: PathResolver, records: JsonRecordSerializer) -> StatusStore:
    return StatusStore(paths, records)


@pytest.fixture()
def package_store(paths: PathResolver, records: JsonRecordSerializer) -> PackageRecordStore:
    return PackageRecordStore(paths, records)


@pytest.fixture()
def set_status(status_store: StatusStore):
    def _set(current: Optional[str], previous: Optional[str] = None) -> None:
        status_store.write(StatusRecord(current_package_hash=current, previous_package_hash=previous))

    return _set
