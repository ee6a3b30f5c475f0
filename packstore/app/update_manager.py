"""Composition root for one application's package store.

``PackageUpdateManager`` wires the default adapters (``requests`` fetcher,
ZIP extractor, JSON records, local filesystem) into the lifecycle use cases
and exposes them as one object. It adds no locking; see
``packstore.app.serialization`` for caller-side serialization.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path, PurePosixPath
from typing import Optional

from packstore.adapters.json_records import JsonRecordSerializer
from packstore.adapters.local_fs import LocalFileSystem
from packstore.adapters.package_fetcher import HttpPackageFetcher
from packstore.adapters.package_store import PackageRecordStore
from packstore.adapters.status_store import StatusStore
from packstore.adapters.zip_archive import ZipArchiveExtractor
from packstore.app.config import StoreConfig
from packstore.domain.errors import ConfigurationError, PackageStoreError, StoreIOError
from packstore.domain.models import DownloadResult, PackageHash, PackageRecord, StatusRecord
from packstore.domain.paths import PathResolver
from packstore.domain.ports import ArchivePort, FetchPort, FileSystemPort, RecordPort
from packstore.usecases.download_package import DownloadPackage
from packstore.usecases.folder_retirement import is_displaced_name
from packstore.usecases.install_package import InstallPackage
from packstore.usecases.merge_diff import MergeDiff
from packstore.usecases.package_queries import PackageQueries
from packstore.usecases.rollback_package import RollbackPackage
from packstore.usecases.unpack_package import UnpackPackage


class PackageUpdateManager:
    """Download, stage, install, and roll back packages for one application."""

    def __init__(
        self,
        config: StoreConfig,
        *,
        fetcher: Optional[FetchPort] = None,
        archive: Optional[ArchivePort] = None,
        records: Optional[RecordPort] = None,
        fs: Optional[FileSystemPort] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.config = config
        self.log = logger or logging.getLogger("packstore.update_manager")
        self.fetcher = fetcher or HttpPackageFetcher(cfg=config.http_config())
        self.archive = archive or ZipArchiveExtractor()
        self.records = records or JsonRecordSerializer()
        self.fs = fs or LocalFileSystem()

        self.paths = PathResolver(documents_dir=Path(config.documents_dir), app_name=config.app_name)
        self.status_store = StatusStore(self.paths, self.records)
        self.package_store = PackageRecordStore(self.paths, self.records)
        self.queries = PackageQueries(self.paths, self.status_store, self.package_store)

        self._download = DownloadPackage(
            self.paths, self.fetcher, self.fs, timeout=config.download_timeout_s, log=self.log
        )
        self._unpack = UnpackPackage(self.archive, self.fs, timeout=config.extract_timeout_s, log=self.log)
        self._merge = MergeDiff(self.paths, self.status_store, self.fs, self.records, log=self.log)
        self._install = InstallPackage(self.paths, self.status_store, self.fs, log=self.log)
        self._rollback = RollbackPackage(self.paths, self.status_store, self.fs, log=self.log)

    @property
    def app_name(self) -> str:
        """Raises ConfigurationError when no application name is configured."""
        name = (self.config.app_name or "").strip()
        if not name:
            raise ConfigurationError("Application name is not configured")
        return name

    # ---- Stages ----
    def download_package(
        self,
        package_hash: PackageHash,
        url: str,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> DownloadResult:
        """Raises ConfigurationError or DownloadFailedError."""
        return self._download(package_hash=package_hash, url=url, cancel_event=cancel_event)

    def unpack_package(self, archive_path: Path, destination: Path) -> Path:
        """Raises UnpackFailedError."""
        return self._unpack(archive_path=archive_path, destination=destination)

    def merge_diff(self, new_update_dir: Path, entry_point: str) -> Path:
        """Raises DataCorruptionError, EntryPointMissingError, or StoreIOError."""
        return self._merge(new_update_dir=new_update_dir, entry_point=entry_point, app_name=self.app_name)

    def install_package(
        self, package_hash: Optional[PackageHash], *, remove_current: bool = False
    ) -> StatusRecord:
        """Raises InstallFailedError."""
        return self._install(package_hash=package_hash, remove_current=remove_current)

    def rollback_package(self) -> StatusRecord:
        """Raises RollbackFailedError."""
        return self._rollback()

    # ---- Pipeline ----
    def stage_update(
        self,
        package_hash: PackageHash,
        url: str,
        entry_point: str,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> Path:
        """Download and prepare a package folder without installing it.

        Archives are unpacked and merged against the current package; any
        other payload is treated as a plain bundle and stored as
        ``<packageFolder>/<appName>/<entry point file name>``. On failure the
        package folder is removed.

        Returns:
            Resolved path of the entry point inside the package folder.

        Raises:
            ConfigurationError, DownloadFailedError, UnpackFailedError,
            DataCorruptionError, EntryPointMissingError, StoreIOError.
        """
        app_name = self.app_name
        result = self.download_package(package_hash, url, cancel_event=cancel_event)
        folder = self.paths.package_folder_path(package_hash)
        try:
            if result.is_archive:
                self.unpack_package(result.local_path, folder)
                self.fs.delete(result.local_path)
                entry = self.merge_diff(folder, entry_point)
            else:
                target = folder / app_name / PurePosixPath(entry_point.replace("\\", "/")).name
                entry = self.fs.move(result.local_path, target).resolve()
        except (PackageStoreError, OSError) as exc:
            self._discard(folder)
            if isinstance(exc, PackageStoreError):
                raise
            raise StoreIOError(f"Failed to stage package {package_hash}", cause=exc) from exc

        self.log.info("Staged package %s with entry point %s", package_hash, entry)
        return entry

    def save_package(self, record: PackageRecord) -> Path:
        """Write ``package.json`` for ``record`` into its package folder.

        Raises:
            InvalidPackageHashError: If the record hash cannot name a package folder.
            StoreIOError: If the record cannot be written.
        """
        path = self.paths.package_file_path(record.package_hash)
        try:
            self.records.write_record(path, record.to_dict())
        except (OSError, TypeError, ValueError) as exc:
            raise StoreIOError(f"Failed to write package file {path}", cause=exc) from exc
        return path

    def sweep_retired_folders(self) -> int:
        """Delete folders left behind by an interrupted install or rollback.

        Returns:
            Number of folders removed.

        Raises:
            StoreIOError: If the application root cannot be listed or cleaned.
        """
        root = self.paths.app_root()
        if not self.fs.is_dir(root):
            return 0
        removed = 0
        try:
            for name in self.fs.list_directory(root):
                if is_displaced_name(name):
                    self.fs.delete(root / name)
                    removed += 1
        except OSError as exc:
            raise StoreIOError(f"Failed to sweep {root}", cause=exc) from exc
        if removed:
            self.log.info("Removed %d retired package folder(s) from %s", removed, root)
        return removed

    # ---- Queries ----
    def status(self) -> StatusRecord:
        return self.queries.status()

    def current_package_hash(self) -> Optional[PackageHash]:
        return self.queries.current_package_hash()

    def previous_package_hash(self) -> Optional[PackageHash]:
        return self.queries.previous_package_hash()

    def current_package_path(self) -> Optional[Path]:
        return self.queries.current_package_path()

    def previous_package_path(self) -> Optional[Path]:
        return self.queries.previous_package_path()

    def current_package(self) -> Optional[PackageRecord]:
        return self.queries.current_package()

    def previous_package(self) -> Optional[PackageRecord]:
        return self.queries.previous_package()

    def package(self, package_hash: PackageHash) -> PackageRecord:
        return self.queries.package(package_hash)

    def _discard(self, folder: Path) -> None:
        try:
            self.fs.delete(folder)
        except OSError:
            self.log.warning("Could not remove staged package folder %s", folder, exc_info=True)


__all__ = ["PackageUpdateManager"]
