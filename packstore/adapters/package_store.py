"""Read access to per-package ``package.json`` records."""

from __future__ import annotations

from packstore.domain.errors import DataCorruptionError, PackageNotFoundError, StoreIOError
from packstore.domain.models import PackageHash, PackageRecord
from packstore.domain.paths import PathResolver
from packstore.domain.ports import RecordNotFoundError, RecordParseError, RecordPort


class PackageRecordStore:
    """Load package metadata from ``<app_root>/<hash>/package.json``."""

    def __init__(self, paths: PathResolver, records: RecordPort) -> None:
        self.paths = paths
        self.records = records

    def read(self, package_hash: PackageHash) -> PackageRecord:
        """Return the record stored for ``package_hash``.

        Raises:
            ConfigurationError: If the application name is unset.
            InvalidPackageHashError: If the hash cannot name a package folder.
            PackageNotFoundError: If the package folder or file is absent.
            DataCorruptionError: If the file cannot be parsed.
            StoreIOError: If the file cannot be read.
        """
        path = self.paths.package_file_path(package_hash)
        try:
            payload = self.records.read_record(path)
        except RecordNotFoundError as exc:
            raise PackageNotFoundError(package_hash, cause=exc) from exc
        except RecordParseError as exc:
            raise DataCorruptionError(f"Package file {path} is unreadable", cause=exc) from exc
        except OSError as exc:
            raise StoreIOError(f"Failed to read package file {path}", cause=exc) from exc
        try:
            return PackageRecord.from_dict(payload)
        except ValueError as exc:
            raise DataCorruptionError(f"Package file {path} is malformed", cause=exc) from exc


__all__ = ["PackageRecordStore"]
