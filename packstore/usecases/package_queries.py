"""Read-only lookups over the status and package records."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from packstore.adapters.package_store import PackageRecordStore
from packstore.adapters.status_store import StatusStore
from packstore.domain.models import PackageHash, PackageRecord, StatusRecord
from packstore.domain.paths import PathResolver


@dataclass
class PackageQueries:
    """Resolve the current and previous packages.

    Every method reads ``status.json`` afresh; nothing is cached.
    """

    paths: PathResolver
    status_store: StatusStore
    package_store: PackageRecordStore

    def status(self) -> StatusRecord:
        return self.status_store.read()

    def current_package_hash(self) -> Optional[PackageHash]:
        return self.status_store.read().current_package_hash

    def previous_package_hash(self) -> Optional[PackageHash]:
        return self.status_store.read().previous_package_hash

    def current_package_path(self) -> Optional[Path]:
        return self._folder(self.current_package_hash())

    def previous_package_path(self) -> Optional[Path]:
        return self._folder(self.previous_package_hash())

    def package(self, package_hash: PackageHash) -> PackageRecord:
        """Raises PackageNotFoundError or DataCorruptionError."""
        return self.package_store.read(package_hash)

    def current_package(self) -> Optional[PackageRecord]:
        package_hash = self.current_package_hash()
        return None if package_hash is None else self.package_store.read(package_hash)

    def previous_package(self) -> Optional[PackageRecord]:
        package_hash = self.previous_package_hash()
        return None if package_hash is None else self.package_store.read(package_hash)

    def _folder(self, package_hash: Optional[PackageHash]) -> Optional[Path]:
        if package_hash is None:
            return None
        return self.paths.package_folder_path(package_hash)


__all__ = ["PackageQueries"]
