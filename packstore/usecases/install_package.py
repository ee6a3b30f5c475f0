"""Install stage: flip the current/previous package pointers."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

from packstore.adapters.status_store import StatusStore
from packstore.domain.errors import InstallFailedError
from packstore.domain.models import PackageHash, StatusRecord
from packstore.domain.paths import PathResolver, validate_package_hash
from packstore.domain.ports import FileSystemPort
from packstore.usecases.folder_retirement import FolderRetirement


@dataclass
class InstallPackage:
    """Make ``package_hash`` the current package.

    Not safe to call concurrently for the same application; callers must
    serialize install, rollback, and download per application.
    """

    paths: PathResolver
    status_store: StatusStore
    fs: FileSystemPort
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def __call__(
        self, *, package_hash: Optional[PackageHash], remove_current: bool = False
    ) -> StatusRecord:
        """Install ``package_hash`` and return the persisted status record.

        Installing the hash that is already current is a no-op. With
        ``remove_current`` the current package folder is deleted instead of
        being kept for rollback. Otherwise the old previous package folder is
        deleted (unless it is the one being installed) and the current
        package becomes the previous one.

        Raises:
            InstallFailedError: Wrapping an invalid hash or any read, delete,
                or write failure. The status record is unchanged when this is raised.
        """
        retirement = FolderRetirement(self.fs, self.log)
        try:
            if package_hash is not None:
                validate_package_hash(package_hash)
            status = self.status_store.read()
            current = status.current_package_hash
            previous = status.previous_package_hash
            if package_hash is not None and package_hash == current:
                self.log.debug("Package %s is already current; nothing to install", package_hash)
                return status

            if remove_current:
                if current is not None:
                    retirement.retire(self.paths.package_folder_path(current))
                new_previous = previous
            else:
                if previous is not None and previous not in (package_hash, current):
                    retirement.retire(self.paths.package_folder_path(previous))
                new_previous = current

            updated = StatusRecord(
                current_package_hash=package_hash,
                previous_package_hash=new_previous,
            )
            self.status_store.write(updated)
        except Exception as exc:
            retirement.restore()
            self.log.warning("Install of package %s failed: %s", package_hash, exc)
            raise InstallFailedError(f"Failed to install package {package_hash}", cause=exc) from exc

        retirement.purge()
        self.log.info(
            "Installed package %s (previous=%s, remove_current=%s)",
            package_hash,
            new_previous,
            remove_current,
        )
        return updated


__all__ = ["InstallPackage"]
