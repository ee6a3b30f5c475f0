"""Rollback stage: discard the current package and reinstate the previous one."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from packstore.adapters.status_store import StatusStore
from packstore.domain.errors import RollbackFailedError
from packstore.domain.models import StatusRecord
from packstore.domain.paths import PathResolver
from packstore.domain.ports import FileSystemPort
from packstore.usecases.folder_retirement import FolderRetirement


@dataclass
class RollbackPackage:
    """Delete the current package and point ``current`` at the previous one."""

    paths: PathResolver
    status_store: StatusStore
    fs: FileSystemPort
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def __call__(self) -> StatusRecord:
        """Roll back and return the persisted status record.

        Rollback requires an active package whose folder exists.

        Raises:
            RollbackFailedError: If there is no current package or folder, or
                wrapping any read, delete, or write failure. The status record
                is unchanged when this is raised.
        """
        retirement = FolderRetirement(self.fs, self.log)
        try:
            status = self.status_store.read()
            current = status.current_package_hash
            if current is None:
                raise RollbackFailedError("No current package to roll back")
            folder = self.paths.package_folder_path(current)
            if not retirement.retire(folder):
                raise RollbackFailedError(f"Current package folder {folder} does not exist")

            updated = StatusRecord(
                current_package_hash=status.previous_package_hash,
                previous_package_hash=None,
            )
            self.status_store.write(updated)
        except RollbackFailedError:
            retirement.restore()
            raise
        except Exception as exc:
            retirement.restore()
            self.log.warning("Rollback failed: %s", exc)
            raise RollbackFailedError("Failed to roll back package", cause=exc) from exc

        retirement.purge()
        self.log.info("Rolled back package %s -> %s", current, updated.current_package_hash)
        return updated


__all__ = ["RollbackPackage"]
