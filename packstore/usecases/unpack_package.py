"""Unpack stage: extract an archive and name its root ``unzipped``."""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from packstore.domain.constants import UNZIPPED_FOLDER_NAME
from packstore.domain.errors import UnpackFailedError
from packstore.domain.ports import ArchivePort, FileSystemPort


@dataclass
class UnpackPackage:
    """Extract a downloaded archive into a package folder.

    The archive is expected to hold a single top-level entry, which becomes
    ``<destination>/unzipped``. When it holds several, the first one in
    sorted-name order is renamed and the others land next to it unchanged.
    """

    archive: ArchivePort
    fs: FileSystemPort
    timeout: Optional[float] = None
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def __call__(self, *, archive_path: Path, destination: Path) -> Path:
        """Extract ``archive_path`` and return the ``unzipped`` path.

        Raises:
            UnpackFailedError: Wrapping extraction or rename failures, or when
                the archive has no entries.
        """
        destination = Path(destination)
        work_dir = destination / f".extract-{uuid.uuid4().hex}"
        unzipped = destination / UNZIPPED_FOLDER_NAME
        self.log.info("Unpacking %s into %s", archive_path, destination)
        try:
            self.fs.make_dirs(destination)
            self.archive.extract_all(Path(archive_path), work_dir, timeout=self.timeout)
            entries = self.fs.list_directory(work_dir)
            if not entries:
                raise UnpackFailedError(f"Archive {archive_path} contains no entries")
            if len(entries) > 1:
                self.log.warning(
                    "Archive %s has %d top-level entries; using '%s' as the package root",
                    archive_path,
                    len(entries),
                    entries[0],
                )
            self.fs.delete(unzipped)
            self.fs.move(work_dir / entries[0], unzipped)
            for name in entries[1:]:
                self.fs.copy_tree(work_dir / name, destination / name)
        except UnpackFailedError:
            raise
        except Exception as exc:
            self.log.warning("Unpacking %s failed: %s", archive_path, exc)
            raise UnpackFailedError(f"Failed to unpack {archive_path}", cause=exc) from exc
        finally:
            try:
                self.fs.delete(work_dir)
            except OSError:
                self.log.warning("Could not remove extraction directory %s", work_dir, exc_info=True)
        return unzipped


__all__ = ["UnpackPackage"]
