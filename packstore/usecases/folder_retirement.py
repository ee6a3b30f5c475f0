"""Stage package-folder deletions around a status write.

Folders are first renamed to hidden ``.<hash>.displaced-<id>`` siblings.
After the status record is written they are purged; if the write fails
they are renamed back, so the record never points at a missing folder.
"""

from __future__ import annotations

import logging
import uuid
from pathlib import Path
from typing import List, Optional, Tuple

from packstore.domain.ports import FileSystemPort

DISPLACED_MARKER = ".displaced-"


class FolderRetirement:
    """Track folders displaced during one install or rollback."""

    def __init__(self, fs: FileSystemPort, log: Optional[logging.Logger] = None) -> None:
        self.fs = fs
        self.log = log or logging.getLogger(__name__)
        self._moved: List[Tuple[Path, Path]] = []

    def retire(self, folder: Path) -> bool:
        """Move ``folder`` aside. Returns ``False`` when it does not exist."""
        folder = Path(folder)
        if not self.fs.exists(folder):
            return False
        displaced_name = f".{folder.name}{DISPLACED_MARKER}{uuid.uuid4().hex}"
        displaced = self.fs.rename(folder, displaced_name)
        self._moved.append((folder, displaced))
        return True

    def restore(self) -> None:
        """Undo every ``retire`` in reverse order."""
        while self._moved:
            original, displaced = self._moved.pop()
            try:
                self.fs.rename(displaced, original.name)
            except OSError:
                self.log.error("Could not restore %s from %s", original, displaced, exc_info=True)

    def purge(self) -> None:
        """Delete displaced folders once the status write has committed.

        A folder that cannot be deleted is left as a hidden orphan; no status
        pointer references it.
        """
        while self._moved:
            _, displaced = self._moved.pop()
            try:
                self.fs.delete(displaced)
            except OSError:
                self.log.warning("Could not delete retired folder %s", displaced, exc_info=True)


def is_displaced_name(name: str) -> bool:
    return name.startswith(".") and DISPLACED_MARKER in name


__all__ = ["DISPLACED_MARKER", "FolderRetirement", "is_displaced_name"]
