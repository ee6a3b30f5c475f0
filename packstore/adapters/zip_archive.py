"""ZIP adapter implementing ``ArchivePort`` with safe extraction."""

from __future__ import annotations

import shutil
import time
import zipfile
from pathlib import Path, PurePosixPath
from typing import Optional

from packstore.domain.ports import ArchivePort


class UnsafeArchiveError(ValueError):
    """Archive entry would escape the extraction directory."""

    def __init__(self, reason: str, entry_name: str) -> None:
        super().__init__(f"{reason}: {entry_name}")
        self.reason = reason
        self.entry_name = entry_name


class ZipArchiveExtractor(ArchivePort):
    """Extract ZIP archives and prevent path traversal or symlink escapes."""

    def extract_all(
        self, archive_path: Path, destination: Path, *, timeout: Optional[float] = None
    ) -> None:
        """Extract every entry of ``archive_path`` into ``destination``.

        Raises:
            zipfile.BadZipFile: If the archive cannot be opened.
            UnsafeArchiveError: For absolute, ``..``, escaping, or symlink entries.
            TimeoutError: If extraction exceeds ``timeout`` seconds.
            OSError: If files cannot be written.
        """
        destination = Path(destination)
        destination.mkdir(parents=True, exist_ok=True)
        destination_root = destination.resolve()
        deadline = None if timeout is None else time.monotonic() + timeout

        with zipfile.ZipFile(archive_path, "r") as archive:
            for entry in archive.infolist():
                if deadline is not None and time.monotonic() > deadline:
                    raise TimeoutError(f"Extraction of {archive_path} exceeded {timeout}s")
                name = entry.filename.replace("\\", "/")
                if not name:
                    continue
                pure = PurePosixPath(name)
                if pure.is_absolute() or ".." in pure.parts:
                    raise UnsafeArchiveError("Unsafe ZIP entry path detected", name)
                mode = (entry.external_attr >> 16) & 0o170000
                if mode == 0o120000:
                    raise UnsafeArchiveError("ZIP archive contains symlink entry", name)
                resolved_target = (destination / pure.as_posix()).resolve()
                if destination_root not in (resolved_target, *resolved_target.parents):
                    raise UnsafeArchiveError("ZIP entry escaped extraction directory", name)
                if entry.is_dir():
                    resolved_target.mkdir(parents=True, exist_ok=True)
                    continue
                resolved_target.parent.mkdir(parents=True, exist_ok=True)
                with archive.open(entry, "r") as source, resolved_target.open("wb") as handle:
                    shutil.copyfileobj(source, handle)


__all__ = ["UnsafeArchiveError", "ZipArchiveExtractor"]
