from __future__ import annotations

import threading
from pathlib import Path
from typing import Any, List, Optional, Protocol


# ---- Collaborator error model ----
class RecordNotFoundError(LookupError):
    """Raised by ``RecordPort.read_record`` when the file does not exist."""


class RecordParseError(ValueError):
    """Raised by ``RecordPort.read_record`` when the file cannot be decoded."""


# ---- Ports (Hexagonal boundaries) ----
class FetchPort(Protocol):
    """Transfers package bytes for a URL into a local file."""

    def fetch(
        self,
        url: str,
        destination: Path,
        *,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> Path: ...  # returns the written file path


class ArchivePort(Protocol):
    """Extracts every entry of an archive into a directory."""

    def extract_all(
        self, archive_path: Path, destination: Path, *, timeout: Optional[float] = None
    ) -> None: ...


class RecordPort(Protocol):
    """Serializes metadata records to and from files."""

    def read_record(self, path: Path) -> Any: ...  # RecordNotFoundError / RecordParseError
    def write_record(self, path: Path, payload: Any) -> None: ...


class FileSystemPort(Protocol):
    """Filesystem primitives used by the stages."""

    def exists(self, path: Path) -> bool: ...
    def is_dir(self, path: Path) -> bool: ...
    def delete(self, path: Path) -> None: ...  # succeeds when path is absent
    def make_dirs(self, path: Path) -> None: ...
    def copy_tree(self, source: Path, destination: Path) -> None: ...  # merges, overwrites files
    def list_directory(self, path: Path) -> List[str]: ...
    def rename(self, path: Path, new_name: str) -> Path: ...
    def move(self, source: Path, destination: Path) -> Path: ...
    def find_file(self, root: Path, file_name: str) -> Optional[Path]: ...


__all__ = [
    "ArchivePort",
    "FetchPort",
    "FileSystemPort",
    "RecordNotFoundError",
    "RecordParseError",
    "RecordPort",
]
