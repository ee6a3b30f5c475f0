"""Persistence for the per-application ``status.json`` pointer record."""

from __future__ import annotations

import logging

from packstore.domain.errors import DataCorruptionError, StoreIOError
from packstore.domain.models import StatusRecord
from packstore.domain.paths import PathResolver
from packstore.domain.ports import RecordNotFoundError, RecordParseError, RecordPort

log = logging.getLogger(__name__)


class StatusStore:
    """Read/write the current/previous package pointers.

    The store holds no lock. A read followed by a write is not atomic, so
    callers must serialize read-modify-write sequences per application.
    """

    def __init__(self, paths: PathResolver, records: RecordPort) -> None:
        self.paths = paths
        self.records = records

    def read(self) -> StatusRecord:
        """Return the stored record, or an empty one when no file exists.

        Raises:
            ConfigurationError: If the application name is unset.
            DataCorruptionError: If the file exists but cannot be parsed.
            StoreIOError: If the file cannot be read.
        """
        path = self.paths.status_file_path()
        try:
            payload = self.records.read_record(path)
        except RecordNotFoundError:
            return StatusRecord()
        except RecordParseError as exc:
            raise DataCorruptionError(f"Status file {path} is unreadable", cause=exc) from exc
        except OSError as exc:
            raise StoreIOError(f"Failed to read status file {path}", cause=exc) from exc
        try:
            return StatusRecord.from_dict(payload)
        except ValueError as exc:
            raise DataCorruptionError(f"Status file {path} is malformed", cause=exc) from exc

    def write(self, record: StatusRecord) -> None:
        """Overwrite the status file with the complete ``record``.

        Raises:
            ConfigurationError: If the application name is unset.
            StoreIOError: If the file cannot be written.
        """
        path = self.paths.status_file_path()
        try:
            self.records.write_record(path, record.to_dict())
        except (OSError, TypeError, ValueError) as exc:
            raise StoreIOError(f"Failed to write status file {path}", cause=exc) from exc
        log.debug(
            "Status updated current=%s previous=%s",
            record.current_package_hash,
            record.previous_package_hash,
        )


__all__ = ["StatusStore"]
