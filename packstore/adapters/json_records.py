"""JSON adapter implementing ``RecordPort``."""

from __future__ import annotations

import json
import os
import uuid
from pathlib import Path
from typing import Any

from packstore.domain.ports import RecordNotFoundError, RecordParseError, RecordPort


class JsonRecordSerializer(RecordPort):
    """Read and write metadata records as UTF-8 JSON files.

    Writes land in a sibling temporary file that is moved over the target
    with ``os.replace``, so readers never observe a half-written record.
    """

    def __init__(self, *, indent: int = 2) -> None:
        self.indent = indent

    def read_record(self, path: Path) -> Any:
        """Return the decoded JSON value stored at ``path``.

        Raises:
            RecordNotFoundError: If nothing exists at ``path``.
            RecordParseError: If the content is not valid UTF-8 JSON.
            OSError: If ``path`` exists but cannot be read as a file.
        """
        path = Path(path)
        try:
            raw = path.read_bytes()
        except FileNotFoundError as exc:
            raise RecordNotFoundError(str(path)) from exc
        try:
            return json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise RecordParseError(f"{path}: {exc}") from exc

    def write_record(self, path: Path, payload: Any) -> None:
        """Serialize ``payload`` to ``path``, replacing any previous content.

        Raises:
            OSError: If the directory or file cannot be written.
            TypeError: If ``payload`` is not JSON serializable.
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        text = json.dumps(payload, ensure_ascii=False, indent=self.indent, sort_keys=True)
        tmp_path = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")
        try:
            with tmp_path.open("w", encoding="utf-8") as handle:
                handle.write(text + "\n")
                handle.flush()
                os.fsync(handle.fileno())
            os.replace(tmp_path, path)
        finally:
            tmp_path.unlink(missing_ok=True)


__all__ = ["JsonRecordSerializer", "RecordNotFoundError", "RecordParseError"]
