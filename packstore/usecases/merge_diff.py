"""Diff merge stage: reconcile an unpacked update with the current package.

A payload that ships ``hotcodepush.json`` is a diff update. The manifest is
a JSON object with either form:

- ``{"deletedFiles": [...]}``: carry over everything from the current
  package except the listed paths;
- ``{"retainedFiles": [...], "deletedFiles": [...]}``: carry over only the
  retained paths, then drop the deleted ones.

Paths are relative to ``<packageFolder>/<appName>``. Files from the payload
always win over carried-over files at the same relative path.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import List, Optional, Sequence, Tuple

from packstore.adapters.status_store import StatusStore
from packstore.domain.constants import DIFF_MANIFEST_FILE_NAME, UNZIPPED_FOLDER_NAME
from packstore.domain.errors import (
    DataCorruptionError,
    EntryPointMissingError,
    PackageStoreError,
    StoreIOError,
)
from packstore.domain.paths import PathResolver
from packstore.domain.ports import FileSystemPort, RecordParseError, RecordPort


@dataclass(frozen=True)
class DiffManifest:
    """Parsed ``hotcodepush.json``."""

    deleted_files: Tuple[str, ...] = ()
    retained_files: Optional[Tuple[str, ...]] = None

    @classmethod
    def from_dict(cls, payload: object) -> "DiffManifest":
        """Validate a decoded manifest.

        Raises:
            ValueError: If the shape is wrong or a path is unsafe.
        """
        if not isinstance(payload, dict):
            raise ValueError("Diff manifest must be a JSON object")
        deleted = _relative_paths(payload.get("deletedFiles"), "deletedFiles")
        retained = None
        if "retainedFiles" in payload:
            retained = _relative_paths(payload.get("retainedFiles"), "retainedFiles")
        return cls(deleted_files=deleted, retained_files=retained)


def _relative_paths(raw: object, key: str) -> Tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, list):
        raise ValueError(f"'{key}' must be a list of paths")
    result: List[str] = []
    for item in raw:
        if not isinstance(item, str) or not item.strip():
            raise ValueError(f"'{key}' entries must be non-empty strings")
        pure = PurePosixPath(item.replace("\\", "/"))
        if pure.is_absolute() or ".." in pure.parts:
            raise ValueError(f"Unsafe path in '{key}': {item}")
        result.append(pure.as_posix())
    return tuple(result)


@dataclass
class MergeDiff:
    """Build ``<newUpdateDir>/<appName>`` from the payload and the current package."""

    paths: PathResolver
    status_store: StatusStore
    fs: FileSystemPort
    records: RecordPort
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def __call__(self, *, new_update_dir: Path, entry_point: str, app_name: str) -> Path:
        """Merge the payload and return the resolved entry-point path.

        Raises:
            ConfigurationError: If the application name is unset.
            DataCorruptionError: If the diff manifest or status file is unreadable,
                or a retained file is absent from the current package.
            EntryPointMissingError: If no file named like ``entry_point`` exists.
            StoreIOError: For filesystem failures.
        """
        new_update_dir = Path(new_update_dir)
        new_app_dir = new_update_dir / app_name
        unzipped = new_update_dir / UNZIPPED_FOLDER_NAME
        try:
            manifests = self._manifest_paths(new_update_dir)
            if manifests:
                manifest = self._load_manifest(manifests[0])
                current_app_dir = self._current_app_dir(app_name)
                if current_app_dir is None:
                    self.log.debug("Diff update without a current package; nothing to carry over")
                else:
                    self._carry_over(manifest, current_app_dir, new_app_dir)
                for path in manifests:
                    self.fs.delete(path)

            if not self.fs.is_dir(unzipped):
                raise StoreIOError(f"Unpacked payload {unzipped} is missing")
            self.fs.copy_tree(unzipped, new_app_dir)
            self.fs.delete(unzipped)

            entry_name = PurePosixPath(entry_point.replace("\\", "/")).name
            found = self.fs.find_file(new_update_dir, entry_name)
        except PackageStoreError:
            raise
        except OSError as exc:
            raise StoreIOError(f"Failed to merge update in {new_update_dir}", cause=exc) from exc

        if found is None:
            raise EntryPointMissingError(entry_point)
        self.log.info("Merged update in %s (diff=%s), entry point %s", new_update_dir, bool(manifests), found)
        return Path(found).resolve()

    def _manifest_paths(self, new_update_dir: Path) -> List[Path]:
        candidates = (
            new_update_dir / DIFF_MANIFEST_FILE_NAME,
            new_update_dir / UNZIPPED_FOLDER_NAME / DIFF_MANIFEST_FILE_NAME,
        )
        return [path for path in candidates if self.fs.exists(path)]

    def _load_manifest(self, path: Path) -> DiffManifest:
        try:
            return DiffManifest.from_dict(self.records.read_record(path))
        except (RecordParseError, ValueError) as exc:
            raise DataCorruptionError(f"Diff manifest {path} is invalid", cause=exc) from exc

    def _current_app_dir(self, app_name: str) -> Optional[Path]:
        current = self.status_store.read().current_package_hash
        if current is None:
            return None
        folder = self.paths.package_folder_path(current) / app_name
        if not self.fs.is_dir(folder):
            self.log.warning("Current package %s has no '%s' folder", current, app_name)
            return None
        return folder

    def _carry_over(self, manifest: DiffManifest, current_app_dir: Path, new_app_dir: Path) -> None:
        if manifest.retained_files is None:
            self.fs.copy_tree(current_app_dir, new_app_dir)
        else:
            self._copy_retained(manifest.retained_files, current_app_dir, new_app_dir)
        for relative in manifest.deleted_files:
            self.fs.delete(new_app_dir / relative)

    def _copy_retained(self, retained: Sequence[str], source_root: Path, target_root: Path) -> None:
        for relative in retained:
            source = source_root / relative
            if not self.fs.exists(source):
                raise DataCorruptionError(
                    f"Diff manifest retains '{relative}' but the current package does not contain it"
                )
            self.fs.copy_tree(source, target_root / relative)


__all__ = ["DiffManifest", "MergeDiff"]
