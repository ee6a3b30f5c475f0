"""Path arithmetic for the on-disk package layout.

::

    <documents_dir>/<app_name>/
        status.json
        <packageHash>/
            package.json
            <app_name>/...
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from packstore.domain.constants import PACKAGE_FILE_NAME, STATUS_FILE_NAME
from packstore.domain.errors import ConfigurationError, InvalidPackageHashError
from packstore.domain.models import PackageHash

_FORBIDDEN_HASH_CHARS = ("/", "\\", "\x00")


@dataclass(frozen=True)
class PathResolver:
    """Resolve every store path from a documents directory and an app name."""

    documents_dir: Path
    app_name: Optional[str]

    def app_root(self) -> Path:
        """Return ``<documents_dir>/<app_name>``.

        Raises:
            ConfigurationError: If ``app_name`` is unset or blank.
        """
        name = (self.app_name or "").strip()
        if not name:
            raise ConfigurationError("Application name is not configured")
        return Path(self.documents_dir) / name

    def status_file_path(self) -> Path:
        return self.app_root() / STATUS_FILE_NAME

    def package_folder_path(self, package_hash: PackageHash) -> Path:
        """Return ``<app_root>/<package_hash>``.

        Raises:
            ConfigurationError: If ``app_name`` is unset or blank.
            InvalidPackageHashError: If the hash is not a single path segment.
        """
        return self.app_root() / validate_package_hash(package_hash)

    def package_file_path(self, package_hash: PackageHash) -> Path:
        return self.package_folder_path(package_hash) / PACKAGE_FILE_NAME


def validate_package_hash(package_hash: object) -> str:
    """Return ``package_hash`` if it names exactly one folder below the app root."""
    if not isinstance(package_hash, str) or not package_hash.strip():
        raise InvalidPackageHashError(package_hash)
    if package_hash in (".", "..") or any(ch in package_hash for ch in _FORBIDDEN_HASH_CHARS):
        raise InvalidPackageHashError(package_hash)
    return package_hash


__all__ = ["PathResolver", "validate_package_hash"]
