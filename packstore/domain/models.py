"""Typed records persisted by the package store."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

PackageHash = str


def _optional_hash(payload: Mapping[str, Any], *keys: str) -> Optional[PackageHash]:
    for key in keys:
        if key not in payload:
            continue
        value = payload[key]
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(f"'{key}' must be a string or null, got {type(value).__name__}")
        return value or None
    return None


@dataclass(frozen=True)
class StatusRecord:
    """Current/previous package pointers for one application.

    ``None`` means "no package"; an empty string is never stored.
    """

    current_package_hash: Optional[PackageHash] = None
    previous_package_hash: Optional[PackageHash] = None

    @classmethod
    def from_dict(cls, payload: object) -> "StatusRecord":
        """Build a record from decoded JSON.

        Older stores wrote ``currentPackage``/``previousPackage``; both spellings
        are accepted.

        Raises:
            ValueError: If the payload is not an object or a pointer is not a string.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Status record must be a JSON object")
        return cls(
            current_package_hash=_optional_hash(payload, "currentPackageHash", "currentPackage"),
            previous_package_hash=_optional_hash(payload, "previousPackageHash", "previousPackage"),
        )

    def to_dict(self) -> Dict[str, str]:
        payload: Dict[str, str] = {}
        if self.current_package_hash is not None:
            payload["currentPackageHash"] = self.current_package_hash
        if self.previous_package_hash is not None:
            payload["previousPackageHash"] = self.previous_package_hash
        return payload


@dataclass(frozen=True)
class PackageRecord:
    """Metadata stored in ``<packageHash>/package.json``.

    Only ``package_hash`` is interpreted by the store. ``app_version`` and
    ``label`` are descriptive, and any other caller-defined keys are kept in
    ``extra`` and written back untouched.
    """

    package_hash: PackageHash
    app_version: str = ""
    label: Optional[str] = None
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: object) -> "PackageRecord":
        """Build a record from decoded JSON.

        Raises:
            ValueError: If the payload is not an object or ``packageHash`` is missing.
        """
        if not isinstance(payload, Mapping):
            raise ValueError("Package record must be a JSON object")
        package_hash = payload.get("packageHash")
        if not isinstance(package_hash, str) or not package_hash:
            raise ValueError("Package record requires a non-empty 'packageHash'")
        app_version = payload.get("appVersion")
        label = payload.get("label")
        extra = {
            key: value
            for key, value in payload.items()
            if key not in ("packageHash", "appVersion", "label")
        }
        return cls(
            package_hash=package_hash,
            app_version="" if app_version is None else str(app_version),
            label=None if label is None else str(label),
            extra=extra,
        )

    def to_dict(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = dict(self.extra)
        payload["packageHash"] = self.package_hash
        payload["appVersion"] = self.app_version
        if self.label is not None:
            payload["label"] = self.label
        return payload


@dataclass(frozen=True)
class DownloadResult:
    """Outcome of the download stage."""

    local_path: Path
    is_archive: bool


__all__ = ["DownloadResult", "PackageHash", "PackageRecord", "StatusRecord"]
