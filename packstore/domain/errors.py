"""Domain-level error types for package-store stages.

Every stage raises one of the ``PackageStoreError`` subclasses below. The
``code`` attribute carries the stable ``ErrorKind`` value so callers can
branch on the failure without inspecting exception classes, and ``cause``
keeps the wrapped collaborator error.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Enumerates every failure a public package-store operation can raise."""

    CONFIGURATION = "configuration"
    DATA_CORRUPTION = "data_corruption"
    PACKAGE_NOT_FOUND = "package_not_found"
    DOWNLOAD_FAILED = "download_failed"
    UNPACK_FAILED = "unpack_failed"
    ENTRY_POINT_MISSING = "entry_point_missing"
    INSTALL_FAILED = "install_failed"
    ROLLBACK_FAILED = "rollback_failed"
    IO_FAILURE = "io_failure"
    INVALID_PACKAGE_HASH = "invalid_package_hash"


class PackageStoreError(RuntimeError):
    """Base class for package-store failures."""

    kind: ErrorKind = ErrorKind.IO_FAILURE

    def __init__(self, message: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(message)
        self.code = self.kind.value
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause is None:
            return self.message
        return f"{self.message}: {self.cause}"


class ConfigurationError(PackageStoreError):
    """Raised when the store is missing required configuration (app name)."""

    kind = ErrorKind.CONFIGURATION


class DataCorruptionError(PackageStoreError):
    """A metadata file exists but cannot be parsed."""

    kind = ErrorKind.DATA_CORRUPTION


class PackageNotFoundError(PackageStoreError):
    """A package folder or its ``package.json`` is absent."""

    kind = ErrorKind.PACKAGE_NOT_FOUND

    def __init__(self, package_hash: str, *, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"Package '{package_hash}' not found", cause=cause)
        self.package_hash = package_hash


class DownloadFailedError(PackageStoreError):
    kind = ErrorKind.DOWNLOAD_FAILED


class UnpackFailedError(PackageStoreError):
    kind = ErrorKind.UNPACK_FAILED


class EntryPointMissingError(PackageStoreError):
    """The merged package does not contain the expected entry point file."""

    kind = ErrorKind.ENTRY_POINT_MISSING

    def __init__(self, entry_point: str) -> None:
        super().__init__(
            f"Update is invalid - an entry point file named '{entry_point}' could not "
            "be found within the downloaded contents. Release updates with the same "
            "entry point file name that was shipped with the application binary."
        )
        self.entry_point = entry_point


class InstallFailedError(PackageStoreError):
    kind = ErrorKind.INSTALL_FAILED


class RollbackFailedError(PackageStoreError):
    kind = ErrorKind.ROLLBACK_FAILED


class InvalidPackageHashError(PackageStoreError):
    """A package hash cannot name a folder directly under the app root."""

    kind = ErrorKind.INVALID_PACKAGE_HASH

    def __init__(self, package_hash: object) -> None:
        super().__init__(f"Invalid package hash {package_hash!r}")
        self.package_hash = package_hash


class StoreIOError(PackageStoreError):
    """Generic filesystem failure."""

    kind = ErrorKind.IO_FAILURE


__all__ = [
    "ConfigurationError",
    "DataCorruptionError",
    "DownloadFailedError",
    "EntryPointMissingError",
    "ErrorKind",
    "InstallFailedError",
    "InvalidPackageHashError",
    "PackageNotFoundError",
    "PackageStoreError",
    "RollbackFailedError",
    "StoreIOError",
    "UnpackFailedError",
]
