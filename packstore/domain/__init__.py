"""Domain package exports for records, errors, and path resolution."""

from .errors import (
    ConfigurationError,
    DataCorruptionError,
    DownloadFailedError,
    EntryPointMissingError,
    ErrorKind,
    InstallFailedError,
    InvalidPackageHashError,
    PackageNotFoundError,
    PackageStoreError,
    RollbackFailedError,
    StoreIOError,
    UnpackFailedError,
)
from .models import DownloadResult, PackageHash, PackageRecord, StatusRecord
from .paths import PathResolver

__all__ = [
    "ConfigurationError",
    "DataCorruptionError",
    "DownloadFailedError",
    "DownloadResult",
    "EntryPointMissingError",
    "ErrorKind",
    "InstallFailedError",
    "InvalidPackageHashError",
    "PackageHash",
    "PackageNotFoundError",
    "PackageRecord",
    "PackageStoreError",
    "PathResolver",
    "RollbackFailedError",
    "StatusRecord",
    "StoreIOError",
    "UnpackFailedError",
]
