"""Download stage: fetch package bytes and classify them."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from packstore.domain.constants import DOWNLOAD_FILE_NAME, ZIP_HEADER
from packstore.domain.errors import DownloadFailedError, InvalidPackageHashError
from packstore.domain.models import DownloadResult, PackageHash
from packstore.domain.paths import PathResolver
from packstore.domain.ports import FetchPort, FileSystemPort


def has_zip_signature(data: bytes) -> bool:
    """Return whether ``data`` starts with the ZIP local file header.

    Buffers shorter than the signature simply do not match.
    """
    return bytes(data[: len(ZIP_HEADER)]) == ZIP_HEADER


def is_zip_file(path: Path) -> bool:
    """Sniff the first bytes of ``path`` for the ZIP signature."""
    with Path(path).open("rb") as handle:
        return has_zip_signature(handle.read(len(ZIP_HEADER)))


@dataclass
class DownloadPackage:
    """Fetch a package into its (freshly emptied) package folder."""

    paths: PathResolver
    fetcher: FetchPort
    fs: FileSystemPort
    timeout: Optional[float] = None
    log: logging.Logger = field(default_factory=lambda: logging.getLogger(__name__))

    def __call__(
        self,
        *,
        package_hash: PackageHash,
        url: str,
        cancel_event: Optional[threading.Event] = None,
    ) -> DownloadResult:
        """Download ``url`` for ``package_hash``.

        A folder left over from an interrupted attempt is removed first. On
        any failure, including cancellation, the package folder is removed
        again so no partial package survives. The status record is never
        touched.

        Raises:
            ConfigurationError: If the application name is unset.
            DownloadFailedError: Wrapping an invalid hash or a cleanup, transfer,
                or sniffing failure.
        """
        try:
            folder = self.paths.package_folder_path(package_hash)
        except InvalidPackageHashError as exc:
            raise DownloadFailedError(f"Cannot download package {package_hash!r}", cause=exc) from exc
        if self.fs.exists(folder):
            self.log.debug("Removing stale package folder %s", folder)
            try:
                self.fs.delete(folder)
            except OSError as exc:
                raise DownloadFailedError(
                    f"Failed to clear stale package folder {folder}", cause=exc
                ) from exc

        self.log.info("Downloading package %s from %s", package_hash, url)
        try:
            local_path = self.fetcher.fetch(
                url,
                folder / DOWNLOAD_FILE_NAME,
                cancel_event=cancel_event,
                timeout=self.timeout,
            )
            is_archive = is_zip_file(local_path)
        except Exception as exc:
            self._discard(folder)
            self.log.warning("Download of package %s failed: %s", package_hash, exc)
            raise DownloadFailedError(
                f"Failed to download package {package_hash}", cause=exc
            ) from exc

        self.log.info("Downloaded package %s (archive=%s)", package_hash, is_archive)
        return DownloadResult(local_path=Path(local_path), is_archive=is_archive)

    def _discard(self, folder: Path) -> None:
        try:
            self.fs.delete(folder)
        except OSError:
            # The next download of the same hash clears it again.
            self.log.warning("Could not remove partial package folder %s", folder, exc_info=True)


__all__ = ["DownloadPackage", "has_zip_signature", "is_zip_file"]
