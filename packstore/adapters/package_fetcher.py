"""HTTP adapter implementing ``FetchPort``.

Streams a package body to a local file and converts non-2xx responses into
typed adapter errors. A partially written file never survives a failure or
a cancellation.

Dependencies:
    - ``RetryingSession``/``HttpConfig`` for shared HTTP policy.
    - ``api_errors`` helpers for status-to-error conversion.

Call context:
    - Invoked by ``packstore/usecases/download_package.py``.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Optional

import requests

from packstore.adapters.api_errors import (
    ApiClientError,
    ApiError,
    ApiServerError,
    DownloadCancelledError,
    describe_http_error,
    read_error_body,
)
from packstore.adapters.http_client import HttpConfig, RetryingSession
from packstore.domain.ports import FetchPort

log = logging.getLogger(__name__)


class HttpPackageFetcher(FetchPort):
    """Package download transport implementation."""

    def __init__(
        self,
        *,
        cfg: Optional[HttpConfig] = None,
        session: Optional[RetryingSession] = None,
        chunk_size: int = 64 * 1024,
    ) -> None:
        self.cfg = cfg or HttpConfig()
        self.session = session or RetryingSession(self.cfg)
        self.chunk_size = chunk_size

    def fetch(
        self,
        url: str,
        destination: Path,
        *,
        cancel_event: Optional[threading.Event] = None,
        timeout: Optional[float] = None,
    ) -> Path:
        """Download ``url`` into ``destination``.

        Args:
            url: Absolute package URL.
            destination: File path to write; parent directories are created.
            cancel_event: Set by the caller to abort between chunks.
            timeout: Optional timeout override in seconds.

        Returns:
            ``destination`` once the body has been fully written.

        Raises:
            ApiTimeoutError: If the server cannot be reached.
            ApiClientError: For HTTP 4xx responses.
            ApiServerError: For HTTP 5xx responses.
            DownloadCancelledError: If ``cancel_event`` was set.
            OSError: If the file cannot be written.
        """
        if cancel_event is not None and cancel_event.is_set():
            raise DownloadCancelledError(url)
        path = Path(destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        log.debug("Fetching %s -> %s", url, path)

        resp = self.session.get(
            url,
            accept="application/octet-stream",
            timeout=timeout or self.cfg.download_timeout_s,
            stream=True,
        )
        try:
            self._ensure_ok(resp, f"download[{url}]")
            written = 0
            with path.open("wb") as handle:
                for chunk in resp.iter_content(chunk_size=self.chunk_size):
                    if cancel_event is not None and cancel_event.is_set():
                        raise DownloadCancelledError(url)
                    if chunk:
                        handle.write(chunk)
                        written += len(chunk)
        except BaseException:
            path.unlink(missing_ok=True)
            raise
        finally:
            close = getattr(resp, "close", None)
            if callable(close):
                close()

        log.debug("Fetched %d bytes from %s", written, url)
        return path

    @staticmethod
    def _ensure_ok(resp: requests.Response, ctx: str) -> None:
        """Raise typed adapter errors for non-2xx responses.

        Raises:
            ApiClientError: For HTTP 4xx responses.
            ApiServerError: For HTTP 5xx responses.
            ApiError: For all other non-2xx responses.
        """
        if 200 <= resp.status_code < 300:
            return
        status = resp.status_code
        payload = read_error_body(resp)
        message = describe_http_error(ctx, status, payload)
        if 400 <= status < 500:
            raise ApiClientError(message, status=status, payload=payload, context=ctx)
        if 500 <= status < 600:
            raise ApiServerError(message, status=status, payload=payload, context=ctx)
        raise ApiError(message, status=status, payload=payload, context=ctx)


__all__ = ["HttpPackageFetcher"]
