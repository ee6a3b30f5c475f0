"""Shared HTTP transport utilities for package downloads.

This module provides a thin wrapper around ``requests.Session`` so the
fetcher can share timeout policy, retry behavior, and header construction.

Dependencies:
    - ``requests`` for network I/O.
    - ``packstore.adapters.api_errors.ApiTimeoutError`` for typed transport failures.

Call context:
    - Constructed by ``packstore/adapters/package_fetcher.py``.
    - Used only inside the adapter layer; stages interact through ``FetchPort``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import requests
from requests import exceptions as req_exc

from packstore.adapters.api_errors import ApiTimeoutError


@dataclass
class HttpConfig:
    """Timeout and retry configuration for package transfers.

    Attributes:
        request_timeout_s: Default timeout in seconds for small requests.
        download_timeout_s: Default timeout in seconds for package downloads.
        retries: Number of retry attempts after the initial request.
    """
    request_timeout_s: float = 10
    download_timeout_s: float = 60
    retries: int = 2


class RetryingSession:
    """Shared requests wrapper with optional auth header and retry loops.

    Only establishing the response is retried. Once a body is streaming the
    caller owns the response and any failure while reading it.
    """

    def __init__(
        self,
        cfg: HttpConfig,
        *,
        api_key: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.session = session or requests.Session()
        self.api_key = api_key
        self.cfg = cfg

    def _headers(self, accept: str = "application/json") -> Dict[str, str]:
        headers = {"Accept": accept}
        if self.api_key:
            headers["X-API-Key"] = self.api_key
        return headers

    def get(
        self,
        url: str,
        *,
        accept: str = "application/json",
        timeout: Optional[float] = None,
        stream: bool = False,
    ) -> requests.Response:
        """Send a GET request with retries on timeout/connectivity failures.

        Args:
            url: Absolute URL.
            accept: ``Accept`` header value.
            timeout: Optional timeout override in seconds.
            stream: Whether to stream the response body.

        Returns:
            ``requests.Response`` from the first successful attempt.

        Raises:
            ApiTimeoutError: If all attempts fail with timeout/connection errors.
        """
        context = f"GET {url}"
        last_err: ApiTimeoutError | None = None
        attempts = self.cfg.retries + 1
        for _ in range(attempts):
            try:
                return self.session.get(
                    url,
                    headers=self._headers(accept=accept),
                    timeout=timeout or self.cfg.request_timeout_s,
                    stream=stream,
                )
            except (req_exc.Timeout, req_exc.ConnectionError):
                last_err = ApiTimeoutError(f"Timeout contacting {url}", context=context)
        raise last_err


__all__ = ["HttpConfig", "RetryingSession"]
