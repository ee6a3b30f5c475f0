from __future__ import annotations

import re
from typing import Any, Optional


class ApiError(RuntimeError):
    """Base class for package transport failures."""

    def __init__(
        self,
        message: str,
        *,
        status: Optional[int] = None,
        payload: Any = None,
        context: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.status = status
        self.payload = payload
        self.context = context


class ApiClientError(ApiError):
    """HTTP 4xx from the package server."""


class ApiServerError(ApiError):
    """HTTP 5xx from the package server."""


class ApiTimeoutError(ApiError):
    """Transport level timeout or connectivity failure."""

    def __init__(self, message: str, *, context: Optional[str] = None) -> None:
        super().__init__(message, context=context)


class DownloadCancelledError(ApiError):
    """The caller cancelled a download before it completed."""

    def __init__(self, url: str) -> None:
        super().__init__(f"Download cancelled: {url}", context=f"GET {url}")
        self.url = url


# Keys used by object stores and CDNs for the human-readable part of an error.
_DETAIL_KEYS = ("message", "Message", "error_description", "error", "detail")
_XML_MESSAGE = re.compile(r"<Message>(.*?)</Message>", re.DOTALL)
_BODY_SNIPPET = 400


def read_error_body(resp: Any) -> Any:
    """Return the decoded JSON error body, or a text snippet when it is not JSON."""
    try:
        return resp.json()
    except ValueError:
        snippet = getattr(resp, "text", "") or ""
        return snippet[:_BODY_SNIPPET] or None


def describe_http_error(ctx: str, status: int, body: Any) -> str:
    detail = error_detail(body)
    if detail:
        return f"{ctx}: {detail} (HTTP {status})"
    return f"{ctx}: HTTP {status}"


def error_detail(body: Any) -> Optional[str]:
    """Pull a one-line reason out of a package host's error body.

    JSON bodies are searched for the usual message keys (nested objects such
    as ``{"error": {"message": ...}}`` included). S3-style XML bodies yield
    their ``<Message>`` element; other text yields its first non-empty line.
    """
    if isinstance(body, str):
        match = _XML_MESSAGE.search(body)
        if match:
            return match.group(1).strip() or None
        for line in body.splitlines():
            if line.strip():
                return line.strip()
        return None
    if isinstance(body, dict):
        for key in _DETAIL_KEYS:
            value = body.get(key)
            if isinstance(value, (str, dict, list)):
                candidate = error_detail(value)
                if candidate:
                    return candidate
    if isinstance(body, list):
        for item in body:
            candidate = error_detail(item)
            if candidate:
                return candidate
    return None


__all__ = [
    "ApiClientError",
    "ApiError",
    "ApiServerError",
    "ApiTimeoutError",
    "DownloadCancelledError",
    "describe_http_error",
    "error_detail",
    "read_error_body",
]
