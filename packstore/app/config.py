"""Runtime configuration for a package store."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from packstore.adapters.http_client import HttpConfig

ENV_DOCUMENTS_DIR = "PACKSTORE_DOCUMENTS_DIR"
ENV_APP_NAME = "PACKSTORE_APP_NAME"
ENV_REQUEST_TIMEOUT = "PACKSTORE_REQUEST_TIMEOUT_S"
ENV_DOWNLOAD_TIMEOUT = "PACKSTORE_DOWNLOAD_TIMEOUT_S"
ENV_RETRIES = "PACKSTORE_RETRIES"
ENV_EXTRACT_TIMEOUT = "PACKSTORE_EXTRACT_TIMEOUT_S"


@dataclass
class StoreConfig:
    """Settings for one application's package store.

    Attributes:
        documents_dir: Directory holding one folder per application.
        app_name: Application identifier; also the installed-files folder name.
        request_timeout_s: Timeout for short HTTP requests.
        download_timeout_s: Timeout passed to the fetcher for package downloads.
        retries: Transport retries after the first attempt.
        extract_timeout_s: Upper bound for archive extraction, ``None`` for no bound.
    """

    documents_dir: Path
    app_name: Optional[str]
    request_timeout_s: float = 10
    download_timeout_s: float = 60
    retries: int = 2
    extract_timeout_s: Optional[float] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "StoreConfig":
        """Build a config from ``PACKSTORE_*`` environment variables.

        Raises:
            ValueError: If a numeric variable cannot be parsed.
        """
        env = os.environ if environ is None else environ
        documents_dir = env.get(ENV_DOCUMENTS_DIR, "").strip() or str(Path.home() / "Documents")
        extract_timeout = _float(env, ENV_EXTRACT_TIMEOUT, None)
        return cls(
            documents_dir=Path(documents_dir).expanduser(),
            app_name=env.get(ENV_APP_NAME, "").strip() or None,
            request_timeout_s=_float(env, ENV_REQUEST_TIMEOUT, 10.0),
            download_timeout_s=_float(env, ENV_DOWNLOAD_TIMEOUT, 60.0),
            retries=int(env.get(ENV_RETRIES, "").strip() or 2),
            extract_timeout_s=extract_timeout,
        )

    def http_config(self) -> HttpConfig:
        return HttpConfig(
            request_timeout_s=self.request_timeout_s,
            download_timeout_s=self.download_timeout_s,
            retries=self.retries,
        )


def _float(env: Mapping[str, str], key: str, default: Optional[float]) -> Optional[float]:
    raw = env.get(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError as exc:
        raise ValueError(f"{key} must be a number, got '{raw}'") from exc


__all__ = ["StoreConfig"]
