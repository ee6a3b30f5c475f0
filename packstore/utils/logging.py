"""Logging setup for applications that embed the package store.

The store modules only create ``logging.getLogger(__name__)`` loggers and
never touch handlers. A host application calls :func:`configure_root` once
at startup, next to ``StoreConfig.from_env()``, so that store messages are
emitted with the level selected by the ``PACKSTORE_*`` variables.
"""

from __future__ import annotations

import logging
import os
from typing import Mapping, Optional

_DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DEFAULT_DATEFMT = "%H:%M:%S"
LEVEL_ENV_VAR = "PACKSTORE_LOG_LEVEL"
DEBUG_ENV_VAR = "PACKSTORE_DEBUG"


def _coerce_level(value: Optional[str], fallback: int) -> int:
    text = (value or "").strip()
    if not text:
        return fallback
    if text.isdigit():
        return int(text)
    candidate = getattr(logging, text.upper(), None)
    return candidate if isinstance(candidate, int) else fallback


def _env_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in {"1", "true", "yes", "on"}


def resolve_level(default_level: int | str = logging.INFO, environ: Optional[Mapping[str, str]] = None) -> int:
    """Return the level selected by the environment, else ``default_level``.

    ``PACKSTORE_LOG_LEVEL`` (name or number) wins over ``PACKSTORE_DEBUG``.
    """
    env = os.environ if environ is None else environ
    fallback = (
        _coerce_level(default_level, logging.INFO)
        if isinstance(default_level, str)
        else int(default_level)
    )
    explicit = env.get(LEVEL_ENV_VAR)
    if explicit and explicit.strip():
        return _coerce_level(explicit, fallback)
    if _env_truthy(env.get(DEBUG_ENV_VAR)):
        return logging.DEBUG
    return fallback


def configure_root(default_level: int | str = logging.INFO, environ: Optional[Mapping[str, str]] = None) -> int:
    """Configure the root logger for a host application and return the level used.

    A compact format is installed only when the root logger has no handlers
    yet; an application that already configured logging keeps its handlers
    and only gets the level applied.
    """
    effective = resolve_level(default_level, environ)
    root = logging.getLogger()
    if not root.handlers:
        logging.basicConfig(level=effective, format=_DEFAULT_FORMAT, datefmt=_DEFAULT_DATEFMT)
    root.setLevel(effective)
    return effective


__all__ = ["DEBUG_ENV_VAR", "LEVEL_ENV_VAR", "configure_root", "resolve_level"]
