"""Caller-side serialization of lifecycle operations per application.

The lifecycle use cases hold no locks. Any caller that may run downloads,
installs, or rollbacks for the same application from several threads wraps
each call in ``AppSerializer.hold(app_name)``.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Dict, Iterator


class AppSerializer:
    """Hand out one re-entrant lock per application identifier."""

    def __init__(self) -> None:
        self._locks: Dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    def lock_for(self, app_name: str) -> threading.RLock:
        with self._guard:
            lock = self._locks.get(app_name)
            if lock is None:
                lock = threading.RLock()
                self._locks[app_name] = lock
            return lock

    @contextmanager
    def hold(self, app_name: str) -> Iterator[None]:
        lock = self.lock_for(app_name)
        with lock:
            yield


__all__ = ["AppSerializer"]
