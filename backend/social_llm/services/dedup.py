from __future__ import annotations

import threading
import time
from typing import Callable, Hashable

import cachetools


class ProcessedSet:
    """Thread-safe record of event identities that were already handled.

    Bounded in both size and age: the oldest entries are evicted once
    ``max_entries`` is reached, and entries expire after ``ttl_seconds``.
    Host redeliveries arrive within milliseconds, so an hour is plenty.
    """

    def __init__(
        self,
        max_entries: int = 4096,
        ttl_seconds: float = 3600.0,
        timer: Callable[[], float] = time.monotonic,
    ) -> None:
        self._lock = threading.Lock()
        self._seen: cachetools.TTLCache = cachetools.TTLCache(
            maxsize=max_entries, ttl=ttl_seconds, timer=timer
        )

    def add_if_absent(self, key: Hashable) -> bool:
        """Mark ``key`` processed. Returns False if it already was."""
        with self._lock:
            if key in self._seen:
                return False
            self._seen[key] = True
            return True

    def __contains__(self, key: Hashable) -> bool:
        with self._lock:
            return key in self._seen

    def __len__(self) -> int:
        with self._lock:
            return len(self._seen)
