"""The host's play log, with subscribers notified after each entry is stored."""

from __future__ import annotations

import logging
import threading
from typing import Callable

from social_llm.models.interaction import LogEntry

logger = logging.getLogger(__name__)

EntryHandler = Callable[[LogEntry], object]


class PlayLog:
    def __init__(self, max_entries: int = 1000) -> None:
        self._lock = threading.Lock()
        self._entries: list[LogEntry] = []
        self._max_entries = max_entries
        self._handlers: list[EntryHandler] = []

    def subscribe(self, handler: EntryHandler) -> Callable[[], None]:
        """Register ``handler`` to run after every add. Returns an unsubscribe."""
        with self._lock:
            self._handlers.append(handler)

        def unsubscribe() -> None:
            with self._lock:
                if handler in self._handlers:
                    self._handlers.remove(handler)

        return unsubscribe

    def add(self, entry: LogEntry) -> None:
        # Default handling first: the entry is stored before anyone reacts
        with self._lock:
            self._entries.append(entry)
            if len(self._entries) > self._max_entries:
                del self._entries[: len(self._entries) - self._max_entries]
            handlers = list(self._handlers)

        for handler in handlers:
            try:
                handler(entry)
            except Exception:
                logger.exception("Play log handler %r failed for entry %s", handler, entry.id)

    def entries(self) -> list[LogEntry]:
        with self._lock:
            return list(self._entries)

    def get(self, entry_id: str) -> LogEntry | None:
        with self._lock:
            for entry in self._entries:
                if entry.id == entry_id:
                    return entry
        return None
