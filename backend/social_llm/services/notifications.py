from __future__ import annotations

import logging
import threading
from collections import deque
from typing import Protocol

from social_llm.models.interaction import Notification

logger = logging.getLogger(__name__)


class NotificationSink(Protocol):
    def post(self, notification: Notification) -> None: ...


class NotificationLog:
    """In-memory message surface for the current session.

    Keeps the most recent ``max_items`` notifications; nothing is persisted.
    """

    def __init__(self, max_items: int = 500) -> None:
        self._lock = threading.Lock()
        self._items: deque[Notification] = deque(maxlen=max_items)

    def post(self, notification: Notification) -> None:
        with self._lock:
            self._items.append(notification)
        logger.debug("Notification [%s]: %s", notification.severity.value, notification.text)

    def items(self) -> list[Notification]:
        with self._lock:
            return list(self._items)

    def clear(self) -> None:
        with self._lock:
            self._items.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
