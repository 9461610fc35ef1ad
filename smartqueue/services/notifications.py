from __future__ import annotations

import logging
import threading
import uuid
from collections import deque
from dataclasses import replace
from datetime import datetime
from typing import Callable

from smartqueue.domain.entities import Notification, utcnow
from smartqueue.domain.enums import NotificationKind

from .ports import NotificationSink

logger = logging.getLogger(__name__)

_LEVELS = {
    NotificationKind.INFO: logging.INFO,
    NotificationKind.SUCCESS: logging.INFO,
    NotificationKind.WARNING: logging.WARNING,
}


class NotificationCenter:
    """In-memory notification feed, newest first."""

    def __init__(self, max_items: int = 100, clock: Callable[[], datetime] = utcnow) -> None:
        self._items: deque[Notification] = deque(maxlen=max(int(max_items), 1))
        self._clock = clock
        self._lock = threading.Lock()

    def emit(self, message: str, kind: NotificationKind) -> None:
        notification = Notification(
            id=uuid.uuid4().hex,
            message=message,
            kind=NotificationKind(kind),
            created_at=self._clock(),
        )
        with self._lock:
            self._items.appendleft(notification)

    def list(self) -> list[Notification]:
        with self._lock:
            return list(self._items)

    def unread_count(self) -> int:
        with self._lock:
            return sum(1 for n in self._items if not n.read)

    def mark_read(self, notification_id: str) -> bool:
        with self._lock:
            for index, item in enumerate(self._items):
                if item.id == notification_id:
                    self._items[index] = replace(item, read=True)
                    return True
        return False

    def clear(self) -> None:
        with self._lock:
            self._items.clear()


class LoggingNotificationSink:
    def __init__(self, name: str = "smartqueue.notifications") -> None:
        self._logger = logging.getLogger(name)

    def emit(self, message: str, kind: NotificationKind) -> None:
        self._logger.log(_LEVELS.get(kind, logging.INFO), "[%s] %s", kind, message)


class CompositeSink:
    def __init__(self, *sinks: NotificationSink) -> None:
        self._sinks = list(sinks)

    def emit(self, message: str, kind: NotificationKind) -> None:
        for sink in self._sinks:
            try:
                sink.emit(message, kind)
            except Exception:  # noqa: BLE001
                logger.exception("Notification sink %r failed", sink)
