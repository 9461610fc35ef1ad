from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .enums import NotificationKind, Priority, QueueType, TaskStatus


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime) -> datetime:
    """Timestamps are kept as naive UTC; aware values are converted."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


@dataclass(frozen=True)
class TaskDraft:
    title: str
    deadline: datetime
    description: str = ""
    priority: Priority = Priority.MEDIUM
    queue_type: QueueType = QueueType.NORMAL


@dataclass(frozen=True)
class TaskEntity:
    id: str
    title: str
    description: str
    priority: Priority
    deadline: datetime
    queue_type: QueueType
    status: TaskStatus
    created_at: datetime
    completed_at: Optional[datetime] = None
    execution_time: float | None = None


@dataclass(frozen=True)
class QueuedTask:
    """Read-side projection of a queued task; ``position`` is 1-based."""

    task: TaskEntity
    position: int


@dataclass(frozen=True)
class Notification:
    id: str
    message: str
    kind: NotificationKind
    created_at: datetime
    read: bool = False
