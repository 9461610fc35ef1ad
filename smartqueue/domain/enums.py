from __future__ import annotations

from enum import IntEnum, StrEnum


class TaskStatus(StrEnum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"


class QueueType(StrEnum):
    NORMAL = "normal"
    PRIORITY = "priority"


class NotificationKind(StrEnum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"


class PriorityLevel(IntEnum):
    LOW = 1
    MEDIUM = 2
    HIGH = 3


class Priority(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    @property
    def weight(self) -> int:
        return PriorityLevel[self.name].value
