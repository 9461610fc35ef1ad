from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from .entities import TaskEntity
from .enums import QueueType, TaskStatus


@dataclass(frozen=True)
class TaskFilters:
    filter_key: str = "all"
    search: str | None = None


def apply_filters(tasks: list[TaskEntity], filters: TaskFilters, now: datetime) -> list[TaskEntity]:
    key = filters.filter_key
    if key == "pending":
        tasks = [t for t in tasks if t.status == TaskStatus.PENDING]
    elif key == "active":
        tasks = [t for t in tasks if t.status == TaskStatus.ACTIVE]
    elif key == "completed":
        tasks = [t for t in tasks if t.status == TaskStatus.COMPLETED]
    elif key == "overdue":
        tasks = [t for t in tasks if t.status != TaskStatus.COMPLETED and t.deadline < now]
    elif key == "normal":
        tasks = [t for t in tasks if t.status == TaskStatus.PENDING and t.queue_type == QueueType.NORMAL]
    elif key == "priority":
        tasks = [t for t in tasks if t.status == TaskStatus.PENDING and t.queue_type == QueueType.PRIORITY]
    elif key != "all":
        raise ValueError(f"Unknown filter: {key}")

    if filters.search:
        needle = filters.search.lower()
        tasks = [
            t for t in tasks
            if needle in t.title.lower() or needle in t.description.lower()
        ]

    return list(tasks)
