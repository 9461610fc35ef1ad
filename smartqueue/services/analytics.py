from __future__ import annotations

from datetime import datetime
from typing import Iterable

from smartqueue.domain.entities import TaskEntity
from smartqueue.domain.enums import Priority, TaskStatus


def compute_stats(tasks: Iterable[TaskEntity], now: datetime) -> dict[str, float]:
    tasks = list(tasks)
    completed = [t for t in tasks if t.status == TaskStatus.COMPLETED]
    total_time = sum(t.execution_time or 0 for t in completed)

    return {
        "total": len(tasks),
        "pending": sum(1 for t in tasks if t.status == TaskStatus.PENDING),
        "active": sum(1 for t in tasks if t.status == TaskStatus.ACTIVE),
        "completed": len(completed),
        "overdue": sum(
            1 for t in tasks if t.status != TaskStatus.COMPLETED and t.deadline < now
        ),
        "high": sum(1 for t in tasks if t.priority == Priority.HIGH),
        "medium": sum(1 for t in tasks if t.priority == Priority.MEDIUM),
        "low": sum(1 for t in tasks if t.priority == Priority.LOW),
        "completion_rate": round(len(completed) / len(tasks) * 100) if tasks else 0,
        "total_execution_time": total_time,
        "average_execution_time": total_time / len(completed) if completed else 0,
    }


def format_duration(seconds: float | None) -> str:
    if seconds is None:
        return "N/A"
    whole = int(seconds)
    return f"{whole // 60}m {whole % 60}s"
