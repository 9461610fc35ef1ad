from __future__ import annotations

from datetime import datetime, timedelta

from smartqueue.domain.entities import TaskEntity
from smartqueue.domain.enums import Priority, QueueType, TaskStatus
from smartqueue.services.analytics import compute_stats, format_duration

NOW = datetime(2026, 1, 1, 12, 0)


def make(status: TaskStatus, priority: Priority, hours: float, execution_time: float | None = None) -> TaskEntity:
    return TaskEntity(
        id=f"{status}-{priority}-{hours}",
        title="t",
        description="",
        priority=priority,
        deadline=NOW + timedelta(hours=hours),
        queue_type=QueueType.NORMAL,
        status=status,
        created_at=NOW,
        completed_at=NOW if status == TaskStatus.COMPLETED else None,
        execution_time=execution_time,
    )


def test_compute_stats_counts_and_averages() -> None:
    tasks = [
        make(TaskStatus.COMPLETED, Priority.HIGH, -10, 60),
        make(TaskStatus.COMPLETED, Priority.LOW, 5, 120),
        make(TaskStatus.PENDING, Priority.MEDIUM, -1),
        make(TaskStatus.ACTIVE, Priority.HIGH, 3),
    ]

    stats = compute_stats(tasks, NOW)

    assert stats["total"] == 4
    assert stats["pending"] == 1
    assert stats["active"] == 1
    assert stats["completed"] == 2
    assert stats["overdue"] == 1
    assert (stats["high"], stats["medium"], stats["low"]) == (2, 1, 1)
    assert stats["completion_rate"] == 50
    assert stats["total_execution_time"] == 180
    assert stats["average_execution_time"] == 90


def test_compute_stats_on_empty_log() -> None:
    stats = compute_stats([], NOW)

    assert stats["total"] == 0
    assert stats["completion_rate"] == 0
    assert stats["average_execution_time"] == 0


def test_format_duration() -> None:
    assert format_duration(125) == "2m 5s"
    assert format_duration(0) == "0m 0s"
    assert format_duration(None) == "N/A"
