from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from smartqueue.domain.entities import TaskEntity
from smartqueue.domain.enums import Priority, QueueType, TaskStatus
from smartqueue.domain.policy import should_promote

NOW = datetime(2026, 1, 1, 12, 0)


def task_due_in(priority: Priority, hours: float) -> TaskEntity:
    return TaskEntity(
        id="t",
        title="t",
        description="",
        priority=priority,
        deadline=NOW + timedelta(hours=hours),
        queue_type=QueueType.NORMAL,
        status=TaskStatus.PENDING,
        created_at=NOW,
    )


@pytest.mark.parametrize(
    ("priority", "hours", "expected"),
    [
        (Priority.HIGH, 47, True),
        (Priority.HIGH, 48, True),
        (Priority.HIGH, 49, False),
        (Priority.MEDIUM, 24, True),
        (Priority.MEDIUM, 25, False),
        (Priority.LOW, 12, True),
        (Priority.LOW, 13, False),
        (Priority.MEDIUM, 12, True),
        (Priority.LOW, -5, True),
    ],
)
def test_should_promote_thresholds(priority: Priority, hours: float, expected: bool) -> None:
    assert should_promote(task_due_in(priority, hours), NOW) is expected


def test_should_promote_is_pure() -> None:
    task = task_due_in(Priority.HIGH, 47)

    assert should_promote(task, NOW) == should_promote(task, NOW)
    assert task.queue_type == QueueType.NORMAL
