from __future__ import annotations

from datetime import datetime, timedelta

from .entities import TaskEntity
from .enums import Priority

HIGH_PRIORITY_WINDOW_HOURS = 48
MEDIUM_PRIORITY_WINDOW_HOURS = 24
ANY_PRIORITY_WINDOW_HOURS = 12

_HOUR = timedelta(hours=1)


def hours_until_deadline(task: TaskEntity, now: datetime) -> float:
    return (task.deadline - now) / _HOUR


def should_promote(task: TaskEntity, now: datetime) -> bool:
    """Return True when a FIFO task must move to the priority queue.

    Overdue tasks have a negative distance and always qualify.
    """
    hours = hours_until_deadline(task, now)
    if task.priority == Priority.HIGH and hours <= HIGH_PRIORITY_WINDOW_HOURS:
        return True
    if task.priority == Priority.MEDIUM and hours <= MEDIUM_PRIORITY_WINDOW_HOURS:
        return True
    return hours <= ANY_PRIORITY_WINDOW_HOURS
