from __future__ import annotations


class SchedulerError(Exception):
    """Base class for errors reported by the scheduling core."""


class QueueEmptyError(SchedulerError):
    def __init__(self, message: str = "No task available") -> None:
        super().__init__(message)


class SchedulerBusyError(SchedulerError):
    def __init__(self, active_id: str) -> None:
        super().__init__(f"Task {active_id} is already active")
        self.active_id = active_id


class InvalidStateError(SchedulerError):
    def __init__(self, task_id: str, active_id: str | None) -> None:
        super().__init__(f"Task {task_id} is not the active task (active: {active_id or 'none'})")
        self.task_id = task_id
        self.active_id = active_id
