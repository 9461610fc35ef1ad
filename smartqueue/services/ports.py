from __future__ import annotations

from typing import Optional, Protocol, Sequence

from smartqueue.domain.entities import TaskEntity
from smartqueue.domain.enums import NotificationKind


class TaskStore(Protocol):
    def load_tasks(self) -> list[TaskEntity]: ...

    def save_tasks(self, tasks: Sequence[TaskEntity]) -> None: ...

    def load_active_task(self) -> Optional[TaskEntity]: ...

    def save_active_task(self, task: Optional[TaskEntity]) -> None: ...


class NotificationSink(Protocol):
    def emit(self, message: str, kind: NotificationKind) -> None: ...


class InMemoryTaskStore:
    """Keeps the last snapshot in memory; nothing survives the process."""

    def __init__(
        self,
        tasks: Sequence[TaskEntity] = (),
        active_task: Optional[TaskEntity] = None,
    ) -> None:
        self.tasks: list[TaskEntity] = list(tasks)
        self.active_task = active_task
        self.saves = 0

    def load_tasks(self) -> list[TaskEntity]:
        return list(self.tasks)

    def save_tasks(self, tasks: Sequence[TaskEntity]) -> None:
        self.tasks = list(tasks)
        self.saves += 1

    def load_active_task(self) -> Optional[TaskEntity]:
        return self.active_task

    def save_active_task(self, task: Optional[TaskEntity]) -> None:
        self.active_task = task
