from __future__ import annotations

import logging
import threading
import uuid
from contextlib import contextmanager
from dataclasses import replace
from datetime import datetime
from typing import Callable, Iterator, Optional

from smartqueue.domain.entities import QueuedTask, TaskDraft, TaskEntity, to_naive_utc, utcnow
from smartqueue.domain.enums import NotificationKind, Priority, QueueType, TaskStatus
from smartqueue.domain.errors import InvalidStateError, QueueEmptyError, SchedulerBusyError
from smartqueue.domain.filters import TaskFilters, apply_filters
from smartqueue.domain.policy import should_promote
from smartqueue.domain.queues import FifoQueue, PriorityTaskQueue

from .analytics import compute_stats
from .ports import NotificationSink, TaskStore

logger = logging.getLogger(__name__)


class TaskScheduler:
    """Owns both queues and the single active slot.

    Every public operation runs under one lock. Auto-advance after
    ``complete``/``postpone`` happens inline inside the same critical
    section, so a concurrent ``start_next`` can never dispatch twice.
    Notifications queued during an operation are delivered after the lock
    is released.
    """

    def __init__(
        self,
        store: TaskStore,
        notifier: NotificationSink,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._store = store
        self._notifier = notifier
        self._clock = clock
        self._lock = threading.Lock()
        self._fifo = FifoQueue()
        self._priority = PriorityTaskQueue()
        self._active: Optional[TaskEntity] = None
        self._tasks: dict[str, TaskEntity] = {}
        self._outbox: list[tuple[str, NotificationKind]] = []

    # ---- lifecycle ----

    def restore(self) -> None:
        tasks = self._store.load_tasks()
        active = self._store.load_active_task()
        with self._exclusive():
            self._reset()
            for task in tasks:
                self._tasks[task.id] = task
                if task.status != TaskStatus.PENDING:
                    continue
                if active is not None and task.id == active.id:
                    continue
                if task.queue_type == QueueType.PRIORITY:
                    self._priority.enqueue(task)
                else:
                    self._fifo.enqueue(task)
            if active is not None:
                self._active = active
                self._tasks[active.id] = active
            orphaned = [
                t.id for t in self._tasks.values()
                if t.status == TaskStatus.ACTIVE and (active is None or t.id != active.id)
            ]
            normal_size, priority_size = len(self._fifo), len(self._priority)
        if orphaned:
            logger.warning("Active tasks without an active slot were not queued: %s", orphaned)
        logger.info(
            "Restored %s tasks normal=%s priority=%s active=%s",
            len(tasks),
            normal_size,
            priority_size,
            active.id if active else None,
        )

    def add(self, draft: TaskDraft, now: datetime | None = None) -> TaskEntity:
        title = (draft.title or "").strip()
        if not title:
            raise ValueError("Task title is required")
        now = self._now(now)

        task = TaskEntity(
            id=uuid.uuid4().hex,
            title=title,
            description=draft.description or "",
            priority=Priority(draft.priority),
            deadline=to_naive_utc(draft.deadline),
            queue_type=QueueType(draft.queue_type),
            status=TaskStatus.PENDING,
            created_at=now,
        )

        with self._exclusive():
            if task.queue_type == QueueType.PRIORITY or should_promote(task, now):
                task = replace(task, queue_type=QueueType.PRIORITY)
                self._tasks[task.id] = task
                self._priority.enqueue(task)
                self._notify(f'Task "{task.title}" added to Priority Queue', NotificationKind.SUCCESS)
            else:
                self._tasks[task.id] = task
                self._fifo.enqueue(task)
                self._notify(f'Task "{task.title}" added to Normal Queue', NotificationKind.INFO)
            self._persist()

        logger.info("Task added id=%s priority=%s queue=%s", task.id, task.priority, task.queue_type)
        return task

    def start_next(self) -> TaskEntity:
        with self._exclusive():
            if self._active is not None:
                logger.warning("start_next rejected: task %s is active", self._active.id)
                raise SchedulerBusyError(self._active.id)
            task = self._start_next_locked()
            if task is None:
                raise QueueEmptyError()
            self._persist()
        return task

    def complete(self, task_id: str, execution_time: float, now: datetime | None = None) -> TaskEntity:
        if execution_time < 0:
            raise ValueError("execution_time must not be negative")
        now = self._now(now)

        with self._exclusive():
            active = self._require_active(task_id, "complete")
            task = replace(
                active,
                status=TaskStatus.COMPLETED,
                completed_at=now,
                execution_time=float(execution_time),
            )
            self._tasks[task.id] = task
            self._active = None
            self._notify(f'Task "{task.title}" completed!', NotificationKind.SUCCESS)
            logger.info("Task %s -> completed execution_time=%s", task.id, task.execution_time)
            self._start_next_locked()
            self._persist()
        return task

    def postpone(self, task_id: str, now: datetime | None = None) -> TaskEntity:
        """Send the active task back to a queue.

        Returns the task as it was re-queued; it may be dispatched again
        right away if it ranks first.
        """
        now = self._now(now)

        with self._exclusive():
            active = self._require_active(task_id, "postpone")
            task = replace(active, status=TaskStatus.PENDING)
            if task.queue_type == QueueType.PRIORITY or should_promote(task, now):
                task = replace(task, queue_type=QueueType.PRIORITY)
                self._priority.enqueue(task)
            else:
                self._fifo.enqueue(task)
            self._tasks[task.id] = task
            self._active = None
            self._notify(f'Task "{task.title}" postponed', NotificationKind.WARNING)
            logger.info("Task %s -> pending queue=%s", task.id, task.queue_type)
            self._start_next_locked()
            self._persist()
        return task

    def delete(self, task_id: str) -> bool:
        with self._exclusive():
            removed = self._fifo.remove(task_id) or self._priority.remove(task_id)
            was_active = self._active is not None and self._active.id == task_id
            if was_active:
                self._active = None
            known = self._tasks.pop(task_id, None) is not None
            if not (removed or was_active or known):
                return False
            self._persist()

        logger.info("Task %s deleted was_active=%s", task_id, was_active)
        return True

    def sweep(self, now: datetime | None = None) -> list[TaskEntity]:
        now = self._now(now)
        promoted: list[TaskEntity] = []

        with self._exclusive():
            for task in self._fifo.all():
                if not should_promote(task, now):
                    continue
                self._fifo.remove(task.id)
                moved = replace(task, queue_type=QueueType.PRIORITY)
                self._tasks[moved.id] = moved
                self._priority.enqueue(moved)
                promoted.append(moved)
                self._notify(
                    f'Task "{moved.title}" moved to Priority Queue (deadline approaching)',
                    NotificationKind.WARNING,
                )
            if promoted:
                self._persist()

        if promoted:
            logger.info("Sweep promoted %s tasks: %s", len(promoted), [t.id for t in promoted])
        return promoted

    def clear_all(self) -> None:
        with self._exclusive():
            self._reset()
            self._persist()
            self._notify("All tasks cleared", NotificationKind.INFO)
        logger.info("All tasks cleared")

    # ---- read side ----

    @property
    def active_task(self) -> Optional[TaskEntity]:
        with self._lock:
            return self._active

    @property
    def tasks(self) -> list[TaskEntity]:
        with self._lock:
            return list(self._tasks.values())

    def get_task(self, task_id: str) -> Optional[TaskEntity]:
        with self._lock:
            return self._tasks.get(task_id)

    def normal_queue(self) -> list[QueuedTask]:
        with self._lock:
            return _positions(self._fifo.all())

    def priority_queue(self) -> list[QueuedTask]:
        with self._lock:
            return _positions(self._priority.all())

    def completed_tasks(self) -> list[TaskEntity]:
        done = [t for t in self.tasks if t.status == TaskStatus.COMPLETED]
        return sorted(done, key=lambda t: t.completed_at or datetime.min, reverse=True)

    def list_tasks(self, filters: TaskFilters, now: datetime | None = None) -> list[TaskEntity]:
        return apply_filters(self.tasks, filters, self._now(now))

    def get_stats(self, now: datetime | None = None) -> dict[str, float]:
        return compute_stats(self.tasks, self._now(now))

    # ---- internals (caller holds the lock) ----

    @contextmanager
    def _exclusive(self) -> Iterator[None]:
        with self._lock:
            try:
                yield
            finally:
                outbox, self._outbox = self._outbox, []
        for message, kind in outbox:
            try:
                self._notifier.emit(message, kind)
            except Exception:  # noqa: BLE001
                logger.exception("Notification delivery failed: %s", message)

    def _notify(self, message: str, kind: NotificationKind) -> None:
        self._outbox.append((message, kind))

    def _now(self, now: datetime | None) -> datetime:
        return to_naive_utc(now if now is not None else self._clock())

    def _persist(self) -> None:
        # Every save writes the full snapshot, so the next one catches up.
        try:
            self._store.save_tasks(list(self._tasks.values()))
            self._store.save_active_task(self._active)
        except Exception:  # noqa: BLE001
            logger.exception("Failed to save scheduler snapshot (%s tasks)", len(self._tasks))

    def _reset(self) -> None:
        self._fifo.clear()
        self._priority.clear()
        self._active = None
        self._tasks.clear()

    def _require_active(self, task_id: str, operation: str) -> TaskEntity:
        active = self._active
        if active is None or active.id != task_id:
            logger.warning(
                "%s rejected: task %s is not active (active=%s)",
                operation,
                task_id,
                active.id if active else None,
            )
            raise InvalidStateError(task_id, active.id if active else None)
        return active

    def _start_next_locked(self) -> Optional[TaskEntity]:
        if self._active is not None:
            return None
        if self._priority:
            queue = self._priority
        elif self._fifo:
            queue = self._fifo
        else:
            return None

        task = replace(queue.dequeue(), status=TaskStatus.ACTIVE)
        self._tasks[task.id] = task
        self._active = task
        self._notify(f'Executing: "{task.title}"', NotificationKind.INFO)
        logger.info("Task %s -> active queue=%s", task.id, task.queue_type)
        return task


def _positions(tasks: list[TaskEntity]) -> list[QueuedTask]:
    return [QueuedTask(task=task, position=index) for index, task in enumerate(tasks, start=1)]
