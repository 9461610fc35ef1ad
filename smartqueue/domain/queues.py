from __future__ import annotations

import bisect
import itertools
from collections import deque
from datetime import datetime
from typing import Iterator, Optional

from .entities import TaskEntity
from .errors import QueueEmptyError

_SortKey = tuple[int, datetime, int]


class FifoQueue:
    """Pending tasks in strict insertion order."""

    def __init__(self) -> None:
        self._items: deque[TaskEntity] = deque()

    def enqueue(self, task: TaskEntity) -> None:
        self._items.append(task)

    def dequeue(self) -> TaskEntity:
        if not self._items:
            raise QueueEmptyError("FIFO queue is empty")
        return self._items.popleft()

    def peek(self) -> Optional[TaskEntity]:
        return self._items[0] if self._items else None

    def remove(self, task_id: str) -> bool:
        for index, task in enumerate(self._items):
            if task.id == task_id:
                del self._items[index]
                return True
        return False

    def all(self) -> list[TaskEntity]:
        return list(self._items)

    def clear(self) -> None:
        self._items.clear()

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, task_id: object) -> bool:
        return any(task.id == task_id for task in self._items)

    def __iter__(self) -> Iterator[TaskEntity]:
        return iter(self.all())


class PriorityTaskQueue:
    """Pending tasks ranked by priority weight, then deadline, then arrival.

    Each insert is placed with ``bisect`` on the key
    ``(-weight, deadline, sequence)``; the sequence number is unique and
    increasing, so the order matches a stable re-sort of the whole queue.
    """

    def __init__(self) -> None:
        self._items: list[tuple[_SortKey, TaskEntity]] = []
        self._sequence = itertools.count()

    def _key(self, task: TaskEntity) -> _SortKey:
        return (-task.priority.weight, task.deadline, next(self._sequence))

    def enqueue(self, task: TaskEntity) -> None:
        bisect.insort(self._items, (self._key(task), task), key=lambda item: item[0])

    def dequeue(self) -> TaskEntity:
        if not self._items:
            raise QueueEmptyError("Priority queue is empty")
        _, task = self._items.pop(0)
        return task

    def peek(self) -> Optional[TaskEntity]:
        return self._items[0][1] if self._items else None

    def remove(self, task_id: str) -> bool:
        for index, (_, task) in enumerate(self._items):
            if task.id == task_id:
                del self._items[index]
                return True
        return False

    def all(self) -> list[TaskEntity]:
        return [task for _, task in self._items]

    def clear(self) -> None:
        self._items.clear()

    def size(self) -> int:
        return len(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, task_id: object) -> bool:
        return any(task.id == task_id for _, task in self._items)

    def __iter__(self) -> Iterator[TaskEntity]:
        return iter(self.all())
