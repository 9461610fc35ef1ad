from __future__ import annotations

import logging
from typing import Optional, Sequence

from sqlalchemy import delete, select

from smartqueue.domain.entities import TaskEntity
from smartqueue.domain.enums import Priority, QueueType, TaskStatus

from .db import SessionLocal
from .models import ActiveSlotModel, TaskModel

logger = logging.getLogger(__name__)

ACTIVE_SLOT_ID = 1


def _to_entity(model: TaskModel) -> TaskEntity:
    return TaskEntity(
        id=model.id,
        title=model.title,
        description=model.description,
        priority=Priority(model.priority),
        deadline=model.deadline,
        queue_type=QueueType(model.queue_type),
        status=TaskStatus(model.status),
        created_at=model.created_at,
        completed_at=model.completed_at,
        execution_time=model.execution_time,
    )


def _apply_entity(model: TaskModel, task: TaskEntity, sort_order: int) -> None:
    model.title = task.title
    model.description = task.description
    model.priority = task.priority.value
    model.deadline = task.deadline
    model.queue_type = task.queue_type.value
    model.status = task.status.value
    model.created_at = task.created_at
    model.completed_at = task.completed_at
    model.execution_time = task.execution_time
    model.sort_order = sort_order


class TaskRepository:
    """SQL snapshot store for the scheduler's task log and active slot."""

    def __init__(self, session_factory=SessionLocal) -> None:
        self._session_factory = session_factory

    def load_tasks(self) -> list[TaskEntity]:
        with self._session_factory() as session:
            stmt = select(TaskModel).order_by(TaskModel.sort_order.asc(), TaskModel.created_at.asc())
            return [_to_entity(task) for task in session.scalars(stmt)]

    def save_tasks(self, tasks: Sequence[TaskEntity]) -> None:
        with self._session_factory() as session:
            existing = {model.id: model for model in session.scalars(select(TaskModel))}
            keep = set()
            for index, task in enumerate(tasks, start=1):
                model = existing.get(task.id)
                if model is None:
                    model = TaskModel(id=task.id)
                    session.add(model)
                _apply_entity(model, task, index)
                keep.add(task.id)

            stale = [task_id for task_id in existing if task_id not in keep]
            if stale:
                session.execute(delete(TaskModel).where(TaskModel.id.in_(stale)))
            session.commit()
        logger.debug("Saved %s tasks, dropped %s", len(tasks), len(stale))

    def load_active_task(self) -> Optional[TaskEntity]:
        with self._session_factory() as session:
            slot = session.get(ActiveSlotModel, ACTIVE_SLOT_ID)
            if not slot or not slot.task_id:
                return None
            task = session.get(TaskModel, slot.task_id)
            if not task:
                logger.warning("Active slot points at missing task %s", slot.task_id)
                return None
            return _to_entity(task)

    def save_active_task(self, task: Optional[TaskEntity]) -> None:
        with self._session_factory() as session:
            slot = session.get(ActiveSlotModel, ACTIVE_SLOT_ID)
            if not slot:
                slot = ActiveSlotModel(id=ACTIVE_SLOT_ID)
                session.add(slot)
            slot.task_id = task.id if task else None
            session.commit()
