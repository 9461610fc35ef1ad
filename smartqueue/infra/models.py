from __future__ import annotations

from sqlalchemy import Column, DateTime, Float, ForeignKey, Integer, String, Text

from .db import Base


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True)
    title = Column(String(200), nullable=False)
    description = Column(Text, nullable=False, default="")
    priority = Column(String(10), nullable=False, default="medium")
    deadline = Column(DateTime, nullable=False)
    queue_type = Column(String(10), nullable=False, default="normal")
    status = Column(String(20), nullable=False, default="pending", index=True)
    created_at = Column(DateTime, nullable=False)
    completed_at = Column(DateTime, nullable=True)
    execution_time = Column(Float, nullable=True)
    sort_order = Column(Integer, nullable=False, default=0)


class ActiveSlotModel(Base):
    __tablename__ = "active_slot"

    id = Column(Integer, primary_key=True)
    task_id = Column(String(32), ForeignKey("tasks.id", ondelete="SET NULL"), nullable=True)
