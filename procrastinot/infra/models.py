from __future__ import annotations

from sqlalchemy import Column, ForeignKey, Integer, String, Text

from .db import Base


class TaskModel(Base):
    __tablename__ = "tasks"

    id = Column(String(32), primary_key=True)
    text = Column(Text, nullable=False)
    due_date = Column(String(10), nullable=False)
    status = Column(String(20), nullable=False, default="not-started", index=True)
    sort_order = Column(Integer, nullable=False, default=0)


class TaskTagModel(Base):
    __tablename__ = "task_tags"

    id = Column(Integer, primary_key=True)
    task_id = Column(String(32), ForeignKey("tasks.id", ondelete="CASCADE"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    sort_order = Column(Integer, nullable=False, default=0)
