from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import sessionmaker

from procrastinot.domain.entities import Task, make_record
from procrastinot.domain.errors import PersistenceError

from .db import SessionLocal
from .models import TaskModel, TaskTagModel

logger = logging.getLogger(__name__)


def _to_record(model: TaskModel, tags: list[str]) -> dict[str, Any]:
    return make_record(model.id, model.text, model.due_date, tags, model.status)


class TaskRepository:
    """Stores the whole ordered task collection; every save replaces the previous one."""

    def __init__(self, session_factory: sessionmaker = SessionLocal) -> None:
        self._session_factory = session_factory

    def load(self) -> list[dict[str, Any]]:
        try:
            with self._session_factory() as session:
                tag_rows = session.scalars(
                    select(TaskTagModel).order_by(TaskTagModel.task_id, TaskTagModel.sort_order)
                )
                tags_by_task: dict[str, list[str]] = {}
                for tag in tag_rows:
                    tags_by_task.setdefault(tag.task_id, []).append(tag.name)

                tasks = session.scalars(select(TaskModel).order_by(TaskModel.sort_order.asc()))
                return [_to_record(task, tags_by_task.get(task.id, [])) for task in tasks]
        except SQLAlchemyError as exc:
            logger.exception("Loading tasks failed")
            raise PersistenceError(f"Could not load tasks: {exc}") from exc

    def save(self, tasks: Sequence[Task]) -> None:
        try:
            with self._session_factory() as session:
                session.execute(delete(TaskTagModel))
                session.execute(delete(TaskModel))
                for index, task in enumerate(tasks, start=1):
                    session.add(
                        TaskModel(
                            id=task.id,
                            text=task.text,
                            due_date=task.due_date,
                            status=task.status.value,
                            sort_order=index,
                        )
                    )
                session.flush()
                for task in tasks:
                    for position, name in enumerate(task.tags, start=1):
                        session.add(TaskTagModel(task_id=task.id, name=name, sort_order=position))
                session.commit()
        except SQLAlchemyError as exc:
            logger.exception("Saving %s tasks failed", len(tasks))
            raise PersistenceError(f"Could not save tasks: {exc}") from exc
        logger.debug("Saved %s tasks", len(tasks))
