from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date, datetime
from typing import Any, Callable, Iterable, Protocol

from procrastinot.domain.entities import Task
from procrastinot.domain.enums import TaskStatus
from procrastinot.domain.errors import NotFoundError, ValidationError
from procrastinot.domain.filters import parse_tags
from procrastinot.domain.status_machine import StatusTransition, transition

logger = logging.getLogger(__name__)


class TaskBackend(Protocol):
    def load(self) -> Sequence[dict[str, Any]] | None: ...

    def save(self, tasks: Sequence[Task]) -> None: ...


class TaskStoreListener(Protocol):
    def task_status_changed(self, transition: StatusTransition) -> None: ...

    def task_removed(self, task_id: str) -> None: ...


class TaskStore:
    def __init__(self, backend: TaskBackend, clock: Callable[[], datetime] = datetime.now) -> None:
        self._backend = backend
        self._clock = clock
        self._tasks: list[Task] = []
        self._known_ids: set[str] = set()
        self._last_stamp = 0
        self._listeners: list[TaskStoreListener] = []

    def load(self) -> list[Task]:
        raw = self._backend.load()
        self._tasks = self._restore(raw)
        self._known_ids.update(task.id for task in self._tasks)
        logger.info("Loaded %s tasks", len(self._tasks))
        return self.all()

    def all(self) -> list[Task]:
        return [task.copy() for task in self._tasks]

    def get(self, task_id: str) -> Task:
        return self._find(task_id).copy()

    def add(self, text: str, due_date: str, tags: str | Iterable[str] | None = None) -> Task:
        text = (text or "").strip()
        due_date = (due_date or "").strip()
        if not text:
            raise ValidationError("Task text is required.")
        if not due_date:
            raise ValidationError("Due date is required.")
        try:
            date.fromisoformat(due_date)
        except ValueError as exc:
            raise ValidationError(f"Due date must be YYYY-MM-DD, got {due_date!r}.") from exc

        task = Task(
            id=self._next_id(),
            text=text,
            due_date=due_date,
            tags=parse_tags(tags),
            status=TaskStatus.NOT_STARTED,
        )
        self._tasks.append(task)
        logger.info("Added task %s due %s", task.id, task.due_date)
        self.persist()
        return task.copy()

    def set_status(self, task_id: str, status: TaskStatus | str) -> StatusTransition:
        try:
            new_status = TaskStatus.parse(status)
        except ValueError as exc:
            raise ValidationError(f"Unknown status {status!r}.") from exc

        task = self._find(task_id)
        change = transition(task, new_status)
        logger.debug("Task %s status %s -> %s", task_id, change.previous, change.current)
        try:
            self.persist()
        finally:
            for listener in list(self._listeners):
                listener.task_status_changed(change)
        return change

    def remove(self, task_id: str) -> None:
        task = self._find(task_id)
        self._tasks.remove(task)
        logger.info("Removed task %s", task_id)
        try:
            for listener in list(self._listeners):
                listener.task_removed(task_id)
        finally:
            self.persist()

    def persist(self) -> None:
        self._backend.save(self.all())

    def subscribe(self, listener: TaskStoreListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: TaskStoreListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _find(self, task_id: str) -> Task:
        task = next((t for t in self._tasks if t.id == task_id), None)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def _next_id(self) -> str:
        stamp = max(int(self._clock().timestamp() * 1000), self._last_stamp + 1)
        while str(stamp) in self._known_ids:
            stamp += 1
        self._last_stamp = stamp
        task_id = str(stamp)
        self._known_ids.add(task_id)
        return task_id

    @staticmethod
    def _restore(raw: Any) -> list[Task]:
        if not raw:
            return []
        if isinstance(raw, (str, bytes)) or not isinstance(raw, Sequence):
            logger.warning("Stored tasks are not a list (%s); starting empty", type(raw).__name__)
            return []

        tasks: list[Task] = []
        seen: set[str] = set()
        for index, record in enumerate(raw):
            try:
                task = Task.from_record(record)
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning("Skipping malformed task record #%s: %s", index, exc)
                continue
            if task.id in seen:
                logger.warning("Skipping duplicate task id %s", task.id)
                continue
            seen.add(task.id)
            tasks.append(task)
        return tasks
