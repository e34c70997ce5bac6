from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Iterable, Protocol

from procrastinot.domain.countdown import compute_remaining, format_countdown
from procrastinot.domain.entities import Task
from procrastinot.domain.enums import TaskStatus
from procrastinot.domain.errors import NotFoundError
from procrastinot.domain.filters import TaskFilters, filter_tasks, partition

from .countdown_scheduler import DEFAULT_INTERVAL_MS, CountdownScheduler, TimerFactory
from .task_store import TaskStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskView:
    task: Task
    countdown: str
    status: TaskStatus
    completed: bool


@dataclass(frozen=True)
class BoardSnapshot:
    active: list[TaskView] = field(default_factory=list)
    completed: list[TaskView] = field(default_factory=list)

    @property
    def visible_ids(self) -> list[str]:
        return [view.task.id for view in [*self.active, *self.completed]]


class TaskDisplay(Protocol):
    def clear(self) -> None: ...

    def show_task(self, view: TaskView) -> None: ...

    def show_completed_header(self, count: int) -> None: ...

    def update_countdown(self, task_id: str, text: str) -> None: ...


class TaskBoard:
    """A single open view over the store: criteria, rendering and live countdowns."""

    def __init__(
        self,
        store: TaskStore,
        display: TaskDisplay,
        timer_factory: TimerFactory,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._store = store
        self._display = display
        self._clock = clock
        self.criteria = TaskFilters()
        self.scheduler = CountdownScheduler(
            timer_factory,
            display.update_countdown,
            interval_ms=interval_ms,
            clock=clock,
        )
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> BoardSnapshot:
        if not self._open:
            self._store.subscribe(self.scheduler)
            self._open = True
        return self.render()

    def close(self) -> None:
        self.scheduler.teardown()
        self._store.unsubscribe(self.scheduler)
        self._open = False

    def render(self) -> BoardSnapshot:
        tasks = filter_tasks(self._store.all(), self.criteria)
        active, completed = partition(tasks)
        now = self._clock()
        snapshot = BoardSnapshot(
            active=[self._view(task, now) for task in active],
            completed=[self._view(task, now) for task in completed],
        )

        self._display.clear()
        for view in snapshot.active:
            self._display.show_task(view)
        if snapshot.completed:
            self._display.show_completed_header(len(snapshot.completed))
            for view in snapshot.completed:
                self._display.show_task(view)

        if self._open:
            self.scheduler.sync(tasks)
        return snapshot

    def filter_by_status(self, raw: str | None) -> BoardSnapshot:
        self.criteria = self.criteria.with_status(raw)
        return self.render()

    def filter_by_tags(self, raw: str | None) -> BoardSnapshot:
        self.criteria = self.criteria.with_tags(raw)
        return self.render()

    def filter_by_due_date(self, raw: str | None) -> BoardSnapshot:
        self.criteria = self.criteria.with_due_date(raw)
        return self.render()

    def reset_filters(self) -> BoardSnapshot:
        self.criteria = TaskFilters()
        return self.render()

    def add_task(self, text: str, due_date: str, tags: str | Iterable[str] | None = None) -> Task:
        try:
            return self._store.add(text, due_date, tags)
        finally:
            self.render()

    def change_status(self, task_id: str, status: TaskStatus | str) -> None:
        try:
            self._store.set_status(task_id, status)
        except NotFoundError:
            logger.warning("Status change for missing task %s ignored", task_id)
        finally:
            self.render()

    def delete_task(self, task_id: str) -> None:
        try:
            self._store.remove(task_id)
        except NotFoundError:
            logger.warning("Delete of missing task %s ignored", task_id)
            self.scheduler.task_removed(task_id)
        finally:
            self.render()

    @staticmethod
    def _view(task: Task, now: datetime) -> TaskView:
        return TaskView(
            task=task,
            countdown=format_countdown(compute_remaining(task.due_date, now)),
            status=task.status,
            completed=task.status == TaskStatus.COMPLETED,
        )
