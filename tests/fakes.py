from __future__ import annotations

from datetime import datetime, timedelta
from typing import Any, Callable

from procrastinot.domain.entities import Task
from procrastinot.domain.errors import PersistenceError
from procrastinot.services.task_board import TaskView


class InMemoryBackend:
    def __init__(self, stored: Any = None) -> None:
        self.stored = stored
        self.saves: list[list[dict[str, Any]]] = []
        self.fail_saves = False

    def load(self) -> Any:
        return self.stored

    def save(self, tasks: list[Task]) -> None:
        if self.fail_saves:
            raise PersistenceError("disk full")
        snapshot = [task.to_record() for task in tasks]
        self.saves.append(snapshot)
        self.stored = snapshot


class FakeTimer:
    def __init__(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False

    def fire(self) -> None:
        assert not self.cancelled, "cancelled timer fired"
        self.callback()

    def cancel(self) -> None:
        self.cancelled = True


class FakeTimerFactory:
    def __init__(self) -> None:
        self.created: list[FakeTimer] = []

    def __call__(self, interval_ms: int, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval_ms, callback)
        self.created.append(timer)
        return timer

    @property
    def running(self) -> list[FakeTimer]:
        return [timer for timer in self.created if not timer.cancelled]


class RecordingDisplay:
    def __init__(self) -> None:
        self.views: list[TaskView] = []
        self.completed_header: int | None = None
        self.countdowns: dict[str, str] = {}

    def clear(self) -> None:
        self.views = []
        self.completed_header = None

    def show_task(self, view: TaskView) -> None:
        self.views.append(view)

    def show_completed_header(self, count: int) -> None:
        self.completed_header = count

    def update_countdown(self, task_id: str, text: str) -> None:
        self.countdowns[task_id] = text

    @property
    def task_ids(self) -> list[str]:
        return [view.task.id for view in self.views]


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs: float) -> None:
        self.now += timedelta(**kwargs)
