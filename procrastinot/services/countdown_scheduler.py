"""
Countdown scheduler.

Keeps one periodic countdown refresh per visible, non-completed task:
- timers are keyed by task id and hold only the id, never the task object,
- every timer is individually cancellable,
- teardown cancels everything that is still running.

The timer implementation is injected so the same logic runs on a Qt event
loop and in tests.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Iterable, Protocol

from procrastinot.domain.countdown import compute_remaining, format_countdown
from procrastinot.domain.entities import Task
from procrastinot.domain.enums import TaskStatus
from procrastinot.domain.status_machine import StatusTransition

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL_MS = 60_000


class TimerHandle(Protocol):
    def cancel(self) -> None: ...


TimerFactory = Callable[[int, Callable[[], None]], TimerHandle]
TickSink = Callable[[str, str], None]


class CountdownScheduler:
    def __init__(
        self,
        timer_factory: TimerFactory,
        on_tick: TickSink,
        *,
        interval_ms: int = DEFAULT_INTERVAL_MS,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._timer_factory = timer_factory
        self._on_tick = on_tick
        self._interval_ms = max(1, int(interval_ms))
        self._clock = clock
        self._visible: dict[str, str] = {}
        self._completed: set[str] = set()
        self._timers: dict[str, TimerHandle] = {}

    @property
    def active_ids(self) -> set[str]:
        return set(self._timers)

    @property
    def active_count(self) -> int:
        return len(self._timers)

    def sync(self, visible_tasks: Iterable[Task]) -> None:
        """Make the running timers match the rendered tasks exactly."""
        tasks = list(visible_tasks)
        self._visible = {task.id: task.due_date for task in tasks}
        self._completed = {task.id for task in tasks if task.status == TaskStatus.COMPLETED}

        for task_id in list(self._timers):
            if task_id not in self._visible or task_id in self._completed:
                self.cancel(task_id)

        for task in tasks:
            if task.id not in self._completed:
                self._start(task.id)

    def cancel(self, task_id: str) -> bool:
        handle = self._timers.pop(task_id, None)
        if handle is None:
            return False
        handle.cancel()
        logger.debug("Countdown cancelled for task %s", task_id)
        return True

    def task_status_changed(self, transition: StatusTransition) -> None:
        task_id = transition.task_id
        if transition.entered_completed:
            if task_id in self._visible:
                self._completed.add(task_id)
            self.cancel(task_id)
        elif transition.left_completed:
            self._completed.discard(task_id)
            if task_id in self._visible:
                self._start(task_id)

    def task_removed(self, task_id: str) -> None:
        self.cancel(task_id)
        self._visible.pop(task_id, None)
        self._completed.discard(task_id)

    def teardown(self) -> None:
        for task_id in list(self._timers):
            self.cancel(task_id)
        self._visible.clear()
        self._completed.clear()

    def refresh(self, task_id: str) -> None:
        due_date = self._visible.get(task_id)
        if due_date is None:
            self.cancel(task_id)
            return
        text = format_countdown(compute_remaining(due_date, self._clock()))
        self._on_tick(task_id, text)

    def _start(self, task_id: str) -> None:
        if task_id in self._timers:
            return
        self._timers[task_id] = self._timer_factory(
            self._interval_ms, lambda: self.refresh(task_id)
        )
        logger.debug("Countdown armed for task %s", task_id)
        self.refresh(task_id)
