from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Optional

from .entities import Task, normalize_tags
from .enums import TaskStatus


@dataclass(frozen=True)
class TaskFilters:
    status: Optional[str] = None
    tags: Optional[tuple[str, ...]] = None
    due_date: Optional[str] = None

    @property
    def is_empty(self) -> bool:
        return self.status is None and not self.tags and self.due_date is None

    def with_status(self, raw: str | None) -> TaskFilters:
        value = (raw or "").strip().lower()
        if not value:
            return self
        return replace(self, status=value)

    def with_tags(self, raw: str | None) -> TaskFilters:
        tags = parse_tags(raw)
        if not tags:
            return self
        return replace(self, tags=tuple(tags))

    def with_due_date(self, raw: str | None) -> TaskFilters:
        value = (raw or "").strip()
        return replace(self, due_date=value or None)


def parse_tags(raw: str | Iterable[str] | None) -> list[str]:
    if not raw:
        return []
    if isinstance(raw, str):
        raw = raw.split(",")
    return normalize_tags(raw)


def _status_matches(task: Task, wanted: str) -> bool:
    try:
        return TaskStatus.parse(wanted) == task.status
    except ValueError:
        return False


def matches(task: Task, criteria: TaskFilters | None) -> bool:
    if criteria is None:
        return True
    if criteria.status is not None and not _status_matches(task, criteria.status):
        return False
    if criteria.tags and not set(criteria.tags).issubset(task.tags):
        return False
    # Compared as typed: "2025-1-10" is not "2025-01-10".
    if criteria.due_date is not None and criteria.due_date != task.due_date:
        return False
    return True


def filter_tasks(tasks: Iterable[Task], criteria: TaskFilters | None = None) -> list[Task]:
    if criteria is None or criteria.is_empty:
        return list(tasks)
    return [task for task in tasks if matches(task, criteria)]


def partition(tasks: Iterable[Task]) -> tuple[list[Task], list[Task]]:
    active: list[Task] = []
    completed: list[Task] = []
    for task in tasks:
        if task.status == TaskStatus.COMPLETED:
            completed.append(task)
        else:
            active.append(task)
    return active, completed
