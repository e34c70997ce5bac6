from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Any, Iterable

from .enums import TaskStatus


def normalize_tags(tags: Iterable[str]) -> list[str]:
    normalized: list[str] = []
    for tag in tags:
        value = str(tag).strip().lower()
        if value and value not in normalized:
            normalized.append(value)
    return normalized


def make_record(task_id: str, text: str, due_date: str, tags: Iterable[str], status: str) -> dict[str, Any]:
    return {
        "id": task_id,
        "text": text,
        "dueDate": due_date,
        "tags": list(tags),
        "status": status,
    }


@dataclass(slots=True)
class Task:
    id: str
    text: str
    due_date: str
    tags: list[str] = field(default_factory=list)
    status: TaskStatus = TaskStatus.NOT_STARTED

    def copy(self) -> Task:
        return Task(
            id=self.id,
            text=self.text,
            due_date=self.due_date,
            tags=list(self.tags),
            status=self.status,
        )

    def to_record(self) -> dict[str, Any]:
        return make_record(self.id, self.text, self.due_date, self.tags, self.status.value)

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> Task:
        """Build a task from its stored shape.

        Raises ValueError, KeyError or TypeError for records that cannot
        describe a valid task.
        """
        task_id = str(record["id"]).strip()
        text = str(record["text"]).strip()
        due_date = str(record["dueDate"]).strip()
        if not task_id or not text or not due_date:
            raise ValueError("id, text and dueDate are required")
        date.fromisoformat(due_date)
        tags = record.get("tags") or []
        if isinstance(tags, str):
            raise TypeError("tags must be a sequence")
        return cls(
            id=task_id,
            text=text,
            due_date=due_date,
            tags=normalize_tags(tags),
            status=TaskStatus.parse(record.get("status") or TaskStatus.NOT_STARTED),
        )
