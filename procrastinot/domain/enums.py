from __future__ import annotations

from enum import StrEnum


class TaskStatus(StrEnum):
    NOT_STARTED = "not-started"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"

    @classmethod
    def parse(cls, raw: TaskStatus | str) -> TaskStatus:
        """Accept user or stored spellings: "Not Started", "in_progress", "completed"."""
        if isinstance(raw, cls):
            return raw
        key = "-".join(str(raw).strip().lower().replace("_", " ").replace("-", " ").split())
        return cls(key)


STATUS_LABELS = {
    TaskStatus.NOT_STARTED: "Not started",
    TaskStatus.IN_PROGRESS: "In progress",
    TaskStatus.COMPLETED: "Completed",
}
