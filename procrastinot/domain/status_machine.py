from __future__ import annotations

from dataclasses import dataclass

from .entities import Task
from .enums import TaskStatus


@dataclass(frozen=True)
class StatusTransition:
    task_id: str
    previous: TaskStatus
    current: TaskStatus

    @property
    def changed(self) -> bool:
        return self.previous != self.current

    @property
    def entered_completed(self) -> bool:
        return self.changed and self.current == TaskStatus.COMPLETED

    @property
    def left_completed(self) -> bool:
        return self.changed and self.previous == TaskStatus.COMPLETED


def transition(task: Task, new_status: TaskStatus | str) -> StatusTransition:
    """Move a task to any status; every state is reachable from every other."""
    status = TaskStatus.parse(new_status)
    previous = task.status
    task.status = status
    return StatusTransition(task_id=task.id, previous=previous, current=status)
