from __future__ import annotations


class TaskError(Exception):
    pass


class ValidationError(TaskError):
    pass


class NotFoundError(TaskError):
    def __init__(self, task_id: str) -> None:
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id


class PersistenceError(TaskError):
    pass
