from __future__ import annotations

import itertools

import pytest

from procrastinot.domain.entities import Task
from procrastinot.domain.enums import TaskStatus
from procrastinot.domain.status_machine import transition


def _task(status: TaskStatus = TaskStatus.NOT_STARTED) -> Task:
    return Task(id="1", text="Write report", due_date="2025-01-10", status=status)


@pytest.mark.parametrize(
    "source,target", list(itertools.permutations(list(TaskStatus), 2))
)
def test_every_state_reaches_every_other(source: TaskStatus, target: TaskStatus) -> None:
    task = _task(source)

    change = transition(task, target)

    assert task.status == target
    assert change.previous == source
    assert change.current == target
    assert change.entered_completed == (target == TaskStatus.COMPLETED)
    assert change.left_completed == (source == TaskStatus.COMPLETED)


def test_same_state_transition_has_no_side_effects() -> None:
    change = transition(_task(TaskStatus.COMPLETED), TaskStatus.COMPLETED)

    assert not change.changed
    assert not change.entered_completed
    assert not change.left_completed


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("not started", TaskStatus.NOT_STARTED),
        ("Not-Started", TaskStatus.NOT_STARTED),
        ("in_progress", TaskStatus.IN_PROGRESS),
        ("  IN PROGRESS ", TaskStatus.IN_PROGRESS),
        ("completed", TaskStatus.COMPLETED),
    ],
)
def test_parse_accepts_user_spellings(raw: str, expected: TaskStatus) -> None:
    assert TaskStatus.parse(raw) == expected


def test_parse_rejects_unknown_status() -> None:
    with pytest.raises(ValueError):
        TaskStatus.parse("blocked")
