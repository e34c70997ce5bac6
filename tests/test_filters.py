from __future__ import annotations

from procrastinot.domain.entities import Task
from procrastinot.domain.enums import TaskStatus
from procrastinot.domain.filters import TaskFilters, filter_tasks, matches, parse_tags, partition


def _tasks() -> list[Task]:
    return [
        Task(id="1", text="Essay", due_date="2025-01-10", tags=["school", "writing"]),
        Task(id="2", text="Gym", due_date="2025-01-11", tags=["health"], status=TaskStatus.COMPLETED),
        Task(id="3", text="Lab", due_date="2025-01-10", tags=["school"], status=TaskStatus.IN_PROGRESS),
        Task(id="4", text="Taxes", due_date="2025-04-15", tags=[], status=TaskStatus.COMPLETED),
    ]


def test_empty_criteria_returns_tasks_unchanged() -> None:
    tasks = _tasks()

    assert filter_tasks(tasks, TaskFilters()) == tasks
    assert filter_tasks(tasks) == tasks


def test_status_filter_is_case_insensitive() -> None:
    result = filter_tasks(_tasks(), TaskFilters().with_status("In Progress"))

    assert [task.id for task in result] == ["3"]


def test_unknown_status_matches_nothing() -> None:
    assert filter_tasks(_tasks(), TaskFilters(status="blocked")) == []


def test_tags_filter_is_subset_match() -> None:
    criteria = TaskFilters().with_tags(" School ")

    assert [task.id for task in filter_tasks(_tasks(), criteria)] == ["1", "3"]
    assert [task.id for task in filter_tasks(_tasks(), TaskFilters().with_tags("school,writing"))] == ["1"]


def test_due_date_filter_is_exact_string() -> None:
    tasks = _tasks()

    assert [task.id for task in filter_tasks(tasks, TaskFilters().with_due_date("2025-01-10"))] == ["1", "3"]
    assert filter_tasks(tasks, TaskFilters().with_due_date("2025-1-10")) == []


def test_criteria_accumulate() -> None:
    criteria = TaskFilters().with_tags("school").with_status("not started")

    assert [task.id for task in filter_tasks(_tasks(), criteria)] == ["1"]


def test_blank_input_leaves_criteria_unchanged() -> None:
    criteria = TaskFilters().with_status("completed")

    assert criteria.with_tags(" , ") == criteria
    assert criteria.with_due_date("   ") == criteria
    assert criteria.with_status("") == criteria


def test_blank_due_date_clears_date_constraint() -> None:
    criteria = TaskFilters().with_status("completed").with_due_date("2025-01-10")

    cleared = criteria.with_due_date("   ")

    assert cleared.due_date is None
    assert cleared.status == "completed"
    assert TaskFilters().with_due_date("") == TaskFilters()


def test_match_implies_every_set_constraint_holds() -> None:
    criteria_list = [
        TaskFilters(status="completed"),
        TaskFilters(tags=("school",)),
        TaskFilters(due_date="2025-01-10", tags=("school",)),
        TaskFilters(status="in-progress", due_date="2025-01-10"),
    ]
    for criteria in criteria_list:
        for task in _tasks():
            if not matches(task, criteria):
                continue
            if criteria.tags:
                assert set(criteria.tags) <= set(task.tags)
            if criteria.status:
                assert task.status == TaskStatus.parse(criteria.status)
            if criteria.due_date:
                assert task.due_date == criteria.due_date


def test_partition_keeps_relative_order() -> None:
    active, completed = partition(_tasks())

    assert [task.id for task in active] == ["1", "3"]
    assert [task.id for task in completed] == ["2", "4"]


def test_parse_tags_normalizes_input() -> None:
    assert parse_tags(" Home, work ,, HOME ,") == ["home", "work"]
    assert parse_tags(None) == []
    assert parse_tags(["A", " b "]) == ["a", "b"]
