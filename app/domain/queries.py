from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import replace
from functools import cmp_to_key

from .dates import compare_due_dates
from .entities import Task, TaskSummary
from .enums import ALL_PRIORITIES, Priority, SortMode, StatusFilter
from .filters import TaskFilters

Comparator = Callable[[Task, Task], int]


def matches_status(task: Task, status: StatusFilter) -> bool:
    if status == StatusFilter.ACTIVE:
        return not task.completed
    if status == StatusFilter.COMPLETED:
        return task.completed
    return True


def matches_priority(task: Task, priority: Priority | str) -> bool:
    return priority == ALL_PRIORITIES or task.priority == priority


def _newest_first(a: Task, b: Task) -> int:
    return b.created_at - a.created_at


def _oldest_first(a: Task, b: Task) -> int:
    return a.created_at - b.created_at


def _by_priority(descending: bool) -> Comparator:
    def compare(a: Task, b: Task) -> int:
        diff = b.priority.rank - a.priority.rank if descending else a.priority.rank - b.priority.rank
        return diff or _newest_first(a, b)

    return compare


def _by_due_date(latest_first: bool) -> Comparator:
    def compare(a: Task, b: Task) -> int:
        return compare_due_dates(a.due_date, b.due_date, latest_first) or _newest_first(a, b)

    return compare


_COMPARATORS: dict[SortMode, Comparator] = {
    SortMode.NEWEST: _newest_first,
    SortMode.OLDEST: _oldest_first,
    SortMode.PRIORITY_DESC: _by_priority(descending=True),
    SortMode.PRIORITY_ASC: _by_priority(descending=False),
    SortMode.DUE_SOON: _by_due_date(latest_first=False),
    SortMode.DUE_LATE: _by_due_date(latest_first=True),
}


def visible_tasks(tasks: Iterable[Task], filters: TaskFilters) -> list[Task]:
    """Filtered and sorted projection of ``tasks``; the input is never reordered."""
    comparator = _COMPARATORS.get(filters.sort_mode, _newest_first)
    selected = [
        task
        for task in tasks
        if matches_status(task, filters.status) and matches_priority(task, filters.priority)
    ]
    return sorted(selected, key=cmp_to_key(comparator))


def summarize(tasks: Iterable[Task]) -> TaskSummary:
    items = list(tasks)
    total = len(items)
    done = sum(1 for task in items if task.completed)
    return TaskSummary(total=total, active=total - done, done=done)


def reconcile_filters(task: Task, filters: TaskFilters) -> TaskFilters:
    """Widen filters that would hide a freshly added task."""
    reconciled = filters
    if not matches_status(task, filters.status):
        reconciled = replace(reconciled, status=StatusFilter.ALL)
    if not matches_priority(task, filters.priority):
        reconciled = replace(reconciled, priority=ALL_PRIORITIES)
    return reconciled
