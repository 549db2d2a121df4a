from __future__ import annotations

import itertools
import logging
from collections.abc import Callable
from dataclasses import replace
from datetime import datetime

from app.domain.dates import is_past_date, to_epoch_ms, today_iso
from app.domain.entities import Task, TaskSummary
from app.domain.errors import PastDateError, PersistenceError, TaskNotFoundError
from app.domain.filters import TaskFilters
from app.domain.normalizer import normalize_due_date, normalize_priority, validate_description
from app.domain.queries import summarize, visible_tasks
from app.infra.repository import TaskRepository

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


class TaskStore:
    """Owns the ordered task collection and persists it after every mutation.

    Store order is creation order with the newest task first. Tasks are
    addressed by the ``id`` assigned here, never by display position.
    """

    def __init__(
        self,
        repo: TaskRepository,
        clock: Clock = datetime.now,
        reject_past_due_dates: bool = True,
    ) -> None:
        self._repo = repo
        self._clock = clock
        self._reject_past_due_dates = reject_past_due_dates
        self._tasks: list[Task] = []
        self._ids = itertools.count(1)

    @property
    def tasks(self) -> tuple[Task, ...]:
        return tuple(self._tasks)

    def today(self) -> str:
        return today_iso(self._clock())

    def load(self) -> list[Task]:
        loaded = self._repo.load(to_epoch_ms(self._clock()))
        self._tasks = [replace(task, id=next(self._ids)) for task in loaded]
        return list(self._tasks)

    def get(self, task_id: int) -> Task:
        return self._tasks[self._index_of(task_id)]

    def visible_tasks(self, filters: TaskFilters) -> list[Task]:
        return visible_tasks(self._tasks, filters)

    def summary(self) -> TaskSummary:
        return summarize(self._tasks)

    def add(self, description: object, priority: object = None, due_date: object = None) -> Task:
        normalized_description = validate_description(description)
        normalized_due_date = self._check_due_date(due_date)

        task = Task(
            id=next(self._ids),
            description=normalized_description,
            priority=normalize_priority(priority),
            due_date=normalized_due_date,
            created_at=self._next_created_at(),
        )
        self._tasks.insert(0, task)
        logger.info("Added task id=%s priority=%s", task.id, task.priority.value)
        self._persist(task)
        return task

    def remove(self, task_id: int) -> None:
        index = self._index_of(task_id)
        del self._tasks[index]
        logger.info("Removed task id=%s", task_id)
        self._persist()

    def toggle_complete(self, task_id: int) -> Task:
        task = self.get(task_id)
        return self._replace(task, completed=not task.completed)

    def update_description(self, task_id: int, raw: object) -> Task:
        task = self.get(task_id)
        return self._replace(task, description=validate_description(raw))

    def update_priority(self, task_id: int, raw: object) -> Task:
        task = self.get(task_id)
        return self._replace(task, priority=normalize_priority(raw))

    def update_due_date(self, task_id: int, raw: object) -> Task:
        task = self.get(task_id)
        return self._replace(task, due_date=self._check_due_date(raw))

    def _check_due_date(self, raw: object) -> str:
        due_date = normalize_due_date(raw)
        if self._reject_past_due_dates and is_past_date(due_date, self.today()):
            raise PastDateError()
        return due_date

    def _next_created_at(self) -> int:
        now_ms = to_epoch_ms(self._clock())
        latest = max((task.created_at for task in self._tasks), default=now_ms - 1)
        return max(now_ms, latest + 1)

    def _index_of(self, task_id: int) -> int:
        for index, task in enumerate(self._tasks):
            if task.id == task_id:
                return index
        raise TaskNotFoundError(task_id)

    def _replace(self, task: Task, **changes) -> Task:
        updated = replace(task, **changes)
        self._tasks[self._index_of(task.id)] = updated
        logger.info("Updated task id=%s fields=%s", task.id, ",".join(sorted(changes)))
        self._persist(updated)
        return updated

    def _persist(self, task: Task | None = None) -> None:
        try:
            self._repo.save(self._tasks)
        except PersistenceError as exc:
            if exc.task is None:
                exc.task = task
            raise
