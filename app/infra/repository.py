from __future__ import annotations

import json
import logging
import math
from collections.abc import Iterable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from app.domain.entities import Task
from app.domain.errors import PersistenceError
from app.domain.normalizer import (
    is_valid_description,
    normalize_description,
    normalize_due_date,
    normalize_priority,
)

from .storage import KeyValueStorage

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "tasks"


def _to_record(task: Task) -> dict[str, Any]:
    return {
        "description": task.description,
        "completed": task.completed,
        "priority": task.priority.value,
        "dueDate": task.due_date,
        "createdAt": task.created_at,
    }


def _coerce_created_at(value: Any) -> int | None:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float)) or not math.isfinite(value) or value == 0:
        return None
    return int(value)


def _is_truthy(value: Any) -> bool:
    # Stored flags follow JavaScript truthiness: empty containers count as true.
    if value is None or isinstance(value, bool):
        return bool(value)
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    if isinstance(value, str):
        return value != ""
    return True


def _parse_entries(raw: str | None) -> list[Any]:
    if raw is None:
        return []
    try:
        parsed = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Stored tasks are not valid JSON; starting with an empty list")
        return []
    if not isinstance(parsed, list):
        logger.warning("Stored tasks are not a JSON array; starting with an empty list")
        return []
    return parsed


class TaskRepository:
    def __init__(self, storage: KeyValueStorage, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._storage = storage
        self._key = key

    def load(self, now_ms: int) -> list[Task]:
        try:
            raw = self._storage.get_item(self._key)
        except SQLAlchemyError:
            logger.exception("Failed to read stored tasks")
            return []

        entries = [
            entry
            for entry in _parse_entries(raw)
            if isinstance(entry, dict) and isinstance(entry.get("description"), str)
        ]

        tasks: list[Task] = []
        for position, entry in enumerate(entries):
            created_at = _coerce_created_at(entry.get("createdAt"))
            task = Task(
                description=normalize_description(entry["description"]),
                priority=normalize_priority(entry.get("priority")),
                due_date=normalize_due_date(entry.get("dueDate")),
                created_at=created_at if created_at is not None else now_ms - position,
                completed=_is_truthy(entry.get("completed")),
            )
            if not is_valid_description(task.description):
                logger.debug("Dropping stored task %d with invalid description", position)
                continue
            tasks.append(task)

        logger.info("Loaded %d tasks from key=%s", len(tasks), self._key)
        return tasks

    def save(self, tasks: Iterable[Task]) -> None:
        payload = json.dumps([_to_record(task) for task in tasks])
        try:
            self._storage.set_item(self._key, payload)
        except SQLAlchemyError as exc:
            logger.exception("Failed to save tasks to key=%s", self._key)
            raise PersistenceError() from exc
