from __future__ import annotations

from dataclasses import dataclass, field

from .enums import Priority

MAX_DESCRIPTION_LENGTH = 180


@dataclass(frozen=True)
class Task:
    description: str
    priority: Priority
    due_date: str
    created_at: int
    completed: bool = False
    id: int = field(default=0, compare=False)


@dataclass(frozen=True)
class TaskSummary:
    total: int
    active: int
    done: int
