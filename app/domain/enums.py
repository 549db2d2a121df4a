from __future__ import annotations

from enum import StrEnum


class Priority(StrEnum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"

    @property
    def rank(self) -> int:
        return PRIORITY_RANK[self]


PRIORITY_RANK = {
    Priority.HIGH: 3,
    Priority.MEDIUM: 2,
    Priority.LOW: 1,
}


class StatusFilter(StrEnum):
    ALL = "all"
    ACTIVE = "active"
    COMPLETED = "completed"


class SortMode(StrEnum):
    NEWEST = "newest"
    OLDEST = "oldest"
    PRIORITY_DESC = "priority-desc"
    PRIORITY_ASC = "priority-asc"
    DUE_SOON = "due-soon"
    DUE_LATE = "due-late"


class Theme(StrEnum):
    DARK = "dark"
    LIGHT = "light"


ALL_PRIORITIES = "all"
