from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeVar

from .enums import ALL_PRIORITIES, Priority, SortMode, StatusFilter

E = TypeVar("E", bound=StrEnum)


def _coerce(enum_cls: type[E], value: object, default: E | str) -> E | str:
    try:
        return enum_cls(value)
    except ValueError:
        return default


@dataclass(frozen=True)
class TaskFilters:
    status: StatusFilter = StatusFilter.ALL
    priority: Priority | str = ALL_PRIORITIES
    sort_mode: SortMode = SortMode.NEWEST

    @classmethod
    def from_raw(
        cls,
        status: object = None,
        priority: object = None,
        sort_mode: object = None,
    ) -> TaskFilters:
        """Build filters from UI control values, falling back to defaults for anything unknown."""
        return cls(
            status=_coerce(StatusFilter, status, StatusFilter.ALL),
            priority=_coerce(Priority, priority, ALL_PRIORITIES),
            sort_mode=_coerce(SortMode, sort_mode, SortMode.NEWEST),
        )
