from __future__ import annotations

from datetime import datetime

from .entities import Task
from .normalizer import normalize_due_date

NO_DUE_DATE_LABEL = "No due date"


def today_iso(now: datetime) -> str:
    """Local calendar date of ``now`` as ``YYYY-MM-DD``."""
    return now.date().isoformat()


def to_epoch_ms(moment: datetime) -> int:
    return int(moment.timestamp() * 1000)


def is_past_date(due_date: str, today: str) -> bool:
    return bool(due_date) and due_date < today


def is_overdue(task: Task, today: str) -> bool:
    return not task.completed and bool(task.due_date) and task.due_date < today


def compare_due_dates(first: str, second: str, latest_first: bool = False) -> int:
    """Three-way compare of canonical dates; an empty date always sorts last."""
    if not first and not second:
        return 0
    if not first:
        return 1
    if not second:
        return -1
    if first == second:
        return 0
    earlier_first = -1 if first < second else 1
    return -earlier_first if latest_first else earlier_first


def format_due_date(iso_date: str) -> str:
    normalized = normalize_due_date(iso_date)
    if not normalized:
        return ""
    year, month, day = normalized.split("-")
    return f"{month}/{day}/{year}"


def due_label(task: Task, today: str) -> str:
    formatted = format_due_date(task.due_date)
    if not formatted:
        return NO_DUE_DATE_LABEL
    prefix = "Overdue" if is_overdue(task, today) else "Due"
    return f"{prefix}: {formatted}"
