from __future__ import annotations

from datetime import datetime

from app.domain.dates import (
    compare_due_dates,
    due_label,
    format_due_date,
    is_overdue,
    is_past_date,
    to_epoch_ms,
    today_iso,
)
from app.domain.entities import Task
from app.domain.enums import Priority

TODAY = "2024-01-08"


def _task(due_date: str, completed: bool = False) -> Task:
    return Task(
        description="Task",
        priority=Priority.HIGH,
        due_date=due_date,
        created_at=1,
        completed=completed,
    )


def test_today_iso_is_zero_padded() -> None:
    assert today_iso(datetime(2024, 3, 5, 23, 59)) == "2024-03-05"


def test_to_epoch_ms_round_trips_seconds() -> None:
    moment = datetime(2024, 1, 8, 9, 30)
    assert to_epoch_ms(moment) == int(moment.timestamp()) * 1000


def test_is_overdue_ignores_completed_and_undated_tasks() -> None:
    assert is_overdue(_task("2024-01-07"), TODAY)
    assert not is_overdue(_task("2024-01-07", completed=True), TODAY)
    assert not is_overdue(_task(""), TODAY)
    assert not is_overdue(_task(TODAY), TODAY)


def test_is_past_date() -> None:
    assert is_past_date("2023-12-31", TODAY)
    assert not is_past_date(TODAY, TODAY)
    assert not is_past_date("", TODAY)


def test_compare_due_dates_keeps_missing_dates_last() -> None:
    assert compare_due_dates("2024-01-05", "2024-01-10") < 0
    assert compare_due_dates("2024-01-05", "2024-01-10", latest_first=True) > 0
    assert compare_due_dates("", "2024-01-10") > 0
    assert compare_due_dates("", "2024-01-10", latest_first=True) > 0
    assert compare_due_dates("2024-01-10", "") < 0
    assert compare_due_dates("", "") == 0


def test_format_due_date() -> None:
    assert format_due_date("2024-01-05") == "01/05/2024"
    assert format_due_date("2024-02-30") == ""


def test_due_label() -> None:
    assert due_label(_task(""), TODAY) == "No due date"
    assert due_label(_task("2024-01-05"), TODAY) == "Overdue: 01/05/2024"
    assert due_label(_task("2024-01-05", completed=True), TODAY) == "Due: 01/05/2024"
    assert due_label(_task("2024-02-01"), TODAY) == "Due: 02/01/2024"
