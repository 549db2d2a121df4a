from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from app.domain.entities import Task
from app.domain.enums import Priority, SortMode
from app.domain.errors import (
    EmptyDescriptionError,
    PastDateError,
    PersistenceError,
    TaskNotFoundError,
    UnsafeDescriptionError,
)
from app.domain.filters import TaskFilters
from app.services.task_store import TaskStore


class FakeRepo:
    def __init__(self, stored: list[Task] | None = None) -> None:
        self.stored = list(stored or [])
        self.saves: list[list[Task]] = []
        self.fail_next_save = False

    def load(self, now_ms: int) -> list[Task]:
        return list(self.stored)

    def save(self, tasks) -> None:
        if self.fail_next_save:
            self.fail_next_save = False
            raise PersistenceError()
        self.stored = list(tasks)
        self.saves.append(list(tasks))


class FakeClock:
    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock(datetime(2024, 1, 8, 9, 30))


@pytest.fixture()
def repo() -> FakeRepo:
    return FakeRepo()


@pytest.fixture()
def store(repo: FakeRepo, clock: FakeClock) -> TaskStore:
    return TaskStore(repo, clock=clock)


def test_add_rejects_empty_description(store: TaskStore, repo: FakeRepo) -> None:
    with pytest.raises(EmptyDescriptionError):
        store.add("", "High", "")

    assert store.tasks == ()
    assert repo.saves == []


def test_add_rejects_unsafe_description(store: TaskStore) -> None:
    with pytest.raises(UnsafeDescriptionError):
        store.add("<script>", "High", "")

    assert store.tasks == ()


def test_add_normalizes_fields(store: TaskStore, repo: FakeRepo, clock: FakeClock) -> None:
    task = store.add("  Buy   milk ", "Bogus", "2024-01-09")

    assert task.description == "Buy milk"
    assert task.priority is Priority.HIGH
    assert task.due_date == "2024-01-09"
    assert task.completed is False
    assert task.created_at == int(clock.now.timestamp() * 1000)
    assert repo.stored == [task]


def test_add_accepts_past_date_when_policy_disabled(repo: FakeRepo, clock: FakeClock) -> None:
    store = TaskStore(repo, clock=clock, reject_past_due_dates=False)

    task = store.add("Buy milk", "Bogus", "2024-01-01")

    assert task.priority is Priority.HIGH
    assert task.due_date == "2024-01-01"


def test_add_rejects_past_date_when_policy_enabled(store: TaskStore) -> None:
    with pytest.raises(PastDateError):
        store.add("Buy milk", "High", "2024-01-01")

    assert store.tasks == ()


def test_add_inserts_newest_first_with_unique_ids(store: TaskStore) -> None:
    first = store.add("first", "Low", "")
    second = store.add("second", "Low", "")

    assert [task.description for task in store.tasks] == ["second", "first"]
    assert first.id != second.id
    assert second.created_at > first.created_at


def test_add_accepts_long_descriptions(store: TaskStore) -> None:
    task = store.add("x" * 180, "Medium", "")

    assert len(task.description) == 180


def test_toggle_twice_restores_task(store: TaskStore, repo: FakeRepo) -> None:
    original = store.add("Write report", "Medium", "2024-02-01")

    toggled = store.toggle_complete(original.id)
    assert repo.stored[0].completed is True
    restored = store.toggle_complete(original.id)

    assert toggled.completed is True
    assert repo.stored == [original]
    assert len(repo.saves) == 3
    assert restored == original
    assert restored.id == original.id


def test_update_description_failure_leaves_task_unchanged(store: TaskStore, repo: FakeRepo) -> None:
    task = store.add("Original", "High", "")
    saves_before = len(repo.saves)

    with pytest.raises(UnsafeDescriptionError):
        store.update_description(task.id, "<b>new</b>")
    with pytest.raises(EmptyDescriptionError):
        store.update_description(task.id, "   ")

    assert store.get(task.id) == task
    assert len(repo.saves) == saves_before


def test_update_description_persists(store: TaskStore, repo: FakeRepo) -> None:
    task = store.add("Original", "High", "")

    updated = store.update_description(task.id, "  Renamed   task ")

    assert updated.description == "Renamed task"
    assert repo.stored[0].description == "Renamed task"


def test_update_priority_normalizes(store: TaskStore, repo: FakeRepo) -> None:
    task = store.add("Task", "Low", "")

    assert store.update_priority(task.id, "Medium").priority is Priority.MEDIUM
    assert repo.stored[0].priority is Priority.MEDIUM
    assert store.update_priority(task.id, "nonsense").priority is Priority.HIGH
    assert repo.stored[0].priority is Priority.HIGH
    assert len(repo.saves) == 3


def test_update_due_date_policy(store: TaskStore, repo: FakeRepo) -> None:
    task = store.add("Task", "Low", "2024-01-10")

    with pytest.raises(PastDateError):
        store.update_due_date(task.id, "2024-01-07")
    assert store.get(task.id).due_date == "2024-01-10"

    assert store.update_due_date(task.id, "2024-01-08").due_date == "2024-01-08"
    assert store.update_due_date(task.id, "").due_date == ""
    assert store.update_due_date(task.id, "2024-02-30").due_date == ""
    assert repo.stored[0].due_date == ""


def test_unknown_id_raises_not_found(store: TaskStore) -> None:
    store.add("Task", "Low", "")

    with pytest.raises(TaskNotFoundError):
        store.remove(999)
    with pytest.raises(TaskNotFoundError):
        store.toggle_complete(999)
    with pytest.raises(TaskNotFoundError):
        store.update_priority(999, "Low")


def test_remove_persists(store: TaskStore, repo: FakeRepo) -> None:
    keep = store.add("keep", "Low", "")
    drop = store.add("drop", "Low", "")

    store.remove(drop.id)

    assert store.tasks == (keep,)
    assert repo.stored == [keep]


def test_ids_stay_correct_when_display_order_differs(store: TaskStore, clock: FakeClock) -> None:
    old = store.add("old", "Low", "")
    clock.advance(minutes=1)
    store.add("new", "High", "")

    displayed = store.visible_tasks(TaskFilters(sort_mode=SortMode.OLDEST))
    assert displayed[0].description == "old"

    store.toggle_complete(displayed[0].id)

    assert store.get(old.id).completed is True
    assert [task.completed for task in store.tasks] == [False, True]


def test_load_assigns_ids_in_store_order(clock: FakeClock) -> None:
    stored = [
        Task(description="b", priority=Priority.LOW, due_date="", created_at=2),
        Task(description="a", priority=Priority.LOW, due_date="", created_at=1),
    ]
    store = TaskStore(FakeRepo(stored), clock=clock)

    loaded = store.load()

    assert loaded == stored
    assert [task.id for task in loaded] == [1, 2]
    assert store.get(2).description == "a"


def test_new_tasks_outrank_loaded_timestamps(clock: FakeClock) -> None:
    future = int((clock.now + timedelta(days=1)).timestamp() * 1000)
    repo = FakeRepo([Task("later", Priority.LOW, "", future)])
    store = TaskStore(repo, clock=clock)
    store.load()

    task = store.add("now", "Low", "")

    assert task.created_at == future + 1


def test_save_failure_keeps_in_memory_state(store: TaskStore, repo: FakeRepo) -> None:
    repo.fail_next_save = True

    with pytest.raises(PersistenceError) as excinfo:
        store.add("Unsaved", "Low", "")

    assert [task.description for task in store.tasks] == ["Unsaved"]
    assert excinfo.value.task is store.tasks[0]


def test_update_save_failure_reports_updated_task(store: TaskStore, repo: FakeRepo) -> None:
    task = store.add("Task", "Low", "")
    repo.fail_next_save = True

    with pytest.raises(PersistenceError) as excinfo:
        store.update_priority(task.id, "Medium")

    assert excinfo.value.task == store.get(task.id)
    assert excinfo.value.task.priority is Priority.MEDIUM
    assert repo.stored[0].priority is Priority.LOW


def test_summary_and_visible_tasks(store: TaskStore) -> None:
    first = store.add("first", "Low", "")
    store.add("second", "High", "")
    store.toggle_complete(first.id)

    summary = store.summary()

    assert (summary.total, summary.active, summary.done) == (2, 1, 1)
    assert [task.description for task in store.visible_tasks(TaskFilters())] == ["second", "first"]
