# tests/test_task_repo.py

from __future__ import annotations

import json
import sqlite3
from datetime import date, datetime, timedelta, timezone
from pathlib import Path

import pytest

from taskdesk.storage.local_storage import LocalStorage
from taskdesk.tasks.task_models import Task
from taskdesk.tasks.task_repo import (
    TaskSlotRepo,
    decode_tasks,
    encode_tasks,
    format_timestamp,
)
from taskdesk.tasks.task_store import TaskStore

from .fakes import DictStorage, FakeClock, ReadOnlyStorage, UnreadableStorage

STORED = (
    '[{"id": 1704101400000, "name": "Buy milk", "dueDate": "2024-01-02", '
    '"completed": false, "createdAt": "2024-01-01T09:30:00.000Z"}, '
    '{"id": 1704101400001, "name": "Call bob", "dueDate": "2024-01-01", '
    '"completed": true, "createdAt": "2024-01-01T09:30:00.250Z"}]'
)


def test_record_layout() -> None:
    task = Task(
        id=7,
        name="Ship it",
        due_date=date(2024, 1, 2),
        completed=False,
        created_at=datetime(2024, 1, 1, 9, 30, 0, 123456, tzinfo=timezone.utc),
    )
    assert json.loads(encode_tasks([task])) == [
        {
            "id": 7,
            "name": "Ship it",
            "dueDate": "2024-01-02",
            "completed": False,
            "createdAt": "2024-01-01T09:30:00.123Z",
        }
    ]


def test_format_timestamp_converts_to_utc() -> None:
    plus_two = timezone(timedelta(hours=2))
    assert format_timestamp(datetime(2024, 1, 1, 11, 0, tzinfo=plus_two)) == "2024-01-01T09:00:00.000Z"


def test_decode_skips_malformed_records() -> None:
    payload = json.dumps(
        [
            {"id": 1, "name": "ok", "dueDate": "2024-01-01", "completed": False, "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": "x", "name": "bad id", "dueDate": "2024-01-01", "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": 2, "name": "bad date", "dueDate": "soon", "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": 3, "dueDate": "2024-01-01", "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": 1, "name": "dup", "dueDate": "2024-01-01", "createdAt": "2024-01-01T00:00:00.000Z"},
            "not an object",
        ]
    )
    tasks = decode_tasks(payload)
    assert [t.name for t in tasks] == ["ok"]


def test_load_missing_slot_is_fresh_start() -> None:
    assert TaskSlotRepo(DictStorage()).load() == []


def test_load_corrupt_slot_is_fresh_start() -> None:
    assert TaskSlotRepo(DictStorage({"tasks": "{not json"})).load() == []
    assert TaskSlotRepo(DictStorage({"tasks": '{"id": 1}'})).load() == []


def test_save_of_load_is_a_no_op() -> None:
    storage = DictStorage({"tasks": STORED})
    repo = TaskSlotRepo(storage)

    tasks = repo.load()
    assert [t.name for t in tasks] == ["Buy milk", "Call bob"]
    assert tasks[1].completed is True

    repo.save(repo.load())
    assert storage.items["tasks"] == STORED


def test_custom_slot_name() -> None:
    storage = DictStorage()
    TaskSlotRepo(storage, slot="work").save([])
    assert storage.items == {"work": "[]"}


def test_store_state_survives_reload(tmp_path: Path, clock: FakeClock) -> None:
    db = tmp_path / "storage.sqlite3"

    store = TaskStore(TaskSlotRepo(LocalStorage(db)), today=clock.today, now=clock.now)
    first = store.add("Persist me", "2024-01-03")
    assert isinstance(first, Task)
    store.toggle(first.id)

    reloaded = TaskStore(TaskSlotRepo(LocalStorage(db)), today=clock.today, now=clock.now)
    assert len(reloaded) == 1
    task = reloaded.tasks[0]
    assert (task.id, task.name, task.due_date, task.completed) == (first.id, "Persist me", date(2024, 1, 3), True)
    assert task.created_at == first.created_at


def test_clear_all_persists_empty_array(tmp_path: Path, clock: FakeClock) -> None:
    storage = LocalStorage(tmp_path / "storage.sqlite3")
    store = TaskStore(TaskSlotRepo(storage), today=clock.today, now=clock.now)
    store.add("One", "2024-01-01")

    assert store.clear_all() == 1
    assert storage.get_item("tasks") == "[]"


def test_clear_all_on_empty_leaves_persisted_state_untouched(clock: FakeClock) -> None:
    storage = DictStorage()
    store = TaskStore(TaskSlotRepo(storage), today=clock.today, now=clock.now)

    store.clear_all()
    assert storage.writes == 0
    assert "tasks" not in storage.items


def test_decode_rejects_loose_completed_and_compact_dates() -> None:
    payload = json.dumps(
        [
            {"id": 1, "name": "ok", "dueDate": "2024-01-01", "completed": True, "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": 2, "name": "string flag", "dueDate": "2024-01-01", "completed": "false", "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": 3, "name": "int flag", "dueDate": "2024-01-01", "completed": 0, "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": 4, "name": "compact date", "dueDate": "20240102", "createdAt": "2024-01-01T00:00:00.000Z"},
            {"id": 5, "name": "week date", "dueDate": "2024-W01-2", "createdAt": "2024-01-01T00:00:00.000Z"},
        ]
    )
    tasks = decode_tasks(payload)
    assert [(t.name, t.completed) for t in tasks] == [("ok", True)]


def test_load_read_failure_is_fresh_start() -> None:
    assert TaskSlotRepo(UnreadableStorage()).load() == []


def test_save_write_failure_propagates() -> None:
    storage = ReadOnlyStorage()
    with pytest.raises(sqlite3.OperationalError):
        TaskSlotRepo(storage).save([])
    assert storage.items == {}
