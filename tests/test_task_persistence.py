# tests/test_task_persistence.py

from __future__ import annotations

import json
import logging
from datetime import datetime

import pytest

from taskpad.storage.kv_store import MemoryKeyValueStore
from taskpad.storage.task_persistence import (
    SORT_OPTION_KEY,
    TASKS_KEY,
    TaskPersistence,
    decode_tasks,
    encode_tasks,
)
from taskpad.tasks.task_models import SortOption, TaskPriority
from taskpad.tasks.task_store import TaskStore

from .fakes import BrokenKeyValueStore, make_task


def test_save_writes_documented_layout(kv: MemoryKeyValueStore) -> None:
    task = make_task("Buy milk", priority=TaskPriority.HIGH, done=True, task_id="abc")

    assert TaskPersistence(kv).save([task]) is True

    records = json.loads(kv.get(TASKS_KEY) or "")
    assert records == [
        {
            "id": "abc",
            "title": "Buy milk",
            "isCompleted": True,
            "createdAt": "2024-05-01T09:30:00+00:00",
            "priority": 2,
        }
    ]


def test_round_trip_preserves_tasks_and_order(kv: MemoryKeyValueStore) -> None:
    tasks = [
        make_task("z last", priority=TaskPriority.LOW, minutes=1),
        make_task("a first", priority=TaskPriority.HIGH, done=True, minutes=2),
        make_task("middle", minutes=3),
    ]
    persistence = TaskPersistence(kv)

    persistence.save(tasks)

    assert persistence.load() == tasks


def test_load_without_prior_save_is_empty(kv: MemoryKeyValueStore) -> None:
    assert TaskPersistence(kv).load() == []


def test_missing_priority_defaults_to_medium() -> None:
    raw = json.dumps(
        [{"id": "1", "title": "old record", "isCompleted": False, "createdAt": "2023-01-02T03:04:05.678"}]
    )

    (task,) = decode_tasks(raw)

    assert task.priority is TaskPriority.MEDIUM


def test_naive_timestamp_is_read_as_local_time() -> None:
    raw = json.dumps(
        [{"id": "1", "title": "t", "isCompleted": False, "createdAt": "2023-01-02T03:04:05.678", "priority": 0}]
    )

    (task,) = decode_tasks(raw)

    assert task.created_at.tzinfo is not None
    assert task.created_at.replace(tzinfo=None) == datetime(2023, 1, 2, 3, 4, 5, 678000)


def test_corrupt_payload_falls_back_to_empty(kv: MemoryKeyValueStore, caplog: pytest.LogCaptureFixture) -> None:
    kv.set(TASKS_KEY, "{not json")

    with caplog.at_level(logging.ERROR, logger="taskpad.storage.task_persistence"):
        assert TaskPersistence(kv).load() == []

    assert "Failed to decode" in caplog.text


def test_non_array_payload_falls_back_to_empty(kv: MemoryKeyValueStore) -> None:
    kv.set(TASKS_KEY, json.dumps({"id": "1"}))
    assert TaskPersistence(kv).load() == []


def test_malformed_records_are_skipped(caplog: pytest.LogCaptureFixture) -> None:
    good = {"id": "ok", "title": "good", "isCompleted": False, "createdAt": "2024-01-01T00:00:00+00:00"}
    raw = json.dumps(
        [
            good,
            {"id": "no-title", "title": "   ", "isCompleted": False, "createdAt": "2024-01-01T00:00:00"},
            {"id": "bad-date", "title": "x", "isCompleted": False, "createdAt": "yesterday"},
            {"title": "no id", "isCompleted": False, "createdAt": "2024-01-01T00:00:00"},
            "not an object",
            dict(good, title="duplicate"),
        ]
    )

    with caplog.at_level(logging.WARNING):
        tasks = decode_tasks(raw)

    assert [t.title for t in tasks] == ["good"]
    assert "duplicate" in caplog.text


def test_unknown_priority_index_defaults_to_medium() -> None:
    raw = json.dumps(
        [{"id": "1", "title": "t", "isCompleted": False, "createdAt": "2024-01-01T00:00:00+00:00", "priority": 7}]
    )
    (task,) = decode_tasks(raw)
    assert task.priority is TaskPriority.MEDIUM


def test_save_failure_is_logged_and_not_raised(caplog: pytest.LogCaptureFixture) -> None:
    broken = BrokenKeyValueStore()
    persistence = TaskPersistence(broken)

    with caplog.at_level(logging.ERROR, logger="taskpad.storage.task_persistence"):
        assert persistence.save([make_task("x")]) is False
        assert persistence.load() == []
        assert persistence.load_sort_option() is None
        assert persistence.save_sort_option(SortOption.PRIORITY) is False

    assert "Failed to save" in caplog.text
    assert broken.calls == 4


def test_store_keeps_working_when_storage_is_down() -> None:
    store = TaskStore(TaskPersistence(BrokenKeyValueStore()))
    store.load()

    task = store.add("still usable")
    assert task is not None
    store.toggle_completed(task.id)

    assert len(store) == 1
    assert store.tasks[0].is_completed is True


def test_sort_option_round_trip(kv: MemoryKeyValueStore) -> None:
    persistence = TaskPersistence(kv)
    assert persistence.load_sort_option() is None

    persistence.save_sort_option(SortOption.ALPHABETICAL)

    assert kv.get(SORT_OPTION_KEY) == "alphabetical"
    assert persistence.load_sort_option() is SortOption.ALPHABETICAL


def test_unknown_sort_option_is_ignored(kv: MemoryKeyValueStore) -> None:
    kv.set(SORT_OPTION_KEY, "byColour")
    assert TaskPersistence(kv).load_sort_option() is None


def test_store_survives_restart(kv: MemoryKeyValueStore) -> None:
    first = TaskStore(TaskPersistence(kv))
    first.load()
    first.add("one", TaskPriority.LOW)
    first.add("two", TaskPriority.HIGH)
    first.sort_by(SortOption.PRIORITY)

    second = TaskStore(TaskPersistence(kv))
    second.load()

    assert [t.title for t in second.tasks] == ["two", "one"]
    assert second.sort_option is SortOption.PRIORITY
    assert second.tasks == first.tasks


def test_encode_is_plain_json_array() -> None:
    assert json.loads(encode_tasks([])) == []


def test_is_completed_must_be_a_real_boolean(caplog: pytest.LogCaptureFixture) -> None:
    base = {"title": "t", "createdAt": "2024-01-01T00:00:00+00:00", "priority": 1}
    raw = json.dumps(
        [
            dict(base, id="string-false", isCompleted="false"),
            dict(base, id="number", isCompleted=1),
            dict(base, id="missing"),
            dict(base, id="done", isCompleted=True),
        ]
    )

    with caplog.at_level(logging.WARNING):
        tasks = decode_tasks(raw)

    assert [(t.id, t.is_completed) for t in tasks] == [("missing", False), ("done", True)]
    assert "isCompleted is not a boolean" in caplog.text
