# tests/test_kv_store.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskpad.storage.kv_store import (
    JsonFileKeyValueStore,
    MemoryKeyValueStore,
    SqliteKeyValueStore,
    open_kv_store,
)
from taskpad.storage.task_persistence import TASKS_KEY, TaskPersistence

from .fakes import make_task


def test_sqlite_store_get_set_delete(tmp_path: Path) -> None:
    db = tmp_path / "nested" / "prefs.sqlite3"
    kv = SqliteKeyValueStore(db)

    assert kv.get("tasks") is None
    kv.set("tasks", "[]")
    kv.set("tasks", '[{"id": "1"}]')
    assert kv.get("tasks") == '[{"id": "1"}]'

    # a second instance on the same file sees the data
    assert SqliteKeyValueStore(db).get("tasks") == '[{"id": "1"}]'

    kv.delete("tasks")
    assert kv.get("tasks") is None


def test_json_file_store_get_set_delete(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    kv = JsonFileKeyValueStore(path)

    assert kv.get("tasks") is None
    kv.set("tasks", "[]")
    kv.set("sort_option", "priority")

    reopened = JsonFileKeyValueStore(path)
    assert reopened.get("tasks") == "[]"
    assert reopened.get("sort_option") == "priority"
    assert not path.with_suffix(".tmp").exists()

    kv.delete("tasks")
    assert kv.get("tasks") is None
    assert kv.get("sort_option") == "priority"


def test_json_file_store_corrupt_file(tmp_path: Path) -> None:
    path = tmp_path / "prefs.json"
    path.write_text("garbage{", "utf-8")
    kv = JsonFileKeyValueStore(path)

    with pytest.raises(ValueError):
        kv.get("tasks")

    # the adapter turns that into an empty list, and the next save repairs the file
    persistence = TaskPersistence(kv)
    assert persistence.load() == []
    assert persistence.save([make_task("fresh")]) is True
    assert [t.title for t in persistence.load()] == ["fresh"]


def test_memory_store_is_isolated() -> None:
    a = MemoryKeyValueStore({"k": "v"})
    b = MemoryKeyValueStore()
    a.set("x", "1")
    assert a.get("k") == "v"
    assert b.get("x") is None
    b.delete("missing")


@pytest.mark.parametrize(
    ("backend", "cls"),
    [
        ("sqlite", SqliteKeyValueStore),
        ("JSON", JsonFileKeyValueStore),
        ("memory", MemoryKeyValueStore),
    ],
)
def test_open_kv_store_by_name(tmp_path: Path, backend: str, cls: type) -> None:
    kv = open_kv_store(backend, data_dir=tmp_path)
    assert isinstance(kv, cls)


def test_open_kv_store_rejects_unknown_backend(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="Unknown storage backend"):
        open_kv_store("redis", data_dir=tmp_path)


def test_persistence_on_sqlite_backend(tmp_path: Path) -> None:
    kv = SqliteKeyValueStore(tmp_path / "prefs.sqlite3")
    tasks = [make_task("a", minutes=1), make_task("b", done=True, minutes=2)]

    TaskPersistence(kv).save(tasks)

    assert kv.get(TASKS_KEY) is not None
    assert TaskPersistence(SqliteKeyValueStore(tmp_path / "prefs.sqlite3")).load() == tasks
