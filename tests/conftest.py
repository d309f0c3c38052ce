# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskpad.core.state import AppState
from taskpad.storage.kv_store import MemoryKeyValueStore
from taskpad.storage.task_persistence import TaskPersistence
from taskpad.tasks.task_models import SortOption
from taskpad.tasks.task_store import TaskStore

from .fakes import RecordingRepo


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with bootstrap and the console.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskpad-test",
        log_level="DEBUG",
        data_dir=tmp_path,
        storage_backend="sqlite",
        kv_db_path=tmp_path / "prefs.sqlite3",
        kv_json_path=tmp_path / "prefs.json",
        default_sort=SortOption.DATE_CREATED,
        remember_sort=True,
    )


@pytest.fixture()
def kv() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture()
def repo() -> RecordingRepo:
    return RecordingRepo()


@pytest.fixture()
def store(repo: RecordingRepo) -> TaskStore:
    return TaskStore(repo)


@pytest.fixture()
def state(settings: SimpleNamespace, kv: MemoryKeyValueStore) -> AppState:
    """AppState on an in-memory key-value store with real persistence."""
    return AppState(
        settings=settings,
        kv=kv,
        task_store=TaskStore(TaskPersistence(kv)),
    )
