# src/taskpad/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the key-value store, persistence and task store into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.ports import KeyValueStore
from ..core.state import AppState
from ..storage.kv_store import MemoryKeyValueStore, open_kv_store
from ..storage.task_persistence import TaskPersistence
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.kv_db_path.parent.mkdir(parents=True, exist_ok=True)
    settings.kv_json_path.parent.mkdir(parents=True, exist_ok=True)


def open_storage(settings) -> KeyValueStore:
    """
    Open the configured key-value backend.

    If it cannot be opened the app keeps working on an in-memory store;
    nothing will survive a restart in that case.
    """
    try:
        _ensure_local_dirs(settings)
        return open_kv_store(
            settings.storage_backend,
            db_path=settings.kv_db_path,
            json_path=settings.kv_json_path,
            data_dir=settings.data_dir,
        )
    except Exception:
        logger.exception(
            "Failed to open storage backend=%s; tasks will not be persisted.",
            settings.storage_backend,
        )
        return MemoryKeyValueStore()


def create_initial_state(*, settings=None, load: bool = True) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    kv = open_storage(settings)
    store = TaskStore(
        TaskPersistence(kv),
        sort_option=settings.default_sort,
        remember_sort=settings.remember_sort,
    )
    if load:
        store.load()

    return AppState(settings=settings, kv=kv, task_store=store)
