# storage/task_persistence.py

"""
Task list persistence.

The whole list is stored as one JSON array under a single key of a
key-value store:

    [{"id": "...", "title": "...", "isCompleted": false,
      "createdAt": "<ISO-8601>", "priority": 0|1|2}, ...]

Failures never escape this module: the in-memory list stays the source of
truth for the running session, and a broken store reads as an empty list.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Sequence
from datetime import datetime
from typing import Any

from ..core.ports import KeyValueStore
from ..tasks.task_models import SortOption, Task, TaskPriority

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"
SORT_OPTION_KEY = "sort_option"


# ---- codec ----


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "title": task.title,
        "isCompleted": task.is_completed,
        "createdAt": task.created_at.isoformat(),
        "priority": int(task.priority),
    }


def _parse_timestamp(raw: Any) -> datetime:
    if not isinstance(raw, str) or not raw:
        raise ValueError("createdAt is missing")
    dt = datetime.fromisoformat(raw)
    if dt.tzinfo is None:
        # Older clients wrote local wall-clock time without an offset.
        dt = dt.astimezone()
    return dt


def record_to_task(record: Any) -> Task:
    """Build a Task from one decoded record; raises ValueError if malformed."""
    if not isinstance(record, dict):
        raise ValueError("record is not an object")

    task_id = record.get("id")
    if task_id is None or str(task_id) == "":
        raise ValueError("id is missing")

    title = str(record.get("title") or "").strip()
    if not title:
        raise ValueError("title is empty")

    is_completed = record.get("isCompleted", False)
    if not isinstance(is_completed, bool):
        raise ValueError(f"isCompleted is not a boolean: {is_completed!r}")

    return Task(
        id=str(task_id),
        title=title,
        is_completed=is_completed,
        created_at=_parse_timestamp(record.get("createdAt")),
        priority=TaskPriority.from_index(record.get("priority")),
    )


def encode_tasks(tasks: Iterable[Task]) -> str:
    return json.dumps([task_to_record(t) for t in tasks], ensure_ascii=False)


def decode_tasks(raw: str) -> list[Task]:
    """
    Decode a stored JSON array.

    Raises ValueError if the payload is not a JSON array. Malformed records
    (and duplicate ids) are skipped with a warning.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array, got {type(data).__name__}")

    out: list[Task] = []
    seen: set[str] = set()
    for i, record in enumerate(data):
        try:
            task = record_to_task(record)
        except (TypeError, ValueError) as e:
            logger.warning("Skipping malformed task record #%d: %s", i, e)
            continue
        if task.id in seen:
            logger.warning("Skipping duplicate task id=%s (record #%d)", task.id, i)
            continue
        seen.add(task.id)
        out.append(task)
    return out


# ---- adapter ----


class TaskPersistence:
    """TaskRepo backed by a KeyValueStore."""

    def __init__(self, kv: KeyValueStore, *, key: str = TASKS_KEY) -> None:
        self._kv = kv
        self._key = key

    def save(self, tasks: Sequence[Task]) -> bool:
        try:
            payload = encode_tasks(tasks)
            self._kv.set(self._key, payload)
        except Exception:
            logger.exception("Failed to save %d task(s) under key=%s", len(tasks), self._key)
            return False
        logger.debug("Saved %d task(s) under key=%s", len(tasks), self._key)
        return True

    def load(self) -> list[Task]:
        try:
            raw = self._kv.get(self._key)
        except Exception:
            logger.exception("Failed to read tasks under key=%s", self._key)
            return []

        if raw is None:
            logger.info("No saved tasks under key=%s (first run).", self._key)
            return []

        try:
            tasks = decode_tasks(raw)
        except Exception:
            logger.exception("Failed to decode saved tasks under key=%s; starting empty.", self._key)
            return []

        logger.info("Loaded %d task(s) under key=%s", len(tasks), self._key)
        return tasks

    def save_sort_option(self, option: SortOption) -> bool:
        try:
            self._kv.set(SORT_OPTION_KEY, option.value)
        except Exception:
            logger.exception("Failed to save sort option %s", option.value)
            return False
        return True

    def load_sort_option(self) -> SortOption | None:
        try:
            raw = self._kv.get(SORT_OPTION_KEY)
        except Exception:
            logger.exception("Failed to read sort option")
            return None
        option = SortOption.from_db(raw)
        if raw and option is None:
            logger.warning("Ignoring unknown saved sort option %r", raw)
        return option
