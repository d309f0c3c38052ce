# tasks/task_models.py

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import datetime
from enum import IntEnum, StrEnum
from typing import Any


class TaskPriority(IntEnum):
    """
    Task priority.

    The integer value is what gets persisted (0=low, 1=medium, 2=high),
    so the order of members must never change.
    """

    LOW = 0
    MEDIUM = 1
    HIGH = 2

    @property
    def display_name(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_index(cls, raw: Any) -> TaskPriority:
        # Records written before priority existed have no index at all.
        if raw is None or isinstance(raw, bool):
            return cls.MEDIUM
        try:
            return cls(int(raw))
        except (TypeError, ValueError):
            return cls.MEDIUM

    @classmethod
    def parse(cls, text: str) -> TaskPriority | None:
        """Parse an explicit priority word ("low", "medium", "high"); None otherwise."""
        key = (text or "").strip().lower()
        return _PRIORITY_WORDS.get(key)


# Full words only: digits and short letters are ordinary title text.
_PRIORITY_WORDS: dict[str, TaskPriority] = {
    "low": TaskPriority.LOW,
    "medium": TaskPriority.MEDIUM,
    "high": TaskPriority.HIGH,
}


class SortOption(StrEnum):
    """User-selectable ordering of the task list."""

    DATE_CREATED = "dateCreated"
    PRIORITY = "priority"
    ALPHABETICAL = "alphabetical"

    @property
    def display_name(self) -> str:
        return _SORT_LABELS[self][0]

    @property
    def description(self) -> str:
        return _SORT_LABELS[self][1]

    @classmethod
    def from_db(cls, raw: str | None) -> SortOption | None:
        if not raw:
            return None
        try:
            return cls(raw)
        except ValueError:
            return None

    @classmethod
    def parse(cls, text: str) -> SortOption | None:
        key = (text or "").strip().lower()
        return _SORT_ALIASES.get(key)


_SORT_LABELS: dict[SortOption, tuple[str, str]] = {
    SortOption.DATE_CREATED: ("Date Created", "Sort by creation date (newest first)"),
    SortOption.PRIORITY: ("Priority", "Sort by priority (high to low)"),
    SortOption.ALPHABETICAL: ("Alphabetical", "Sort alphabetically (A to Z)"),
}

_SORT_ALIASES: dict[str, SortOption] = {
    "date": SortOption.DATE_CREATED,
    "created": SortOption.DATE_CREATED,
    "datecreated": SortOption.DATE_CREATED,
    "d": SortOption.DATE_CREATED,
    "priority": SortOption.PRIORITY,
    "prio": SortOption.PRIORITY,
    "p": SortOption.PRIORITY,
    "alphabetical": SortOption.ALPHABETICAL,
    "alpha": SortOption.ALPHABETICAL,
    "abc": SortOption.ALPHABETICAL,
    "a": SortOption.ALPHABETICAL,
}


def new_task_id() -> str:
    return uuid.uuid4().hex


def now_local() -> datetime:
    """Current time as an aware datetime in the local timezone."""
    return datetime.now().astimezone()


@dataclass(slots=True)
class Task:
    """
    One user-entered to-do item.

    `id` and `created_at` are set once; the store mutates only
    `title`, `is_completed` and `priority`.
    """

    title: str
    id: str = field(default_factory=new_task_id)
    is_completed: bool = False
    created_at: datetime = field(default_factory=now_local)
    priority: TaskPriority = TaskPriority.MEDIUM


@dataclass(slots=True, frozen=True)
class TaskStats:
    total: int
    completed: int
    pending: int
