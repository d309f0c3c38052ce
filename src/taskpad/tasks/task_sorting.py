# tasks/task_sorting.py

"""
Orderings for the task list.

Every option is a key function fed to the built-in `sorted`, which is
stable: tasks that compare equal keep their previous relative order, so
unrelated rows do not jump around when the list is re-sorted.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

from .task_models import SortOption, Task

SortKey = Callable[[Task], Any]


def _by_date_created(task: Task) -> Any:
    # Newest first; equal timestamps keep their previous order.
    return -task.created_at.timestamp()


def _by_priority(task: Task) -> Any:
    return (task.is_completed, -int(task.priority))


def _by_title(task: Task) -> Any:
    return (task.is_completed, task.title.casefold())


SORT_KEYS: dict[SortOption, SortKey] = {
    SortOption.DATE_CREATED: _by_date_created,
    SortOption.PRIORITY: _by_priority,
    SortOption.ALPHABETICAL: _by_title,
}


def sort_tasks(tasks: Iterable[Task], option: SortOption) -> list[Task]:
    """Return a new list ordered by `option`."""
    return sorted(tasks, key=SORT_KEYS[option])
