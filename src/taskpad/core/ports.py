# src/taskpad/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps storage backends swappable and lets the store be tested without
a console or a disk.
"""

from collections.abc import Sequence
from typing import Protocol

from ..tasks.task_models import SortOption, Task


class KeyValueStore(Protocol):
    """Simple persistent string-keyed storage provided by the host."""

    def get(self, key: str) -> str | None: ...
    def set(self, key: str, value: str) -> None: ...
    def delete(self, key: str) -> None: ...


class TaskRepo(Protocol):
    """
    Persistence side of the task store.

    Implementations must never raise: failures are logged and a safe
    fallback is returned instead.
    """

    def load(self) -> list[Task]: ...
    def save(self, tasks: Sequence[Task]) -> bool: ...

    def load_sort_option(self) -> SortOption | None: ...
    def save_sort_option(self, option: SortOption) -> bool: ...
