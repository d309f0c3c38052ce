# src/taskpad/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.task_store import TaskStore
from .ports import KeyValueStore


@dataclass
class AppState:
    """Everything a presentation layer needs, wired once in bootstrap."""

    # Settings object (real Settings or a test stand-in).
    settings: Any

    kv: KeyValueStore
    task_store: TaskStore
