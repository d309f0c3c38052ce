# tasks/task_store.py

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from ..core.ports import TaskRepo
from .task_models import SortOption, Task, TaskPriority, TaskStats, new_task_id, now_local
from .task_sorting import sort_tasks

logger = logging.getLogger(__name__)

TaskPredicate = Callable[[Task], bool]


class TaskStore:
    """
    Authoritative in-memory task list.

    Every mutation is applied in memory first and then written through the
    injected repo. A failed save is the repo's problem to log; the in-memory
    list is never rolled back.

    Invalid input (blank title, unknown id) is ignored: the method returns
    None and nothing is saved.
    """

    def __init__(
        self,
        repo: TaskRepo,
        *,
        sort_option: SortOption = SortOption.DATE_CREATED,
        remember_sort: bool = True,
    ) -> None:
        self._repo = repo
        self._tasks: list[Task] = []
        self._sort_option = sort_option
        self._remember_sort = remember_sort

    # ---- queries ----

    @property
    def tasks(self) -> list[Task]:
        """Current order as a new list (the Task objects are shared)."""
        return list(self._tasks)

    @property
    def sort_option(self) -> SortOption:
        return self._sort_option

    def __len__(self) -> int:
        return len(self._tasks)

    def __iter__(self) -> Iterator[Task]:
        return iter(list(self._tasks))

    def get(self, task_id: str) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def task_at(self, position: int) -> Task | None:
        """1-based lookup in the current order, as shown to the user."""
        if position < 1 or position > len(self._tasks):
            return None
        return self._tasks[position - 1]

    def stats(self) -> TaskStats:
        completed = sum(1 for t in self._tasks if t.is_completed)
        return TaskStats(
            total=len(self._tasks),
            completed=completed,
            pending=len(self._tasks) - completed,
        )

    # ---- persistence ----

    def load(self) -> list[Task]:
        """
        Replace the in-memory list with what the repo holds.

        The stored order is kept as-is (no re-sort).
        """
        self._tasks = list(self._repo.load())
        if self._remember_sort:
            saved = self._repo.load_sort_option()
            if saved is not None:
                self._sort_option = saved
        logger.info("TaskStore loaded total=%d sort=%s", len(self._tasks), self._sort_option.value)
        return self.tasks

    def save(self) -> bool:
        """Write the current list through the repo; False if the save failed."""
        return self._repo.save(self._tasks)

    def _resort(self) -> None:
        self._tasks = sort_tasks(self._tasks, self._sort_option)

    # ---- mutations ----

    def add(self, title: str, priority: TaskPriority = TaskPriority.MEDIUM) -> Task | None:
        clean = (title or "").strip()
        if not clean:
            logger.debug("Ignoring add with blank title.")
            return None

        task = Task(
            id=new_task_id(),
            title=clean,
            is_completed=False,
            created_at=now_local(),
            priority=TaskPriority(priority),
        )
        self._tasks.append(task)
        self._resort()
        self.save()
        logger.debug("Task added id=%s priority=%s", task.id, task.priority.name)
        return task

    def toggle_completed(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            logger.debug("toggle_completed: unknown id=%s", task_id)
            return None
        task.is_completed = not task.is_completed
        self.save()
        return task

    def rename(self, task_id: str, new_title: str, new_priority: TaskPriority) -> Task | None:
        clean = (new_title or "").strip()
        if not clean:
            logger.debug("Ignoring rename with blank title id=%s", task_id)
            return None
        task = self.get(task_id)
        if task is None:
            logger.debug("rename: unknown id=%s", task_id)
            return None

        task.title = clean
        task.priority = TaskPriority(new_priority)
        self._resort()
        self.save()
        return task

    def remove(self, task_id: str) -> Task | None:
        task = self.get(task_id)
        if task is None:
            logger.debug("remove: unknown id=%s", task_id)
            return None
        self._tasks.remove(task)
        self.save()
        return task

    def remove_where(self, predicate: TaskPredicate) -> int:
        """Bulk delete; returns how many tasks were removed."""
        kept = [t for t in self._tasks if not predicate(t)]
        removed = len(self._tasks) - len(kept)
        self._tasks = kept
        self.save()
        if removed:
            logger.debug("Removed %d task(s)", removed)
        return removed

    def clear_completed(self) -> int:
        return self.remove_where(lambda t: t.is_completed)

    def clear_all(self) -> int:
        return self.remove_where(lambda _: True)

    def sort_by(self, option: SortOption) -> None:
        self._sort_option = SortOption(option)
        self._resort()
        self.save()
        if self._remember_sort:
            self._repo.save_sort_option(self._sort_option)
