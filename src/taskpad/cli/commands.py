# src/taskpad/cli/commands.py

from __future__ import annotations

import inspect
import logging
import re
from collections.abc import Callable
from datetime import datetime
from typing import cast

from ..core.state import AppState
from ..tasks.task_models import SortOption, Task, TaskPriority
from ..tasks.task_store import TaskStore

CommandHandler2 = Callable[[AppState, list[str]], str]
CommandHandler3 = Callable[[AppState, list[str], str], str]
CommandHandler = CommandHandler2 | CommandHandler3

logger = logging.getLogger(__name__)

_WORD_RE = re.compile(r"(\S+)\s*(.*)\Z", re.DOTALL)

CONFIRM_WORDS = {"yes", "y"}


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /add, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.

        Handlers taking three parameters also get the raw text after the
        command name, with its inner whitespace intact.
        """
        if not line.startswith("/"):
            return None

        m = _WORD_RE.match(line[1:].lstrip())
        if not m:
            return "Empty command. Use /help to list available commands."

        name = m.group(1).lower()
        text = m.group(2)
        args = text.split()

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        try:
            nparams = len(inspect.signature(handler).parameters)
        except (TypeError, ValueError):
            nparams = 2

        if nparams >= 3:
            h3 = cast(CommandHandler3, handler)
            return h3(state, args, text)

        h2 = cast(CommandHandler2, handler)
        return h2(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        lines.append("  Any other text adds it as a new task (medium priority).")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- rendering ----


def format_date(dt: datetime) -> str:
    return f"{dt.day}/{dt.month}/{dt.year} {dt.hour}:{dt.minute:02d}"


def format_task_line(position: int, task: Task) -> str:
    mark = "x" if task.is_completed else " "
    return (
        f"{position:>3}. [{mark}] {task.title}"
        f"  ({task.priority.display_name}, {format_date(task.created_at)})"
    )


def render_task_list(store: TaskStore) -> str:
    if not len(store):
        return "No tasks yet. Type a title to add one."
    lines = [f"Tasks (sorted by {store.sort_option.display_name}):"]
    for pos, task in enumerate(store.tasks, start=1):
        lines.append(format_task_line(pos, task))
    return "\n".join(lines)


# ---- argument helpers ----


def _resolve_position(store: TaskStore, raw: str) -> Task | None:
    raw = raw.rstrip(".")
    if not raw.isdigit():
        return None
    return store.task_at(int(raw))


def _split_first_word(text: str) -> tuple[str, str]:
    m = _WORD_RE.match(text.lstrip())
    if not m:
        return "", ""
    return m.group(1), m.group(2)


def _split_priority(text: str) -> tuple[TaskPriority | None, str]:
    """
    Optional leading priority word: "high call mom" -> (HIGH, "call mom").

    Only the full words low/medium/high count; the rest of the text is
    returned untouched.
    """
    first, rest = _split_first_word(text)
    prio = TaskPriority.parse(first)
    if prio is None:
        return None, text
    return prio, rest


def _is_confirmed(args: list[str]) -> bool:
    return bool(args) and args[-1].lower() in CONFIRM_WORDS


# ---- handlers ----


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    return render_task_list(state.task_store)


def cmd_add(state: AppState, args: list[str], text: str) -> str:
    priority, title = _split_priority(text)
    if priority is not None and not title.strip():
        # "/add high" alone: the word is the title.
        priority, title = None, text
    task = state.task_store.add(title, priority or TaskPriority.MEDIUM)
    if task is None:
        return "Usage: /add [low|medium|high] <title>"
    return f'Added "{task.title}" ({task.priority.display_name}).'


def cmd_done(state: AppState, args: list[str]) -> str:
    if len(args) != 1:
        return "Usage: /done <n>"
    task = _resolve_position(state.task_store, args[0])
    if task is None:
        return f"No task #{args[0]}."
    state.task_store.toggle_completed(task.id)
    status = "completed" if task.is_completed else "pending"
    return f'"{task.title}" marked {status}.'


def cmd_edit(state: AppState, args: list[str], text: str) -> str:
    """
    /edit <n> <title>              -> rename, keep priority
    /edit <n> <priority>           -> re-prioritise, keep title
    /edit <n> <priority> <title>   -> both
    """
    position, rest = _split_first_word(text)
    if not rest.strip():
        return "Usage: /edit <n> [low|medium|high] <title>"
    task = _resolve_position(state.task_store, position)
    if task is None:
        return f"No task #{position}."

    priority, title = _split_priority(rest)
    if not title.strip():
        title = task.title
    if state.task_store.rename(task.id, title, priority or task.priority) is None:
        return "Title required."
    return f'Updated "{task.title}" ({task.priority.display_name}).'


def cmd_rm(state: AppState, args: list[str]) -> str:
    """
    /rm <n>       -> ask for confirmation
    /rm <n> yes   -> delete
    """
    if len(args) not in (1, 2) or (len(args) == 2 and not _is_confirmed(args)):
        return "Usage: /rm <n> [yes]"
    task = _resolve_position(state.task_store, args[0])
    if task is None:
        return f"No task #{args[0]}."
    if not _is_confirmed(args):
        return (
            f'Are you sure you want to delete "{task.title}"? '
            f"Use /rm {args[0].rstrip('.')} yes to confirm."
        )
    state.task_store.remove(task.id)
    return f'Task "{task.title}" deleted.'


def cmd_clear(state: AppState, args: list[str]) -> str:
    completed = state.task_store.stats().completed
    if not completed:
        return "No completed tasks to clear."
    if not _is_confirmed(args):
        return (
            f"Are you sure you want to clear {completed} completed task(s)? "
            "Use /clear yes to confirm."
        )
    n = state.task_store.clear_completed()
    return f"{n} completed task(s) cleared."


def cmd_clear_all(state: AppState, args: list[str]) -> str:
    total = len(state.task_store)
    if not total:
        return "No tasks to clear."
    if not _is_confirmed(args):
        return (
            f"Are you sure you want to delete all {total} task(s)? "
            "This action cannot be undone. Use /clearall yes to confirm."
        )
    n = state.task_store.clear_all()
    return f"All {n} task(s) cleared."


def cmd_sort(state: AppState, args: list[str]) -> str:
    """
    /sort            -> show current option
    /sort date       -> newest first
    /sort priority   -> high to low, completed last
    /sort alpha      -> A to Z, completed last
    """
    store = state.task_store
    if not args:
        lines = [f"Current sort: {store.sort_option.display_name}."]
        for option in SortOption:
            lines.append(f"  {option.value} - {option.description}")
        return "\n".join(lines)

    option = SortOption.parse(args[0]) or SortOption.from_db(args[0])
    if option is None:
        return "Usage: /sort date | priority | alpha"
    store.sort_by(option)
    return f"Sorted: {option.description}."


def cmd_stats(state: AppState, args: list[str]) -> str:
    s = state.task_store.stats()
    return f"Total: {s.total}  Completed: {s.completed}  Pending: {s.pending}"


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show tasks with their numbers.", aliases=["ls"])
registry.register("add", cmd_add, help_text="Add a task: /add [low|medium|high] <title>.")
registry.register("done", cmd_done, help_text="Toggle completion: /done <n>.", aliases=["toggle"])
registry.register("edit", cmd_edit, help_text="Edit a task: /edit <n> [low|medium|high] [title].")
registry.register("rm", cmd_rm, help_text="Delete a task: /rm <n> (confirm with /rm <n> yes).", aliases=["del"])
registry.register("clear", cmd_clear, help_text="Clear completed tasks (confirm with /clear yes).")
registry.register("clearall", cmd_clear_all, help_text="Delete all tasks (confirm with /clearall yes).")
registry.register("sort", cmd_sort, help_text="Sort tasks: /sort date | priority | alpha.")
registry.register("stats", cmd_stats, help_text="Show total / completed / pending counts.")
