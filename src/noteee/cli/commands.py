# src/noteee/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace

from ..core.errors import PersistenceError, ValidationError
from ..core.state import AppState
from ..tasks.task_models import Category, Priority, TaskDraft
from ..tasks.task_query import ALL, Completion, Criteria, filter_tasks
from .render import format_criteria, format_task, format_task_list

CommandHandler = Callable[[AppState, list[str]], str]

logger = logging.getLogger(__name__)

NOT_SAVED = "Warning: change kept in this session but NOT saved ({err})."


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
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _parse_id(args: list[str]) -> int | None:
    if not args:
        return None
    try:
        return int(args[0])
    except ValueError:
        return None


def parse_add_args(args: list[str]) -> TaskDraft:
    """
    /add [-p PRIORITY] [-c CATEGORY] text...

    Flags may appear anywhere; everything else is the description.
    """
    priority: str | Priority = Priority.MEDIUM
    category: str | Category = Category.WORK
    words: list[str] = []

    it = iter(args)
    for arg in it:
        if arg in ("-p", "--priority", "-c", "--category"):
            value = next(it, None)
            if value is None:
                raise ValidationError(f"{arg} needs a value")
            if arg in ("-p", "--priority"):
                priority = Priority.parse(value)
            else:
                category = Category.parse(value)
            continue
        words.append(arg)

    return TaskDraft(description=" ".join(words), priority=priority, category=category)


def cmd_help(state: AppState, args: list[str]) -> str:
    return registry.build_help()


def cmd_list(state: AppState, args: list[str]) -> str:
    visible = filter_tasks(state.store.tasks, state.criteria)
    return format_task_list(visible, state.criteria, color=state.color)


def cmd_add(state: AppState, args: list[str]) -> str:
    try:
        draft = parse_add_args(args)
        record = state.store.add(draft)
    except ValidationError as e:
        return f"Not added: {e}. Usage: /add [-p Low|Medium|High] [-c Category] text"
    except PersistenceError as e:
        logger.warning("Task added but not persisted: %s", e)
        record = state.store.tasks[-1]
        return f"Added: {format_task(record, color=state.color)}\n{NOT_SAVED.format(err=e)}"
    return f"Added: {format_task(record, color=state.color)}"


def cmd_done(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /done ID"
    lines: list[str] = []
    try:
        state.store.toggle_complete(task_id)
    except PersistenceError as e:
        logger.warning("Toggle not persisted: %s", e)
        lines.append(NOT_SAVED.format(err=e))

    task = state.store.get(task_id)
    if task is None:
        return f"No task with id {task_id}."
    status = "completed" if task.is_completed else "active again"
    lines.insert(0, f"Marked {status}: {format_task(task, color=state.color)}")
    return "\n".join(lines)


def cmd_remove(state: AppState, args: list[str]) -> str:
    task_id = _parse_id(args)
    if task_id is None:
        return "Usage: /rm ID"
    existed = state.store.get(task_id) is not None
    lines: list[str] = []
    try:
        state.store.remove(task_id)
    except PersistenceError as e:
        logger.warning("Remove not persisted: %s", e)
        lines.append(NOT_SAVED.format(err=e))
    lines.insert(0, f"Removed task {task_id}." if existed else f"No task with id {task_id}.")
    return "\n".join(lines)


def cmd_category(state: AppState, args: list[str]) -> str:
    """
    /cat          -> show current category filter
    /cat All      -> show every category
    /cat Work     -> only Work tasks
    """
    if not args:
        return f"Current filter: {format_criteria(state.criteria)}"
    try:
        picked = Criteria.parse(category=args[0]).category
    except ValidationError as e:
        return str(e)
    state.criteria = replace(state.criteria, category=picked)
    return cmd_list(state, [])


def cmd_show(state: AppState, args: list[str]) -> str:
    """
    /show all | active | completed
    """
    if not args:
        return "Usage: /show all | active | completed"
    try:
        completion = Completion.parse(args[0])
    except ValidationError as e:
        return str(e)
    state.criteria = replace(state.criteria, completion=completion)
    return cmd_list(state, [])


def cmd_search(state: AppState, args: list[str]) -> str:
    """
    /search text  -> case-insensitive substring search
    /search       -> clear search
    """
    state.criteria = replace(state.criteria, search=" ".join(args))
    return cmd_list(state, [])


def cmd_exit(state: AppState, args: list[str]) -> str:
    state.running = False
    return "Bye."


def cmd_status(state: AppState, args: list[str]) -> str:
    tasks = state.store.tasks
    done = sum(1 for t in tasks if t.is_completed)
    return (
        "Status:\n"
        f"  Tasks: {len(tasks)} total, {len(tasks) - done} active, {done} completed\n"
        f"  Filter: {format_criteria(state.criteria)}\n"
        f"  Storage: {state.storage}"
    )


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="List tasks matching the current filter.", aliases=["ls"])
registry.register(
    "add", cmd_add, help_text="Add a task: /add [-p Low|Medium|High] [-c Category] text."
)
registry.register("done", cmd_done, help_text="Toggle completion: /done ID.", aliases=["toggle"])
registry.register("rm", cmd_remove, help_text="Remove a task: /rm ID.", aliases=["remove", "del"])
registry.register(
    "cat",
    cmd_category,
    help_text=f"Filter by category: /cat {ALL}|" + "|".join(c.value for c in Category) + ".",
)
registry.register("show", cmd_show, help_text="Filter by completion: /show all|active|completed.")
registry.register("search", cmd_search, help_text="Search descriptions: /search text (empty clears).")
registry.register("status", cmd_status, help_text="Show counts, current filter and storage.")
registry.register("exit", cmd_exit, help_text="Quit the console.", aliases=["quit", "q"])
