# src/noteee/cli/render.py

"""Text rendering for the console: display tables live here, never in the task model."""

from __future__ import annotations

from collections.abc import Sequence

from ..tasks.task_models import Category, Priority, TaskRecord
from ..tasks.task_query import Criteria

RESET = "\033[0m"

CATEGORY_MARKERS: dict[Category, str] = {
    Category.PERSONAL: "@",
    Category.WORK: "#",
    Category.STUDY: "%",
    Category.HEALTH: "+",
    Category.OTHERS: "~",
}

CATEGORY_COLORS: dict[Category, str] = {
    Category.PERSONAL: "\033[94m",  # blue
    Category.WORK: "\033[93m",  # amber
    Category.STUDY: "\033[95m",  # purple
    Category.HEALTH: "\033[92m",  # green
    Category.OTHERS: "\033[90m",  # gray
}

PRIORITY_COLORS: dict[Priority, str] = {
    Priority.HIGH: "\033[41;97m",
    Priority.MEDIUM: "\033[43;30m",
    Priority.LOW: "\033[42;30m",
}

DIM_STRIKE = "\033[2;9m"


def _paint(text: str, code: str, color: bool) -> str:
    return f"{code}{text}{RESET}" if color and code else text


def format_task(task: TaskRecord, *, color: bool = False) -> str:
    check = "[x]" if task.is_completed else "[ ]"
    marker = CATEGORY_MARKERS.get(task.category, "?")
    category = _paint(f"{marker} {task.category.value}", CATEGORY_COLORS.get(task.category, ""), color)
    priority = _paint(f" {task.priority.value} ", PRIORITY_COLORS.get(task.priority, ""), color)
    text = task.description
    if task.is_completed:
        text = _paint(text, DIM_STRIKE, color)
    return f"{check} {task.id} | {category} | {priority} | {text}"


def format_criteria(criteria: Criteria) -> str:
    category = criteria.category.value if criteria.category is not None else "All"
    search = repr(criteria.search) if criteria.search else "-"
    return f"category={category} show={criteria.completion.value} search={search}"


def format_task_list(
    tasks: Sequence[TaskRecord], criteria: Criteria, *, color: bool = False
) -> str:
    if not tasks:
        hint = (
            "Try changing your search query."
            if criteria.search
            else "Add your first task to get started."
        )
        return f"No tasks found.\n  {hint}"
    lines = [f"Tasks ({len(tasks)}) [{format_criteria(criteria)}]:"]
    lines.extend(f"  {format_task(t, color=color)}" for t in tasks)
    return "\n".join(lines)
