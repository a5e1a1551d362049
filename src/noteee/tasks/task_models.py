# src/noteee/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from ..core.errors import ValidationError


class Priority(StrEnum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"

    @classmethod
    def parse(cls, raw: str | Priority) -> Priority:
        """Accept a member or its value in any letter case."""
        return parse_enum(cls, raw, "priority")


class Category(StrEnum):
    PERSONAL = "Personal"
    WORK = "Work"
    STUDY = "Study"
    HEALTH = "Health"
    OTHERS = "Others"

    @classmethod
    def parse(cls, raw: str | Category) -> Category:
        return parse_enum(cls, raw, "category")


def parse_enum(enum_cls: Any, raw: Any, what: str) -> Any:
    if isinstance(raw, enum_cls):
        return raw
    text = str(raw or "").strip().lower()
    for member in enum_cls:
        if member.value.lower() == text:
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"Unknown {what} {raw!r} (expected one of: {allowed})")


@dataclass(frozen=True, slots=True)
class TaskDraft:
    """User input for a new task, before validation."""

    description: str
    priority: Priority | str = Priority.MEDIUM
    category: Category | str = Category.WORK


@dataclass(frozen=True, slots=True)
class TaskRecord:
    id: int
    description: str
    priority: Priority = Priority.MEDIUM
    category: Category = Category.WORK
    is_completed: bool = False


SEED_TASK = TaskRecord(
    id=1,
    description="Add tasks",
    priority=Priority.LOW,
    category=Category.PERSONAL,
    is_completed=False,
)


def build_record(task_id: int, draft: TaskDraft) -> TaskRecord:
    """
    Validate a draft and turn it into a fresh (not completed) record.

    Raises ValidationError on an empty description or unknown enum values.
    """
    description = (draft.description or "").strip()
    if not description:
        raise ValidationError("description is required")

    return TaskRecord(
        id=int(task_id),
        description=description,
        priority=Priority.parse(draft.priority),
        category=Category.parse(draft.category),
        is_completed=False,
    )


# ---- wire format ----
# {"id": number, "data": string, "priority": string, "category": string, "isCompleted": bool}


def record_to_wire(record: TaskRecord) -> dict[str, Any]:
    return {
        "id": record.id,
        "data": record.description,
        "priority": record.priority.value,
        "category": record.category.value,
        "isCompleted": record.is_completed,
    }


def record_from_wire(raw: Any) -> TaskRecord:
    """
    Strict decode of one persisted entry.

    Raises ValueError on any shape problem; the caller decides how to recover.
    Descriptions are not re-validated here (only checked at creation time).
    """
    if not isinstance(raw, dict):
        raise ValueError(f"task entry must be an object, got {type(raw).__name__}")

    tid = raw.get("id")
    # bool is an int subclass; JSON numbers from other writers may arrive as 1.0
    if isinstance(tid, bool):
        raise ValueError("task id must be a number")
    if isinstance(tid, float) and tid.is_integer():
        tid = int(tid)
    if not isinstance(tid, int):
        raise ValueError(f"task id must be an integer, got {tid!r}")

    data = raw.get("data")
    if not isinstance(data, str):
        raise ValueError(f"task {tid}: 'data' must be a string")

    completed = raw.get("isCompleted")
    if not isinstance(completed, bool):
        raise ValueError(f"task {tid}: 'isCompleted' must be a boolean")

    try:
        priority = Priority(raw.get("priority"))
        category = Category(raw.get("category"))
    except ValueError as e:
        raise ValueError(f"task {tid}: {e}") from e

    return TaskRecord(
        id=tid,
        description=data,
        priority=priority,
        category=category,
        is_completed=completed,
    )
