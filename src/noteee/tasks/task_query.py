# src/noteee/tasks/task_query.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from .task_models import Category, TaskRecord, parse_enum

ALL = "All"


class Completion(StrEnum):
    ALL = "All"
    ACTIVE = "Active"
    COMPLETED = "Completed"

    @classmethod
    def parse(cls, raw: str | Completion) -> Completion:
        return parse_enum(cls, raw, "completion filter")


@dataclass(frozen=True, slots=True)
class Criteria:
    """
    Filter criteria; a record is visible only if it passes all three predicates.

    category=None means "All".
    """

    category: Category | None = None
    completion: Completion = Completion.ALL
    search: str = ""

    @classmethod
    def default(cls) -> Criteria:
        return cls()

    @classmethod
    def parse(cls, category: str = ALL, completion: str = ALL, search: str = "") -> Criteria:
        """Build criteria from user-facing strings ("All", "Work", "active", ...)."""
        cat: Category | None = None
        if str(category).strip().lower() != ALL.lower():
            cat = Category.parse(category)
        return cls(category=cat, completion=Completion.parse(completion), search=search or "")


def matches_category(record: TaskRecord, category: Category | None) -> bool:
    return category is None or record.category == category


def matches_completion(record: TaskRecord, completion: Completion) -> bool:
    if completion == Completion.ACTIVE:
        return not record.is_completed
    if completion == Completion.COMPLETED:
        return record.is_completed
    return True


def matches_search(record: TaskRecord, search: str) -> bool:
    if not search:
        return True
    return search.lower() in record.description.lower()


def filter_tasks(tasks: Iterable[TaskRecord], criteria: Criteria) -> list[TaskRecord]:
    """Stable filter: keeps input order, never mutates input."""
    return [
        t
        for t in tasks
        if matches_category(t, criteria.category)
        and matches_completion(t, criteria.completion)
        and matches_search(t, criteria.search)
    ]
