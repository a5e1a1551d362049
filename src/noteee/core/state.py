# src/noteee/core/state.py

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from ..tasks.task_query import Criteria
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    # Store Settings on the state for easy access in other modules later.
    settings: Any

    store: TaskStore

    # View state of the presentation layer (not persisted).
    criteria: Criteria = field(default_factory=Criteria.default)
    color: bool = False
    storage: str = "memory only"
    running: bool = True
