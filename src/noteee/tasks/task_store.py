# src/noteee/tasks/task_store.py

from __future__ import annotations

import json
import logging
import time
from collections.abc import Sequence
from dataclasses import replace

from ..core.errors import PersistenceError
from ..core.ports import Clock, PersistenceLayer
from .task_models import (
    SEED_TASK,
    TaskDraft,
    TaskRecord,
    build_record,
    record_from_wire,
    record_to_wire,
)

logger = logging.getLogger(__name__)

TASKS_KEY = "tasks"


def _wall_clock_ms() -> int:
    return time.time_ns() // 1_000_000


class TaskStore:
    """
    Sole owner and mutator of the task collection.

    Persistence is write-through: every mutation serializes the full
    collection under the "tasks" key before returning. A failed write raises
    PersistenceError, but the in-memory mutation is kept (the in-memory list
    is the source of truth for the rest of the session).

    Order is insertion order; nothing here reorders records.
    """

    def __init__(self, persistence: PersistenceLayer, *, clock: Clock | None = None) -> None:
        self._persistence = persistence
        self._clock: Clock = clock or _wall_clock_ms
        self._tasks: list[TaskRecord] | None = None

    def __len__(self) -> int:
        return len(self._require_loaded())

    @property
    def loaded(self) -> bool:
        return self._tasks is not None

    @property
    def tasks(self) -> tuple[TaskRecord, ...]:
        """Read-only snapshot of the collection."""
        return tuple(self._require_loaded())

    def _require_loaded(self) -> list[TaskRecord]:
        if self._tasks is None:
            raise RuntimeError("TaskStore.load() must be called before using the store")
        return self._tasks

    # ---- hydration ----

    def load(self) -> tuple[TaskRecord, ...]:
        """
        Hydrate from the persistence layer.

        Absent, undecodable or structurally invalid state falls back to the
        seed collection. Never raises for read problems.
        """
        tasks = self._read_persisted()
        if tasks is None:
            tasks = [SEED_TASK]
        self._tasks = tasks
        logger.info("TaskStore loaded total=%d", len(tasks))
        return tuple(tasks)

    def _read_persisted(self) -> list[TaskRecord] | None:
        try:
            raw = self._persistence.get(TASKS_KEY)
        except Exception:
            logger.warning("Reading persisted tasks failed; using seed collection.", exc_info=True)
            return None

        if raw is None:
            logger.info("No persisted tasks; using seed collection.")
            return None

        try:
            data = json.loads(raw.decode("utf-8"))
            if not isinstance(data, list):
                raise ValueError(f"expected a list, got {type(data).__name__}")
            tasks = [record_from_wire(item) for item in data]
            ids = [t.id for t in tasks]
            if len(ids) != len(set(ids)):
                raise ValueError("duplicate task ids")
        except (ValueError, RecursionError) as e:
            # JSONDecodeError and UnicodeDecodeError are ValueError subclasses;
            # RecursionError comes from absurdly deep nesting
            logger.warning("Persisted tasks are corrupt (%s); using seed collection.", e)
            return None

        return tasks

    # ---- persistence ----

    def persist(self, tasks: Sequence[TaskRecord] | None = None) -> None:
        """Serialize the full collection (current one by default) and write it."""
        if tasks is None:
            tasks = self._require_loaded()
        # ASCII-escaped: lone surrogates (valid in JSON text) must survive the utf-8 encode
        payload = json.dumps([record_to_wire(t) for t in tasks])
        try:
            self._persistence.set(TASKS_KEY, payload.encode("utf-8"))
        except PersistenceError:
            logger.warning("Persisting %d tasks failed; keeping in-memory state.", len(tasks))
            raise
        except Exception as e:
            logger.warning("Persisting %d tasks failed; keeping in-memory state.", len(tasks))
            raise PersistenceError(f"Failed to persist tasks: {e}") from e
        logger.debug("Persisted tasks total=%d", len(tasks))

    # ---- mutations ----

    def _next_id(self, tasks: Sequence[TaskRecord]) -> int:
        # Time-derived, bumped past the current maximum so two adds inside the
        # same millisecond still get distinct ids.
        candidate = int(self._clock())
        if tasks:
            highest = max(t.id for t in tasks)
            if candidate <= highest:
                candidate = highest + 1
        return candidate

    def add(self, draft: TaskDraft) -> TaskRecord:
        tasks = self._require_loaded()
        record = build_record(self._next_id(tasks), draft)
        tasks.append(record)
        logger.debug(
            "Task added id=%s priority=%s category=%s",
            record.id,
            record.priority.value,
            record.category.value,
        )
        self.persist()
        return record

    def remove(self, task_id: int) -> None:
        tasks = self._require_loaded()
        kept = [t for t in tasks if t.id != task_id]
        if len(kept) == len(tasks):
            logger.debug("remove: no task id=%s", task_id)
        tasks[:] = kept
        self.persist()

    def toggle_complete(self, task_id: int) -> None:
        tasks = self._require_loaded()
        for i, t in enumerate(tasks):
            if t.id == task_id:
                tasks[i] = replace(t, is_completed=not t.is_completed)
                logger.debug("Task toggled id=%s completed=%s", task_id, tasks[i].is_completed)
                break
        else:
            logger.debug("toggle_complete: no task id=%s", task_id)
        self.persist()

    def get(self, task_id: int) -> TaskRecord | None:
        for t in self._require_loaded():
            if t.id == task_id:
                return t
        return None
