# src/noteee/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- picks the persistence backend and wires it into the TaskStore,
- hydrates the store (exactly once per process).
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..core.errors import PersistenceError
from ..core.ports import Clock, PersistenceLayer
from ..core.state import AppState
from ..storage.kv_store import MemoryKeyValueStore, SqliteKeyValueStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.store_path.parent.mkdir(parents=True, exist_ok=True)


def build_persistence(settings) -> PersistenceLayer:
    if not getattr(settings, "persist", True):
        logger.info("Persistence disabled; tasks live in memory only.")
        return MemoryKeyValueStore()
    try:
        return SqliteKeyValueStore(settings.store_path)
    except PersistenceError as e:
        logger.warning("%s; tasks will live in memory only this session.", e)
        return MemoryKeyValueStore()


def create_initial_state(
    *,
    settings=None,
    persistence: PersistenceLayer | None = None,
    clock: Clock | None = None,
) -> AppState:
    """
    Create AppState from the provided settings and load the task collection.

    Keeping settings/persistence injectable makes the app easier to test and
    avoids hidden global reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    if persistence is None:
        _ensure_local_dirs(settings)
        persistence = build_persistence(settings)

    store = TaskStore(persistence, clock=clock)
    store.load()

    storage = "memory only"
    if isinstance(persistence, SqliteKeyValueStore):
        storage = str(persistence.path)

    return AppState(
        settings=settings,
        store=store,
        color=bool(getattr(settings, "color", False)),
        storage=storage,
    )
