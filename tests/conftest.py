# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from noteee.cli.bootstrap import create_initial_state
from noteee.core.state import AppState
from noteee.tasks.task_store import TaskStore

from .fakes import FlakyKeyValueStore, StepClock


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the bootstrap.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="noteee-test",
        log_level="DEBUG",
        persist=True,
        data_dir=tmp_path / "data",
        store_path=tmp_path / "data" / "noteee.sqlite3",
        color=False,
    )


@pytest.fixture()
def kv() -> FlakyKeyValueStore:
    return FlakyKeyValueStore()


@pytest.fixture()
def clock() -> StepClock:
    return StepClock()


@pytest.fixture()
def store(kv: FlakyKeyValueStore, clock: StepClock) -> TaskStore:
    """Loaded store over empty persistence (starts with the seed record)."""
    s = TaskStore(kv, clock=clock)
    s.load()
    return s


@pytest.fixture()
def state(settings: SimpleNamespace, kv: FlakyKeyValueStore, clock: StepClock) -> AppState:
    """AppState wired with an in-memory store and a deterministic clock."""
    return create_initial_state(settings=settings, persistence=kv, clock=clock)
