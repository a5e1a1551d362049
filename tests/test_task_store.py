# tests/test_task_store.py

from __future__ import annotations

import json

import pytest

from noteee.core.errors import PersistenceError, ValidationError
from noteee.storage.kv_store import MemoryKeyValueStore
from noteee.tasks.task_models import SEED_TASK, Category, Priority, TaskDraft, TaskRecord
from noteee.tasks.task_query import Completion, Criteria, filter_tasks
from noteee.tasks.task_store import TASKS_KEY, TaskStore

from .fakes import FlakyKeyValueStore, StepClock


def _persisted(kv) -> list[dict]:
    raw = kv.get(TASKS_KEY)
    assert raw is not None
    return json.loads(raw.decode("utf-8"))


def test_load_empty_persistence_yields_seed(kv) -> None:
    store = TaskStore(kv)
    tasks = store.load()
    assert tasks == (SEED_TASK,)
    assert SEED_TASK.description == "Add tasks"
    assert SEED_TASK.priority is Priority.LOW
    assert SEED_TASK.category is Category.PERSONAL
    assert SEED_TASK.is_completed is False
    # load never writes
    assert kv.writes == 0


@pytest.mark.parametrize(
    "raw",
    [
        b"{not json",
        b"\xff\xfe\x00",
        b'{"id": 1}',
        b'[{"id": 1, "data": "x", "priority": "Urgent", "category": "Work", "isCompleted": false}]',
        b'[{"id": "1", "data": "x", "priority": "Low", "category": "Work", "isCompleted": false}]',
        b'[{"id": 1, "priority": "Low", "category": "Work", "isCompleted": false}]',
        b'[{"id": 1, "data": "a", "priority": "Low", "category": "Work", "isCompleted": false},'
        b' {"id": 1, "data": "b", "priority": "Low", "category": "Work", "isCompleted": true}]',
        b"[1, 2, 3]",
        b"[" * 200_000,
    ],
)
def test_corrupt_state_falls_back_to_seed(raw: bytes) -> None:
    kv = MemoryKeyValueStore({TASKS_KEY: raw})
    store = TaskStore(kv)
    assert store.load() == (SEED_TASK,)


def test_read_failure_falls_back_to_seed(kv: FlakyKeyValueStore) -> None:
    kv.fail_reads = True
    assert TaskStore(kv).load() == (SEED_TASK,)


def test_empty_persisted_list_is_a_valid_empty_collection() -> None:
    kv = MemoryKeyValueStore({TASKS_KEY: b"[]"})
    store = TaskStore(kv)
    assert store.load() == ()
    assert len(store) == 0
    assert filter_tasks(store.tasks, Criteria.default()) == []


def test_store_must_be_loaded_first(kv) -> None:
    store = TaskStore(kv)
    assert not store.loaded
    with pytest.raises(RuntimeError):
        store.add(TaskDraft("too early"))


def test_add_appends_and_persists(store: TaskStore, kv: FlakyKeyValueStore) -> None:
    before = len(store)
    rec = store.add(TaskDraft("  Buy milk  ", priority="High", category=Category.HEALTH))

    assert len(store) == before + 1
    assert store.tasks[-1] == rec
    assert rec.description == "Buy milk"
    assert rec.priority is Priority.HIGH
    assert rec.category is Category.HEALTH
    assert rec.is_completed is False

    wire = _persisted(kv)
    assert wire[-1] == {
        "id": rec.id,
        "data": "Buy milk",
        "priority": "High",
        "category": "Health",
        "isCompleted": False,
    }


def test_add_defaults_medium_work(store: TaskStore) -> None:
    rec = store.add(TaskDraft("Write report"))
    assert rec.priority is Priority.MEDIUM
    assert rec.category is Category.WORK


@pytest.mark.parametrize("text", ["", "   ", "\n\t"])
def test_add_rejects_empty_description(store: TaskStore, kv: FlakyKeyValueStore, text: str) -> None:
    before = store.tasks
    with pytest.raises(ValidationError):
        store.add(TaskDraft(text))
    assert store.tasks == before
    assert kv.writes == 0


def test_add_rejects_unknown_priority(store: TaskStore) -> None:
    with pytest.raises(ValidationError):
        store.add(TaskDraft("x", priority="Urgent"))
    assert len(store) == 1


def test_ids_unique_even_within_one_millisecond(kv) -> None:
    store = TaskStore(kv, clock=StepClock(step=0))
    store.load()
    for i in range(25):
        store.add(TaskDraft(f"task {i}"))
    ids = [t.id for t in store.tasks]
    assert len(ids) == len(set(ids))
    # time-derived and increasing in insertion order
    assert ids[1:] == sorted(ids[1:])


def test_ids_stay_unique_when_clock_goes_backwards(kv) -> None:
    store = TaskStore(kv, clock=StepClock(start=5_000, step=-1000))
    store.load()
    a = store.add(TaskDraft("a"))
    b = store.add(TaskDraft("b"))
    assert a.id == 5_000
    assert b.id == 5_001


def test_remove_and_idempotent_on_absence(store: TaskStore, kv: FlakyKeyValueStore) -> None:
    rec = store.add(TaskDraft("temp"))
    size = len(store)

    store.remove(rec.id)
    assert len(store) == size - 1
    assert store.get(rec.id) is None

    store.remove(rec.id)
    store.remove(424242)
    assert len(store) == size - 1
    assert [t["id"] for t in _persisted(kv)] == [t.id for t in store.tasks]


def test_toggle_involution(store: TaskStore) -> None:
    rec = store.add(TaskDraft("flip me", priority="Low", category="Study"))

    store.toggle_complete(rec.id)
    flipped = store.get(rec.id)
    assert flipped is not None and flipped.is_completed is True

    store.toggle_complete(rec.id)
    assert store.get(rec.id) == rec


def test_toggle_unknown_id_is_noop(store: TaskStore) -> None:
    before = store.tasks
    store.toggle_complete(-1)
    assert store.tasks == before


def test_records_are_immutable(store: TaskStore) -> None:
    rec = store.tasks[0]
    with pytest.raises(AttributeError):
        rec.is_completed = True  # type: ignore[misc]


def test_tasks_snapshot_does_not_leak_internal_list(store: TaskStore) -> None:
    snapshot = store.tasks
    store.add(TaskDraft("later"))
    assert len(snapshot) == 1
    assert len(store.tasks) == 2


def test_write_failure_keeps_in_memory_mutation(store: TaskStore, kv: FlakyKeyValueStore) -> None:
    kv.fail_writes = True

    with pytest.raises(PersistenceError):
        store.add(TaskDraft("unsaved"))
    assert store.tasks[-1].description == "unsaved"

    with pytest.raises(PersistenceError):
        store.toggle_complete(SEED_TASK.id)
    assert store.get(SEED_TASK.id).is_completed is True  # type: ignore[union-attr]

    # nothing ever reached storage
    assert kv.get(TASKS_KEY) is None


def test_foreign_write_error_is_wrapped() -> None:
    class Broken(MemoryKeyValueStore):
        def set(self, key: str, value: bytes) -> None:
            raise OSError("disk full")

    s = TaskStore(Broken())
    s.load()
    with pytest.raises(PersistenceError, match="disk full"):
        s.add(TaskDraft("x"))
    assert len(s) == 2


def test_persist_round_trip_into_fresh_session(kv: FlakyKeyValueStore) -> None:
    store = TaskStore(kv, clock=StepClock())
    store.load()
    store.add(TaskDraft("one", priority="High", category="Work"))
    store.add(TaskDraft("two", priority="Low", category="Others"))
    store.toggle_complete(store.tasks[1].id)
    collection = store.tasks

    store.persist(collection)
    fresh = TaskStore(kv)
    assert fresh.load() == collection


def test_persist_explicit_collection(kv: FlakyKeyValueStore) -> None:
    store = TaskStore(kv)
    store.load()
    custom = (
        TaskRecord(id=7, description="seven", priority=Priority.HIGH, category=Category.STUDY),
        TaskRecord(id=3, description="three", is_completed=True),
    )
    store.persist(custom)
    assert TaskStore(kv).load() == custom


def test_loads_wire_written_elsewhere() -> None:
    raw = json.dumps(
        [
            {"id": 1, "data": "Add tasks", "priority": "Low", "category": "Personal", "isCompleted": False},
            {"id": 1718000000000.0, "data": "", "priority": "Medium", "category": "Work", "isCompleted": True},
        ]
    ).encode("utf-8")
    store = TaskStore(MemoryKeyValueStore({TASKS_KEY: raw}))
    tasks = store.load()
    assert [t.id for t in tasks] == [1, 1718000000000]
    # descriptions are only validated at creation time
    assert tasks[1].description == ""


def test_end_to_end_scenario(kv: FlakyKeyValueStore, clock: StepClock) -> None:
    store = TaskStore(kv, clock=clock)
    seed = store.load()
    assert len(seed) == 1

    store.add(TaskDraft("Buy milk", priority="Low", category="Personal"))
    assert len(store) == 2

    active = Criteria(category=None, completion=Completion.ACTIVE, search="")
    assert [t.description for t in filter_tasks(store.tasks, active)] == ["Add tasks", "Buy milk"]

    store.toggle_complete(seed[0].id)
    assert [t.description for t in filter_tasks(store.tasks, active)] == ["Buy milk"]

    # and it survives a reload
    again = TaskStore(kv)
    assert [t.description for t in filter_tasks(again.load(), active)] == ["Buy milk"]


def test_lone_surrogate_description_still_persists() -> None:
    # JSON text may carry an unpaired surrogate escape; it must not break later writes
    raw = b'[{"id": 1, "data": "x\\ud800", "priority": "Low", "category": "Work", "isCompleted": false}]'
    kv = MemoryKeyValueStore({TASKS_KEY: raw})
    store = TaskStore(kv, clock=StepClock())
    assert store.load()[0].description == "x\ud800"

    store.add(TaskDraft("Buy milk"))
    store.add(TaskDraft("y\udcff"))

    again = TaskStore(kv).load()
    assert [t.description for t in again] == ["x\ud800", "Buy milk", "y\udcff"]
