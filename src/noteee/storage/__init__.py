"""Key-value persistence adapters used by the task store."""

from .kv_store import MemoryKeyValueStore, SqliteKeyValueStore

__all__ = ["MemoryKeyValueStore", "SqliteKeyValueStore"]
