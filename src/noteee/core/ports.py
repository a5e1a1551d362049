# src/noteee/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The task store depends on Protocols instead of concrete implementations.
This keeps the storage backend swappable and makes testing easier.
"""

from collections.abc import Callable
from typing import Protocol

Clock = Callable[[], int]
# Returns the current wall-clock time in epoch milliseconds.


class PersistenceLayer(Protocol):
    """
    Durable key-value store, exclusively owned by one session.

    - get: returns None when the key is absent
    - set: raises PersistenceError when the write cannot be made
    """

    def get(self, key: str) -> bytes | None: ...
    def set(self, key: str, value: bytes) -> None: ...

