# src/noteee/core/errors.py

from __future__ import annotations


class NoteeeError(Exception):
    """Base class for errors raised by the task core."""


class ValidationError(NoteeeError, ValueError):
    """Rejected input (empty description, unknown priority/category, bad filter value)."""


class PersistenceError(NoteeeError):
    """
    Durable write failed.

    Raised after the in-memory mutation has already been applied: the caller
    should treat it as a warning, the in-memory collection stays authoritative.
    """
