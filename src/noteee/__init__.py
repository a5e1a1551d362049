"""noteee: a small personal task tracker (task state, filtering, durable storage)."""

__version__ = "0.1.0"
