# src/noteee/logging_setup.py

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from pathlib import Path

LOG_FILE_NAME = "noteee.log"

# Per-write/per-connection chatter: useful in the file, noise at the prompt.
QUIET_ON_CONSOLE = ("noteee.storage",)


class _ConsoleNoiseFilter(logging.Filter):
    """
    Decide what reaches the interactive prompt (the file handler is unfiltered).

    - noteee.* passes, except the prefixes in `quiet`, which need WARNING+
    - everything else (py.warnings, sqlite helpers, dotenv, ...) needs ERROR+
    """

    def __init__(self, quiet: Iterable[str] = QUIET_ON_CONSOLE) -> None:
        super().__init__()
        self._quiet = tuple(quiet)

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == "noteee" or name.startswith("noteee."):
            if any(name == q or name.startswith(q + ".") for q in self._quiet):
                return record.levelno >= logging.WARNING
            return True
        return record.levelno >= logging.ERROR


def setup_logging(
    *,
    log_dir: str | Path = ".local/noteee",
    console_level: int = logging.INFO,
    quiet: Iterable[str] = QUIET_ON_CONSOLE,
) -> Path:
    """
    Route logs to stderr (the REPL owns stdout) and to <log_dir>/noteee.log.

    Call once, before the first log line. Returns the log file path.
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME

    root = logging.getLogger()
    root.setLevel(logging.DEBUG)
    for h in list(root.handlers):
        root.removeHandler(h)

    fmt = logging.Formatter(
        fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(console_level)
    console.setFormatter(fmt)
    console.addFilter(_ConsoleNoiseFilter(quiet))
    root.addHandler(console)

    to_file = logging.FileHandler(str(log_file), encoding="utf-8")
    to_file.setLevel(logging.DEBUG)
    to_file.setFormatter(fmt)
    root.addHandler(to_file)

    logging.captureWarnings(True)
    return log_file
