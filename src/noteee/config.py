# src/noteee/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing required at import time; every variable has a default.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "NOTEEE"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except Exception:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Storage ----
    persist: bool
    data_dir: Path
    store_path: Path

    # ---- Console ----
    color: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "noteee").strip() or "noteee"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        persist = _env_bool(_k("PERSIST"), True)
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/noteee"))
        store_path = _env_path(_k("STORE_PATH"), data_dir / "noteee.sqlite3")

        # NO_COLOR (any value) wins over NOTEEE_COLOR
        color = _env_bool(_k("COLOR"), True) and os.getenv("NO_COLOR") is None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            persist=persist,
            data_dir=data_dir,
            store_path=store_path,
            color=color,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
