# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "NOTEEE_APP_NAME": "App display name (default: noteee).",
    "NOTEEE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "NOTEEE_PERSIST": "Keep tasks across sessions (true/false, default: true).",
    "NOTEEE_DATA_DIR": "Local data directory for the store and noteee.log (default: .local/noteee).",
    "NOTEEE_STORE_PATH": "SQLite key-value file (default: <data_dir>/noteee.sqlite3).",
    # Console
    "NOTEEE_COLOR": "ANSI colors for categories/priorities (true/false, default: true; NO_COLOR disables).",
}
