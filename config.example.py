# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKDESK_APP_NAME": "App display name (default: taskdesk).",
    "TASKDESK_LOG_LEVEL": "Console logging level (default: INFO).",
    # Paths (gitignored)
    "TASKDESK_DATA_DIR": "Local data directory (default: .local/taskdesk).",
    "TASKDESK_STORAGE_PATH": "LocalStorage SQLite path (default: <data_dir>/storage.sqlite3).",
    "TASKDESK_STORAGE_SLOT": "Key holding the task collection (default: tasks).",
    # Initial view
    "TASKDESK_DEFAULT_FILTER": "all | completed | pending (default: all).",
    "TASKDESK_DEFAULT_SORT": "date | name (default: date).",
    "TASKDESK_DEFAULT_DIRECTION": "asc | desc (default: asc).",
}
