# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "POCKET_APP_NAME": "App display name shown above the list (default: pocket-tasks).",
    "POCKET_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "POCKET_DATA_DIR": "Local data directory for storage and logs (default: .local/pocket_tasks).",
    "POCKET_STORAGE_BACKEND": "sqlite | json | memory (default: sqlite).",
    "POCKET_DB_PATH": "SQLite key-value file (default: <data_dir>/tasks.sqlite3).",
    "POCKET_JSON_PATH": "JSON key-value file (default: <data_dir>/tasks.json).",
    "POCKET_STORAGE_KEY": "Key the task list is stored under (default: tasks).",
    # Console
    "POCKET_DEFAULT_FILTER": "Filter tab selected at start: All | Active | Completed (default: All).",
    "POCKET_COLOR": "ANSI colors when stdout is a TTY (true/false, default: true). NO_COLOR disables.",
    "POCKET_CONFIRM_DELETE": "Ask y/N before /rm deletes a task (true/false, default: true).",
}
