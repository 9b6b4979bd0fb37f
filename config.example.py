# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/taskboard/config.py.

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "TASKBOARD_APP_NAME": "App display name (default: taskboard).",
    "TASKBOARD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TASKBOARD_LOG_DIR": "Directory for taskboard.log (default: <data_dir>).",
    # Paths (gitignored)
    "TASKBOARD_DATA_DIR": "Local data directory (default: .local/taskboard).",
    "TASKBOARD_STORAGE_PATH": (
        "Durable storage JSON file holding the task list (default: <data_dir>/local_storage.json)."
    ),
    # Timers
    "TASKBOARD_NOTIFY_INTERVAL_SECONDS": "Overdue-task scan interval (default: 1200; 0 disables).",
    "TASKBOARD_SEARCH_DEBOUNCE_MS": "Quiet period before a search term applies (default: 300).",
}
