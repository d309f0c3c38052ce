# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
See src/taskpad/config.py for how each value is parsed.
"""

ENV_VARS = {
    # App / logging
    "TASKPAD_APP_NAME": "App display name (default: taskpad).",
    "TASKPAD_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Storage
    "TASKPAD_DATA_DIR": "Local data directory for the store and logs (default: .local/taskpad).",
    "TASKPAD_STORAGE_BACKEND": "Key-value backend: sqlite | json | memory (default: sqlite).",
    "TASKPAD_KV_DB_PATH": "SQLite file for the sqlite backend (default: <data_dir>/prefs.sqlite3).",
    "TASKPAD_KV_JSON_PATH": "JSON file for the json backend (default: <data_dir>/prefs.json).",
    # Task list
    "TASKPAD_DEFAULT_SORT": "Sort used until the user picks one: dateCreated | priority | alphabetical.",
    "TASKPAD_REMEMBER_SORT": "Persist the chosen sort option across restarts (default: true).",
}
