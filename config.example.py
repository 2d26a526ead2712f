# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.
"""

ENV_VARS = {
    # App / logging
    "KANBAN_APP_NAME": "App display name (default: kanban).",
    "KANBAN_LOG_LEVEL": "Console logging level (default: WARNING; the log file always gets DEBUG).",
    "KANBAN_LOG_TO_FILE": "Write <data_dir>/kanban.log (true/false, default: true).",
    # Paths (gitignored)
    "KANBAN_DATA_DIR": "Local data directory (default: .local/kanban).",
    "KANBAN_BOARD_PATH": "Board blob store JSON file (default: <data_dir>/board.json).",
    "KANBAN_STORAGE_KEY": "Key the task list is stored under (default: tasks_v1).",
}
