# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file,
read with python-dotenv). See src/tw_bridge/config.py.
"""

ENV_VARS = {
    # App / logging
    "TWBRIDGE_APP_NAME": "App display name (default: tw-bridge).",
    "TWBRIDGE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    "TWBRIDGE_DATA_DIR": "Local data directory holding tw-bridge.log (default: .local/tw-bridge).",
    # Taskwarrior
    "TWBRIDGE_TASK_BIN": "Taskwarrior executable (default: task).",
    "TWBRIDGE_TASKRC": (
        "Optional taskrc path, passed as rc:<path>. Falls back to TASKRC. "
        "A configured but missing file stops startup."
    ),
    # Request surface
    "TWBRIDGE_PAGE_SIZE": "Tasks per page for /tasks ... page=N (default: 10).",
}
