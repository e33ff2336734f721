# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "SCHEDULE_APP_NAME": "App display name (default: schedule-manager).",
    "SCHEDULE_LOG_LEVEL": "Console logging level (default: INFO). The log file always gets DEBUG.",
    # Paths (gitignored)
    "SCHEDULE_DATA_DIR": "Directory holding the *.txt schedule files (default: .local/schedules).",
    "SCHEDULE_LOG_DIR": "Log directory (default: <data_dir>/logs).",
    "SCHEDULE_FILE": (
        "Schedule file to open directly; skips the Open/New prompt at startup (default: unset)."
    ),
    # Loading
    "SCHEDULE_REJECT_CONFLICTS_ON_LOAD": (
        "Drop records that clash with an earlier record of the same schedule (default: false)."
    ),
}
