# config.example.py

"""
Documentation-only module (safe to commit).

The real configuration is loaded from environment variables (optionally via a local .env file).
Local-only settings go to:
- .env (local, gitignored)
- config_local.py (local safe overrides, gitignored)

This file exists to make the repo self-documenting even without opening .env.example.
"""

ENV_VARS = {
    # App / logging
    "WORKBENCH_APP_NAME": "App display name (default: claude-workbench).",
    "WORKBENCH_LOG_LEVEL": "Console logging level (default: INFO). The log file is always DEBUG.",
    "WORKBENCH_DATA_DIR": "Local data directory for logs (default: .local/workbench).",
    # Sources (read-only)
    "WORKBENCH_CLAUDE_HOME": "Agent home directory (default: ~/.claude).",
    "WORKBENCH_TASKS_DIR": "Task root, one subdirectory per session (default: <claude_home>/tasks).",
    "WORKBENCH_PLANS_DIR": "Flat directory of *.md plans (default: <claude_home>/plans).",
    # Watching
    "WORKBENCH_DEBOUNCE_MS": "Quiet period after the last change before reloading (default: 100).",
    "WORKBENCH_WATCH_BACKEND": "native (inotify/FSEvents/...) or polling (default: native).",
    "WORKBENCH_POLL_INTERVAL_MS": "Polling backend scan interval (default: 1000, min 50).",
    # Workspace picker
    "WORKBENCH_WORKSPACE_FOLDERS": "Comma/space separated copy targets (default: current directory).",
    "WORKBENCH_WORKSPACE_MAX_DEPTH": "Subfolder levels listed below each workspace folder (default: 2).",
    # Connectors
    "WORKBENCH_CONSOLE_ENABLED": "Enable the interactive console (true/false, default: true).",
}
