# src/claude_workbench/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- The engine never reads the environment: roots are passed in from here.
- Tests build their own Settings instead of touching the process environment.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "WORKBENCH"

WATCH_BACKENDS = ("native", "polling")


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env (gitignored) fills in anything not already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


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
    data_dir: Path

    # ---- Sources (read-only) ----
    claude_home: Path
    tasks_dir: Path
    plans_dir: Path

    # ---- Watching ----
    debounce_ms: int
    watch_backend: str
    poll_interval_seconds: float

    # ---- Workspace picker ----
    workspace_folders: List[Path]
    workspace_max_depth: int

    # ---- Connector flags ----
    console_enabled: bool

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "claude-workbench")
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/workbench"))

        claude_home = _env_path(_k("CLAUDE_HOME"), Path.home() / ".claude")
        tasks_dir = _env_path(_k("TASKS_DIR"), claude_home / "tasks")
        plans_dir = _env_path(_k("PLANS_DIR"), claude_home / "plans")

        debounce_ms = max(0, _env_int(_k("DEBOUNCE_MS"), 100))

        watch_backend = _env(_k("WATCH_BACKEND"), "native").strip().lower()
        if watch_backend not in WATCH_BACKENDS:
            watch_backend = "native"
        poll_interval_ms = max(50, _env_int(_k("POLL_INTERVAL_MS"), 1000))

        workspace_folders = [
            Path(p).expanduser() for p in _env_list(_k("WORKSPACE_FOLDERS"), [os.getcwd()])
        ]
        workspace_max_depth = max(0, _env_int(_k("WORKSPACE_MAX_DEPTH"), 2))

        console_enabled = _env_bool(_k("CONSOLE_ENABLED"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            claude_home=claude_home,
            tasks_dir=tasks_dir,
            plans_dir=plans_dir,
            debounce_ms=debounce_ms,
            watch_backend=watch_backend,
            poll_interval_seconds=poll_interval_ms / 1000.0,
            workspace_folders=workspace_folders,
            workspace_max_depth=workspace_max_depth,
            console_enabled=console_enabled,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
# Prefer .env; use config_local.py only for safe overrides.
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    # Simple overrides for selected names. Keep it explicit.
    if hasattr(_config_local, "CONSOLE_ENABLED"):
        object.__setattr__(SETTINGS, "console_enabled", bool(_config_local.CONSOLE_ENABLED))
    if hasattr(_config_local, "WORKSPACE_FOLDERS"):
        object.__setattr__(
            SETTINGS,
            "workspace_folders",
            [Path(p).expanduser() for p in _config_local.WORKSPACE_FOLDERS],
        )


def get_settings() -> Settings:
    return SETTINGS
