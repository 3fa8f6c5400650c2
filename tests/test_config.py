# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from claude_workbench.config import Settings

ENV_NAMES = (
    "APP_NAME",
    "LOG_LEVEL",
    "DATA_DIR",
    "CLAUDE_HOME",
    "TASKS_DIR",
    "PLANS_DIR",
    "DEBOUNCE_MS",
    "WATCH_BACKEND",
    "POLL_INTERVAL_MS",
    "WORKSPACE_FOLDERS",
    "WORKSPACE_MAX_DEPTH",
    "CONSOLE_ENABLED",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch) -> None:
    for name in ENV_NAMES:
        monkeypatch.delenv(f"WORKBENCH_{name}", raising=False)


def test_defaults_derive_roots_from_claude_home(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WORKBENCH_CLAUDE_HOME", str(tmp_path / ".claude"))

    s = Settings.from_env()

    assert s.tasks_dir == tmp_path / ".claude" / "tasks"
    assert s.plans_dir == tmp_path / ".claude" / "plans"
    assert s.debounce_ms == 100
    assert s.debounce_seconds == pytest.approx(0.1)
    assert s.watch_backend == "native"
    assert s.workspace_max_depth == 2
    assert s.console_enabled is True


def test_explicit_overrides(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setenv("WORKBENCH_TASKS_DIR", str(tmp_path / "t"))
    monkeypatch.setenv("WORKBENCH_PLANS_DIR", str(tmp_path / "p"))
    monkeypatch.setenv("WORKBENCH_DEBOUNCE_MS", "250")
    monkeypatch.setenv("WORKBENCH_WATCH_BACKEND", "Polling")
    monkeypatch.setenv("WORKBENCH_POLL_INTERVAL_MS", "500")
    monkeypatch.setenv("WORKBENCH_WORKSPACE_FOLDERS", f"{tmp_path / 'a'}, {tmp_path / 'b'}")
    monkeypatch.setenv("WORKBENCH_CONSOLE_ENABLED", "off")

    s = Settings.from_env()

    assert s.tasks_dir == tmp_path / "t"
    assert s.plans_dir == tmp_path / "p"
    assert s.debounce_seconds == pytest.approx(0.25)
    assert s.watch_backend == "polling"
    assert s.poll_interval_seconds == pytest.approx(0.5)
    assert s.workspace_folders == [tmp_path / "a", tmp_path / "b"]
    assert s.console_enabled is False


@pytest.mark.parametrize(
    ("name", "raw", "attr", "expected"),
    [
        ("DEBOUNCE_MS", "soon", "debounce_ms", 100),
        ("DEBOUNCE_MS", "-5", "debounce_ms", 0),
        ("WATCH_BACKEND", "kqueue", "watch_backend", "native"),
        ("WORKSPACE_MAX_DEPTH", "-1", "workspace_max_depth", 0),
        ("POLL_INTERVAL_MS", "1", "poll_interval_seconds", 0.05),
    ],
)
def test_bad_values_fall_back(monkeypatch, name: str, raw: str, attr: str, expected) -> None:
    monkeypatch.setenv(f"WORKBENCH_{name}", raw)

    assert getattr(Settings.from_env(), attr) == expected
