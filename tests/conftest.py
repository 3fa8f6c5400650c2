# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from claude_workbench.core.bridge import WorkbenchBridge
from claude_workbench.core.state import AppState
from claude_workbench.plans.plan_aggregator import PlanAggregator
from claude_workbench.tasks.task_aggregator import TaskAggregator

from .fakes import FakeCopier, FakeOpener, FakeRoots, FakeWatchBackend, RecordingSink
from .helpers import TEST_DEBOUNCE_SECONDS


@pytest.fixture()
def tasks_root(tmp_path: Path) -> Path:
    root = tmp_path / "claude" / "tasks"
    root.mkdir(parents=True)
    return root


@pytest.fixture()
def plans_root(tmp_path: Path) -> Path:
    root = tmp_path / "claude" / "plans"
    root.mkdir(parents=True)
    return root


@pytest.fixture()
def workspace_root(tmp_path: Path) -> Path:
    root = tmp_path / "workspace" / "project"
    root.mkdir(parents=True)
    return root


@pytest.fixture()
def backend() -> FakeWatchBackend:
    return FakeWatchBackend()


@pytest.fixture()
def settings(tmp_path: Path, tasks_root: Path, plans_root: Path, workspace_root: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the process environment.
    """
    return SimpleNamespace(
        data_dir=tmp_path / "data",
        tasks_dir=tasks_root,
        plans_dir=plans_root,
        debounce_ms=int(TEST_DEBOUNCE_SECONDS * 1000),
        debounce_seconds=TEST_DEBOUNCE_SECONDS,
        watch_backend="native",
        workspace_folders=[workspace_root],
        workspace_max_depth=2,
        console_enabled=False,
    )


@pytest.fixture()
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def opener() -> FakeOpener:
    return FakeOpener()


@pytest.fixture()
def copier() -> FakeCopier:
    return FakeCopier()


@pytest.fixture()
def state(
    settings: SimpleNamespace,
    backend: FakeWatchBackend,
    sink: RecordingSink,
    opener: FakeOpener,
    copier: FakeCopier,
) -> AppState:
    """AppState wired with the fake backend and recording collaborators (not started)."""
    tasks = TaskAggregator(settings.tasks_dir, backend, debounce_seconds=settings.debounce_seconds)
    plans = PlanAggregator(settings.plans_dir, backend, debounce_seconds=settings.debounce_seconds)
    bridge = WorkbenchBridge(
        tasks=tasks,
        plans=plans,
        sink=sink,
        opener=opener,
        copier=copier,
        workspace_roots=FakeRoots(list(settings.workspace_folders)),
        workspace_max_depth=settings.workspace_max_depth,
    )
    return AppState(settings=settings, tasks=tasks, plans=plans, bridge=bridge, watch_backend=backend)
