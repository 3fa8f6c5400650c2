# src/claude_workbench/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- takes settings once,
- ensures the local (gitignored) data directory exists,
- picks the watch backend,
- wires aggregators, collaborators and the bridge into AppState.
"""

from __future__ import annotations

import logging

from ..config import get_settings
from ..connectors.actions import ConfirmingPlanCopier, EditorFileOpener, StaticWorkspaceRoots
from ..core.bridge import WorkbenchBridge
from ..core.ports import FileOpener, MessageSink, PlanCopier, WatchBackend, WorkspaceRoots
from ..core.state import AppState
from ..fs.watch import WatchdogBackend
from ..plans.plan_aggregator import PlanAggregator
from ..tasks.task_aggregator import TaskAggregator

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)


def create_watch_backend(settings) -> WatchdogBackend:
    polling = getattr(settings, "watch_backend", "native") == "polling"
    backend = WatchdogBackend(
        polling=polling,
        poll_interval_seconds=float(getattr(settings, "poll_interval_seconds", 1.0)),
    )
    logger.debug("Watch backend: %s", "polling" if polling else "native")
    return backend


def create_app_state(
    *,
    sink: MessageSink,
    settings=None,
    backend: WatchBackend | None = None,
    opener: FileOpener | None = None,
    copier: PlanCopier | None = None,
    workspace_roots: WorkspaceRoots | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and collaborators injectable makes the app easier to test and
    avoids hidden global config reads. If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if backend is None:
        backend = create_watch_backend(settings)

    tasks = TaskAggregator(settings.tasks_dir, backend, debounce_seconds=settings.debounce_seconds)
    plans = PlanAggregator(settings.plans_dir, backend, debounce_seconds=settings.debounce_seconds)

    bridge = WorkbenchBridge(
        tasks=tasks,
        plans=plans,
        sink=sink,
        opener=opener or EditorFileOpener(),
        copier=copier or ConfirmingPlanCopier(),
        workspace_roots=workspace_roots or StaticWorkspaceRoots(settings.workspace_folders),
        workspace_max_depth=settings.workspace_max_depth,
    )

    return AppState(
        settings=settings,
        tasks=tasks,
        plans=plans,
        bridge=bridge,
        watch_backend=backend,
    )
