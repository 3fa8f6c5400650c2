# src/claude_workbench/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..plans.plan_aggregator import PlanAggregator
from ..tasks.task_aggregator import TaskAggregator
from .bridge import WorkbenchBridge


@dataclass
class AppState:
    # Settings are kept on the state for easy access in commands/connectors.
    settings: Any

    tasks: TaskAggregator
    plans: PlanAggregator
    bridge: WorkbenchBridge

    # Concrete watch backend (WatchdogBackend in the app, a fake in tests); may expose stop().
    watch_backend: Any = None

    async def start(self) -> None:
        self.bridge.attach()
        await self.tasks.start()
        await self.plans.start()

    async def shutdown(self) -> None:
        self.bridge.detach()
        await self.tasks.dispose()
        await self.plans.dispose()
        stop = getattr(self.watch_backend, "stop", None)
        if callable(stop):
            stop()
