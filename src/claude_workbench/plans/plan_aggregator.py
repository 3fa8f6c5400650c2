# src/claude_workbench/plans/plan_aggregator.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from ..core.events import SubscriberRegistry, Subscription
from ..core.ports import WatchBackend
from ..fs.debounce import Debouncer
from ..fs.scanner import scan_directory
from ..fs.watch import WatchSetManager
from .plan_models import Plan
from .plan_parser import PLAN_SUFFIX, read_plan_file

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.1

PlansCallback = Callable[[Sequence[Plan]], None]


class PlanAggregator:
    """
    Live view of the flat plans directory (<plans_root>/<slug>.md).

    Plans are ordered newest first by modification time. One watch on the root
    is enough: there are no subdirectories to follow.
    """

    def __init__(
        self,
        plans_root: str | Path,
        backend: WatchBackend,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._root = Path(plans_root)
        self._snapshot: tuple[Plan, ...] = ()
        self._subscribers: SubscriberRegistry[tuple[Plan, ...]] = SubscriberRegistry("plans")
        self._watches = WatchSetManager(backend, self._on_fs_change, name="plan-watches")
        # No watch rebuild here, so overlapping reloads are harmless; they are serialized by the lock.
        self._debouncer = Debouncer(debounce_seconds, reentrancy_guard=False, name="plan-reload")
        self._refresh_lock = asyncio.Lock()
        self._started = False

    @property
    def root(self) -> Path:
        return self._root

    @property
    def watched_paths(self) -> tuple[Path, ...]:
        return self._watches.paths

    @property
    def debouncer(self) -> Debouncer:
        return self._debouncer

    async def start(self) -> None:
        if self._started:
            return
        self._started = True
        if await asyncio.to_thread(self._root.is_dir):
            self._watches.watch(self._root)
        else:
            logger.info("Plans root %s does not exist; no live updates", self._root)
        await self.refresh()

    async def dispose(self) -> None:
        # Stop new events first: a change arriving while we drain must not re-arm the timer.
        self._started = False
        self._watches.close_all()
        self._debouncer.cancel()
        await self._debouncer.drain()
        self._debouncer.cancel()
        self._subscribers.clear()

    def current(self) -> tuple[Plan, ...]:
        return self._snapshot

    def subscribe(self, callback: PlansCallback) -> Subscription:
        return self._subscribers.subscribe(callback)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscribers.unsubscribe(subscription)

    def get(self, plan_id: str) -> Plan | None:
        for plan in self._snapshot:
            if plan.id == plan_id:
                return plan
        return None

    def get_content(self, plan_id: str) -> str | None:
        plan = self.get(plan_id)
        return plan.content if plan else None

    def search(self, query: str) -> list[Plan]:
        """Case-insensitive substring search over title and content of the current snapshot."""
        if not query.strip():
            return list(self._snapshot)
        return [plan for plan in self._snapshot if plan.matches(query)]

    async def load_all(self) -> list[Plan]:
        listing = await asyncio.to_thread(scan_directory, self._root, suffix=PLAN_SUFFIX)

        plans: list[Plan] = []
        for file_path in listing.files:
            result = await asyncio.to_thread(read_plan_file, file_path)
            if result.value is not None:
                plans.append(result.value)

        plans.sort(key=lambda p: p.modified_at, reverse=True)
        return plans

    async def refresh(self) -> tuple[Plan, ...]:
        async with self._refresh_lock:
            plans = await self.load_all()
            self._snapshot = tuple(plans)
            logger.debug("Plans reloaded: %d plans", len(self._snapshot))
            self._subscribers.notify(self._snapshot)
            return self._snapshot

    def _on_fs_change(self) -> None:
        if not self._started:
            return
        self._debouncer.schedule(self._reload)

    async def _reload(self) -> None:
        await self.refresh()
