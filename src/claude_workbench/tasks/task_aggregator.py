# src/claude_workbench/tasks/task_aggregator.py

"""
Live view of all task files under the tasks root.

Layout: <tasks_root>/<session_id>/<task>.json

Reload cycle (on any watched change, debounced):
- rescan every session directory and parse every task file
- dedup by (session_id, id); the file scanned last wins
- replace the snapshot and notify subscribers with the full list
- rebuild watches over the root + current session dirs, so sessions created
  after startup get watched and removed ones are released
"""

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
from .task_models import Task, TaskKey
from .task_parser import read_task_file

logger = logging.getLogger(__name__)

TASK_SUFFIX = ".json"
DEFAULT_DEBOUNCE_SECONDS = 0.1

TasksCallback = Callable[[Sequence[Task]], None]


class TaskAggregator:
    def __init__(
        self,
        tasks_root: str | Path,
        backend: WatchBackend,
        *,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._root = Path(tasks_root)
        self._snapshot: tuple[Task, ...] = ()
        self._subscribers: SubscriberRegistry[tuple[Task, ...]] = SubscriberRegistry("tasks")
        self._watches = WatchSetManager(backend, self._on_fs_change, name="task-watches")
        # Reload rebuilds watches, which is not reentrant: keep the guard on.
        self._debouncer = Debouncer(debounce_seconds, reentrancy_guard=True, name="task-reload")
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

    # ---- lifecycle ----

    async def start(self) -> None:
        """Watch the root and every existing session dir, then load the first snapshot."""
        if self._started:
            return
        self._started = True
        paths = await asyncio.to_thread(self._watch_targets)
        self._watches.rebuild_all(paths)
        logger.info("TaskAggregator watching %s (%d dirs)", self._root, len(self._watches))
        await self.refresh()

    async def dispose(self) -> None:
        # Stop new events first: a change arriving while we drain must not re-arm the timer.
        self._started = False
        self._watches.close_all()
        self._debouncer.cancel()
        await self._debouncer.drain()
        self._debouncer.cancel()
        self._subscribers.clear()

    # ---- public API ----

    def current(self) -> tuple[Task, ...]:
        return self._snapshot

    def subscribe(self, callback: TasksCallback) -> Subscription:
        return self._subscribers.subscribe(callback)

    def unsubscribe(self, subscription: Subscription) -> None:
        self._subscribers.unsubscribe(subscription)

    def session_ids(self) -> list[str]:
        seen: dict[str, None] = {}
        for task in self._snapshot:
            seen.setdefault(task.session_id, None)
        return list(seen)

    async def load_all(self) -> list[Task]:
        """Scan and parse every task file. Missing root -> []."""
        root_listing = await asyncio.to_thread(scan_directory, self._root)

        by_key: dict[TaskKey, Task] = {}
        for session_id in root_listing.subdirs:
            session_dir = self._root / session_id
            listing = await asyncio.to_thread(scan_directory, session_dir, suffix=TASK_SUFFIX)
            for file_path in listing.files:
                result = await asyncio.to_thread(read_task_file, file_path, session_id)
                if result.value is not None:
                    by_key[result.value.key] = result.value

        return list(by_key.values())

    async def refresh(self) -> tuple[Task, ...]:
        """Load, replace the snapshot and notify subscribers. Serialized."""
        async with self._refresh_lock:
            tasks = await self.load_all()
            self._snapshot = tuple(tasks)
            logger.debug("Tasks reloaded: %d tasks", len(self._snapshot))
            self._subscribers.notify(self._snapshot)
            return self._snapshot

    # ---- internals ----

    def _watch_targets(self) -> list[Path]:
        if not self._root.is_dir():
            logger.info("Tasks root %s does not exist; no live updates", self._root)
            return []
        listing = scan_directory(self._root)
        return [self._root, *(self._root / name for name in listing.subdirs)]

    def _on_fs_change(self) -> None:
        if not self._started:
            return
        self._debouncer.schedule(self._reload)

    async def _reload(self) -> None:
        await self.refresh()
        paths = await asyncio.to_thread(self._watch_targets)
        # dispose() may have run while we were reloading.
        if not self._started:
            return
        self._watches.rebuild_all(paths)
