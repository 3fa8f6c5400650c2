# src/claude_workbench/fs/watch.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver
from watchdog.observers.polling import PollingObserver

from ..core.ports import ChangeCallback, WatchBackend

logger = logging.getLogger(__name__)

# Our own reloads open and read every file; those events must not trigger another reload.
READ_ONLY_EVENT_TYPES = frozenset({"opened", "closed_no_write"})


class _LoopForwarder(FileSystemEventHandler):
    """Runs on a watchdog thread; hops every relevant event onto the asyncio loop."""

    def __init__(self, loop: asyncio.AbstractEventLoop, on_change: ChangeCallback) -> None:
        super().__init__()
        self._loop = loop
        self._on_change = on_change

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.event_type in READ_ONLY_EVENT_TYPES:
            return
        if self._loop.is_closed():
            return
        try:
            self._loop.call_soon_threadsafe(self._on_change)
        except RuntimeError:
            # Loop closed between the check and the call (shutdown race).
            logger.debug("Dropping fs event after loop shutdown: %s", event.src_path)


class WatchdogBackend:
    """
    WatchBackend on top of watchdog.

    - native (default): inotify / FSEvents / ReadDirectoryChangesW via Observer
    - polling: PollingObserver, for network mounts and containers without inotify

    Watches are non-recursive; observer threads are daemons, so they never keep
    the process alive.
    """

    def __init__(
        self,
        *,
        polling: bool = False,
        poll_interval_seconds: float = 1.0,
        loop: asyncio.AbstractEventLoop | None = None,
    ) -> None:
        self._observer: BaseObserver = (
            PollingObserver(timeout=poll_interval_seconds) if polling else Observer()
        )
        self._loop = loop
        self._started = False
        self.polling = polling

    def _ensure_started(self) -> None:
        # Start before the first schedule() so registration errors surface immediately.
        if not self._started:
            self._observer.start()
            self._started = True

    def watch(self, path: Path, on_change: ChangeCallback) -> Any:
        loop = self._loop or asyncio.get_running_loop()
        path = Path(path)
        if not path.is_dir():
            raise FileNotFoundError(f"not a directory: {path}")
        self._ensure_started()
        return self._observer.schedule(_LoopForwarder(loop, on_change), str(path), recursive=False)

    def close(self, handle: Any) -> None:
        try:
            self._observer.unschedule(handle)
        except KeyError:
            logger.debug("Watch already removed: %s", getattr(handle, "path", handle))

    def stop(self, timeout: float = 5.0) -> None:
        if not self._started:
            return
        self._observer.stop()
        self._observer.join(timeout=timeout)
        self._started = False
        if self._observer.is_alive():
            logger.warning("Watch observer thread did not exit within %.1fs", timeout)


class WatchSetManager:
    """
    The set of live watch handles of one aggregator.

    Every handle reports to the same callback. Registration is best-effort:
    a path that cannot be watched is logged and simply gets no live updates.
    """

    def __init__(self, backend: WatchBackend, on_change: ChangeCallback, *, name: str = "watches") -> None:
        self._backend = backend
        self._on_change = on_change
        self._name = name
        self._handles: dict[Path, Any] = {}

    @property
    def paths(self) -> tuple[Path, ...]:
        return tuple(self._handles)

    def __len__(self) -> int:
        return len(self._handles)

    def watch(self, path: str | Path) -> bool:
        path = Path(path)
        if path in self._handles:
            return True
        try:
            handle = self._backend.watch(path, self._on_change)
        except Exception as e:
            logger.warning("%s: cannot watch %s (%s); no live updates for it", self._name, path, e)
            return False
        self._handles[path] = handle
        return True

    def rebuild_all(self, paths: Iterable[str | Path]) -> None:
        """Close every handle, then watch each path again (picks up new and removed dirs)."""
        self.close_all()
        for path in paths:
            self.watch(path)
        logger.debug("%s: rebuilt, %d active", self._name, len(self._handles))

    def close_all(self) -> None:
        handles = list(self._handles.items())
        self._handles.clear()
        for path, handle in handles:
            try:
                self._backend.close(handle)
            except Exception:
                logger.debug("%s: closing watch on %s failed", self._name, path, exc_info=True)
