# src/claude_workbench/fs/debounce.py

"""
Debouncer for filesystem change bursts.

States:
- IDLE: nothing armed, nothing running
- PENDING: a timer is armed (deadline = loop time when it fires)
- RUNNING: the action is executing

schedule() moves IDLE/PENDING -> PENDING with a fresh deadline. When the timer
fires the action starts as an asyncio task (PENDING -> RUNNING -> IDLE).
With the reentrancy guard on, a timer that fires while an action is still
running is dropped, not queued: the running action already reads the latest
state from disk.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from enum import StrEnum

logger = logging.getLogger(__name__)

Action = Callable[[], Awaitable[None]]


class DebounceState(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    RUNNING = "running"


class Debouncer:
    def __init__(self, delay: float, *, reentrancy_guard: bool = True, name: str = "debounce") -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = float(delay)
        self.reentrancy_guard = reentrancy_guard
        self.name = name

        self._timer: asyncio.TimerHandle | None = None
        self._deadline: float | None = None
        self._action: Action | None = None
        self._inflight: set[asyncio.Task[None]] = set()

        # Counters (diagnostics/tests).
        self.fired = 0
        self.dropped = 0

    @property
    def state(self) -> DebounceState:
        if self._timer is not None:
            return DebounceState.PENDING
        if self._inflight:
            return DebounceState.RUNNING
        return DebounceState.IDLE

    @property
    def deadline(self) -> float | None:
        return self._deadline

    @property
    def running(self) -> bool:
        return bool(self._inflight)

    def schedule(self, action: Action) -> None:
        """Arm (or re-arm) the timer. Must be called from the event loop thread."""
        loop = asyncio.get_running_loop()
        if self._timer is not None:
            self._timer.cancel()
        self._action = action
        self._deadline = loop.time() + self.delay
        self._timer = loop.call_at(self._deadline, self._fire)

    def cancel(self) -> None:
        """Disarm a pending timer. An action already running is left alone."""
        if self._timer is not None:
            self._timer.cancel()
        self._timer = None
        self._deadline = None
        self._action = None

    async def drain(self) -> None:
        """Wait until no action is running."""
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def _fire(self) -> None:
        action = self._action
        self._timer = None
        self._deadline = None
        self._action = None
        if action is None:
            return

        if self.reentrancy_guard and self._inflight:
            self.dropped += 1
            logger.debug("%s: fired while running; dropped", self.name)
            return

        self.fired += 1
        task = asyncio.get_running_loop().create_task(self._run(action))
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)

    async def _run(self, action: Action) -> None:
        try:
            await action()
        except Exception:
            logger.exception("%s: action failed", self.name)
