# src/claude_workbench/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
import sys
import threading
from collections.abc import Callable, Mapping, Sequence
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from ..cli.commands import registry as command_registry
from ..core.bridge import MessageType
from ..core.ports import Message
from ..core.state import AppState
from ..tasks.task_models import TaskStatus

logger = logging.getLogger(__name__)

LANE_TITLES = {
    TaskStatus.PENDING: "Pending",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.COMPLETED: "Completed",
}

YES_ANSWERS = {"y", "yes"}


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _short_session(session_id: str) -> str:
    return session_id[:8]


def render_tasks(tasks: Sequence[Mapping[str, Any]]) -> str:
    """Three swimlanes, like the board view: Pending / In Progress / Completed."""
    if not tasks:
        return "No tasks found."

    lanes: dict[str, list[Mapping[str, Any]]] = {status.value: [] for status in TaskStatus}
    for task in tasks:
        lanes.setdefault(str(task.get("status")), []).append(task)

    lines: list[str] = []
    for status, title in LANE_TITLES.items():
        lane = lanes.get(status.value, [])
        lines.append(f"== {title} ({len(lane)})")
        for task in lane:
            line = f"  [{_short_session(str(task.get('sessionId', '')))}:{task.get('id')}] {task.get('subject')}"
            blocked_by = task.get("blockedBy") or []
            if blocked_by:
                line += f"  (blocked by {', '.join(blocked_by)})"
            if task.get("owner"):
                line += f"  @{task['owner']}"
            lines.append(line)
            if status == TaskStatus.IN_PROGRESS and task.get("activeForm"):
                lines.append(f"      ... {task['activeForm']}")
    return "\n".join(lines)


def render_plans(plans: Sequence[Mapping[str, Any]], *, heading: str = "Plans") -> str:
    if not plans:
        return f"{heading}: none."
    lines = [f"{heading} ({len(plans)}):"]
    for plan in plans:
        modified = datetime.fromtimestamp(float(plan.get("modifiedAt", 0)) / 1000).strftime(
            "%Y-%m-%d %H:%M"
        )
        lines.append(f"  {plan.get('id')}  {plan.get('title')}  ({modified})")
    return "\n".join(lines)


def render_folders(folders: Sequence[Mapping[str, Any]]) -> str:
    if not folders:
        return "No workspace folders available."
    lines = ["Workspace folders:"]
    for folder in folders:
        lines.append(f"  {folder.get('name')}  -> {folder.get('path')}")
    return "\n".join(lines)


class ConsoleRenderer:
    """MessageSink that prints every bridge notification to the terminal."""

    def __init__(self, out: TextIO | None = None) -> None:
        self._out = out or sys.stdout

    def post(self, message: Message) -> None:
        kind = message.get("type")
        if kind == MessageType.TASKS_UPDATED:
            text = render_tasks(message.get("tasks") or [])
        elif kind == MessageType.PLANS_UPDATED:
            text = render_plans(message.get("plans") or [])
        elif kind == MessageType.WORKSPACE_FOLDERS_UPDATED:
            text = render_folders(message.get("workspaceFolders") or [])
        elif kind == MessageType.PLAN_SEARCH_RESULTS:
            text = render_plans(message.get("plans") or [], heading=f"Matches for {message.get('query')!r}")
        else:
            logger.debug("Console renderer ignoring message type=%s", kind)
            return
        print(f"[{_ts_local()}]\n{text}", file=self._out, flush=True)


class StdinLines:
    """
    Reads stdin on a daemon thread and hands lines to the event loop.

    A daemon thread (instead of asyncio.to_thread(input)) lets the app exit on a
    signal while input() is still blocked.
    """

    def __init__(
        self,
        loop: asyncio.AbstractEventLoop,
        *,
        read_line: Callable[[], str] = input,
    ) -> None:
        self._loop = loop
        self._read_line = read_line
        self._queue: asyncio.Queue[str | None] = asyncio.Queue()
        self._thread = threading.Thread(target=self._run, name="console-stdin", daemon=True)

    def start(self) -> None:
        self._thread.start()

    def _run(self) -> None:
        while True:
            try:
                line: str | None = self._read_line()
            except (EOFError, KeyboardInterrupt):
                line = None
            try:
                self._loop.call_soon_threadsafe(self._queue.put_nowait, line)
            except RuntimeError:
                # Loop closed: app is shutting down.
                return
            if line is None:
                return

    async def readline(self) -> str | None:
        """Next line, or None once stdin is closed."""
        return await self._queue.get()

    async def confirm_overwrite(self, dest: Path) -> bool:
        print(f"[{_ts_local()}] {dest} already exists. Overwrite? [y/N]", flush=True)
        answer = await self.readline()
        return answer is not None and answer.strip().lower() in YES_ANSWERS


async def run_console_loop(state: AppState, lines: StdinLines, stop: asyncio.Event) -> None:
    logger.info("Console connector started.")
    print(f"[{_ts_local()}] [CONSOLE] Use /help for commands. Use /exit to quit.\n", flush=True)

    stop_wait = asyncio.ensure_future(stop.wait())
    try:
        while not stop.is_set():
            next_line = asyncio.ensure_future(lines.readline())
            done, _ = await asyncio.wait({next_line, stop_wait}, return_when=asyncio.FIRST_COMPLETED)
            if next_line not in done:
                next_line.cancel()
                break

            user_input = next_line.result()
            if user_input is None:
                logger.info("Console EOF received, exiting.")
                break

            user_input = user_input.strip()
            if not user_input:
                continue

            if user_input.lower() in ("/exit", "/quit"):
                logger.info("Console exit command received.")
                break

            if not command_registry.is_command(user_input):
                print(f"[{_ts_local()}] Not a command. Use /help.", flush=True)
                continue

            try:
                reply = await command_registry.handle(state, user_input)
            except Exception:
                logger.exception("Command handler crashed.")
                reply = "Internal error while handling a command."

            if reply is not None:
                print(f"[{_ts_local()}] {reply}", flush=True)
    finally:
        stop_wait.cancel()
        stop.set()
