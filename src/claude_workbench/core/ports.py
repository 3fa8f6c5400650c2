# src/claude_workbench/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the engine and the bridge.

The engine depends on Protocols instead of concrete implementations.
This keeps the watch backend, the rendering surface and the editor/copy
actions swappable and makes testing easier.
"""

from collections.abc import Callable, Sequence
from pathlib import Path
from typing import Any, Awaitable, Protocol

ChangeCallback = Callable[[], None]
# Invoked on the event loop thread whenever a watched directory changes.

Message = dict[str, Any]
# Bridge messages: {"type": "...", ...payload}.


class WatchBackend(Protocol):
    """
    Filesystem watch capability.

    watch() registers a non-recursive watch on one directory and returns an
    opaque handle. It raises OSError if the path cannot be watched.
    on_change must be called on the asyncio loop thread, never concurrently.
    """

    def watch(self, path: Path, on_change: ChangeCallback) -> Any: ...
    def close(self, handle: Any) -> None: ...


class MessageSink(Protocol):
    """Rendering-surface side: receives one push message per event."""

    def post(self, message: Message) -> None: ...


class FileOpener(Protocol):
    """'Open in editor' collaborator."""

    def open_file(self, path: str) -> Awaitable[None]: ...


class PlanCopier(Protocol):
    """
    'Copy with overwrite confirmation' collaborator.

    Returns True if the file was copied, False if the user declined an overwrite.
    """

    def copy_plan(self, source_path: str, target_folder: str) -> Awaitable[bool]: ...


class WorkspaceRoots(Protocol):
    """Workspace-folder source: the top-level folders of the current workspace."""

    def roots(self) -> Sequence[Path]: ...
