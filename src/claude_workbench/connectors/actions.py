# src/claude_workbench/connectors/actions.py

"""
Default implementations of the bridge collaborators for local use:
- EditorFileOpener: $VISUAL / $EDITOR, else the platform "open" command
- ConfirmingPlanCopier: copy a plan into a folder, asking before overwriting
- StaticWorkspaceRoots: fixed list of workspace folders (from settings)
"""

from __future__ import annotations

import asyncio
import logging
import os
import shlex
import shutil
import sys
from collections.abc import Awaitable, Callable, Iterable, Sequence
from pathlib import Path

logger = logging.getLogger(__name__)

ConfirmOverwrite = Callable[[Path], Awaitable[bool]]


async def _never_overwrite(_dest: Path) -> bool:
    return False


class EditorFileOpener:
    """
    Launch an editor on a file and return as soon as it is running.

    The editor is reaped in the background; a nonzero exit is logged.
    A terminal editor ($EDITOR=vim) shares stdin with the console prompt,
    so a GUI editor (e.g. `code`, or the platform opener) works best here.
    """

    def __init__(self, editor: str | None = None) -> None:
        self._editor = editor if editor is not None else (os.getenv("VISUAL") or os.getenv("EDITOR") or "")
        self._reapers: set[asyncio.Task[None]] = set()

    def command_for(self, path: str) -> list[str]:
        if self._editor.strip():
            return [*shlex.split(self._editor), path]
        if sys.platform == "darwin":
            return ["open", path]
        if sys.platform.startswith("win"):
            return ["cmd", "/c", "start", "", path]
        return ["xdg-open", path]

    async def open_file(self, path: str) -> None:
        cmd = self.command_for(path)
        if shutil.which(cmd[0]) is None:
            raise FileNotFoundError(f"editor command not found: {cmd[0]}")
        logger.debug("Opening %s with %s", path, cmd[0])
        proc = await asyncio.create_subprocess_exec(*cmd)
        task = asyncio.get_running_loop().create_task(self._reap(proc, path))
        self._reapers.add(task)
        task.add_done_callback(self._reapers.discard)

    async def _reap(self, proc: asyncio.subprocess.Process, path: str) -> None:
        rc = await proc.wait()
        if rc != 0:
            logger.warning("Editor exited with code %s for %s", rc, path)


class ConfirmingPlanCopier:
    """
    Copy <source> to <target_folder>/<source name>.

    If the destination exists, `confirm_overwrite(dest)` decides; without a
    callback existing files are never overwritten.
    """

    def __init__(self, confirm_overwrite: ConfirmOverwrite | None = None) -> None:
        self._confirm = confirm_overwrite or _never_overwrite

    async def copy_plan(self, source_path: str, target_folder: str) -> bool:
        source = Path(source_path)
        target_dir = Path(target_folder)
        if not source.is_file():
            raise FileNotFoundError(f"plan not found: {source}")
        if not target_dir.is_dir():
            raise NotADirectoryError(f"not a folder: {target_dir}")

        dest = target_dir / source.name
        if dest.exists():
            if dest.resolve() == source.resolve():
                logger.info("Plan %s is already in %s", source.name, target_dir)
                return False
            if not await self._confirm(dest):
                return False

        await asyncio.to_thread(shutil.copy2, source, dest)
        return True


class StaticWorkspaceRoots:
    def __init__(self, paths: Iterable[str | Path]) -> None:
        self._paths = [Path(p) for p in paths]

    def roots(self) -> Sequence[Path]:
        return list(self._paths)
