# src/claude_workbench/fs/workspace.py

"""
Workspace folder listing for destination pickers (e.g. "copy plan to folder").

One-shot, bounded-depth walk; nothing here is watched.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from .scanner import scan_directory

DEFAULT_MAX_DEPTH = 2


@dataclass(slots=True, frozen=True)
class WorkspaceFolder:
    path: str  # absolute
    name: str  # display name; nested entries read "parent/child"

    @classmethod
    def for_root(cls, root: str | Path) -> WorkspaceFolder:
        abs_path = os.path.abspath(root)
        return cls(path=abs_path, name=os.path.basename(abs_path.rstrip(os.sep)) or abs_path)

    def to_payload(self) -> dict[str, Any]:
        return {"path": self.path, "name": self.name}


def list_workspace_folders(
    roots: Iterable[str | Path | WorkspaceFolder],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> list[WorkspaceFolder]:
    """
    Emit each root, then its subdirectories depth-first, at most `max_depth`
    levels below the root. Children are sorted by name within each level.
    Unreadable directories contribute nothing; their siblings are still listed.
    """
    if max_depth < 0:
        raise ValueError("max_depth must be >= 0")

    out: list[WorkspaceFolder] = []
    for root in roots:
        folder = root if isinstance(root, WorkspaceFolder) else WorkspaceFolder.for_root(root)
        out.append(folder)
        _walk(Path(folder.path), folder.name, 1, max_depth, out)
    return out


def _walk(path: Path, display: str, depth: int, max_depth: int, out: list[WorkspaceFolder]) -> None:
    if depth > max_depth:
        return
    listing = scan_directory(path)
    for name in sorted(listing.subdirs):
        child = path / name
        child_display = f"{display}/{name}"
        out.append(WorkspaceFolder(path=str(child), name=child_display))
        _walk(child, child_display, depth + 1, max_depth, out)
