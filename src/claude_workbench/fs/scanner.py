# src/claude_workbench/fs/scanner.py

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)

# Dependency caches and build output; never useful to list or watch.
IGNORED_NAMES = frozenset({"node_modules", "dist", "out", "build"})


def is_ignored(name: str) -> bool:
    return name.startswith(".") or name in IGNORED_NAMES


@dataclass(slots=True, frozen=True)
class DirectoryListing:
    path: Path
    files: tuple[Path, ...] = ()
    subdirs: tuple[str, ...] = ()


def scan_directory(path: str | Path, *, suffix: str | None = None) -> DirectoryListing:
    """
    List the immediate entries of `path` (non-recursive).

    - files: full paths of regular files whose name ends with `suffix` (all files if None)
    - subdirs: names of subdirectories
    Ignored names are dropped from both. Order follows os.scandir.

    A directory that cannot be read (missing, permission denied, removed while
    scanning) yields an empty listing instead of an error.
    """
    path = Path(path)
    try:
        with os.scandir(path) as it:
            entries = list(it)
    except OSError as e:
        logger.debug("Cannot list %s: %s", path, e)
        return DirectoryListing(path=path)

    files: list[Path] = []
    subdirs: list[str] = []
    for entry in entries:
        if is_ignored(entry.name):
            continue
        try:
            if entry.is_dir():
                subdirs.append(entry.name)
            elif entry.is_file() and (suffix is None or entry.name.endswith(suffix)):
                files.append(Path(entry.path))
        except OSError:
            # Entry vanished between listing and stat.
            continue

    return DirectoryListing(path=path, files=tuple(files), subdirs=tuple(subdirs))
