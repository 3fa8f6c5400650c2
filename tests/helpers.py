# tests/helpers.py

from __future__ import annotations

import asyncio
import json
import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

# Short enough to keep tests fast, long enough to coalesce a burst of fire() calls.
TEST_DEBOUNCE_SECONDS = 0.05


def write_task(root: Path, session_id: str, name: str, data: Any) -> Path:
    """Write <root>/<session_id>/<name>.json; `data` may be a dict or raw text."""
    session_dir = root / session_id
    session_dir.mkdir(parents=True, exist_ok=True)
    path = session_dir / f"{name}.json"
    text = data if isinstance(data, str) else json.dumps(data)
    path.write_text(text, "utf-8")
    return path


def write_plan(root: Path, slug: str, content: str, *, mtime_ms: float | None = None) -> Path:
    root.mkdir(parents=True, exist_ok=True)
    path = root / f"{slug}.md"
    path.write_text(content, "utf-8")
    if mtime_ms is not None:
        ns = int(mtime_ms * 1_000_000)
        os.utime(path, ns=(ns, ns))
    return path


async def wait_for(predicate: Callable[[], bool], timeout: float = 2.0, interval: float = 0.01) -> None:
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met within timeout")
        await asyncio.sleep(interval)
