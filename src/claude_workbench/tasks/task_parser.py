# src/claude_workbench/tasks/task_parser.py

"""
Defensive parsing of task JSON files.

A task file is written by an external agent, possibly while we read it.
Rules:
- not decodable / not a JSON object -> rejected ("unparsable")
- missing or empty id -> rejected ("missing id")
- every other field is coerced on its own; a bad field never rejects the record
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..core.results import REASON_MISSING_ID, REASON_UNPARSABLE, REASON_UNREADABLE, ParseResult
from .task_models import UNTITLED_SUBJECT, Task, TaskStatus

logger = logging.getLogger(__name__)


def coerce_str(value: Any) -> str:
    """String form of a JSON scalar, matching how JSON itself prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _optional_str(value: Any) -> str | None:
    # Empty strings, 0, false and null all mean "not set".
    if not value:
        return None
    return coerce_str(value)


def _str_tuple(value: Any) -> tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    return tuple(coerce_str(v) for v in value)


def _missing_id(value: Any) -> bool:
    return value is None or value is False or value == ""


def parse_task(
    raw: bytes | str | Mapping[str, Any],
    *,
    session_id: str,
    file_path: str | Path,
) -> ParseResult[Task]:
    if isinstance(raw, Mapping):
        data: Any = raw
    else:
        try:
            data = json.loads(raw)
        except (UnicodeDecodeError, ValueError):
            return ParseResult.reject(REASON_UNPARSABLE)

    if not isinstance(data, Mapping):
        return ParseResult.reject(REASON_UNPARSABLE)

    raw_id = data.get("id")
    if _missing_id(raw_id):
        return ParseResult.reject(REASON_MISSING_ID)

    metadata = data.get("metadata")

    task = Task(
        id=coerce_str(raw_id),
        subject=coerce_str(data.get("subject") or UNTITLED_SUBJECT),
        status=TaskStatus.coerce(data.get("status")),
        session_id=session_id,
        file_path=str(file_path),
        description=_optional_str(data.get("description")),
        owner=_optional_str(data.get("owner")),
        active_form=_optional_str(data.get("activeForm")),
        blocked_by=_str_tuple(data.get("blockedBy")),
        blocks=_str_tuple(data.get("blocks")),
        metadata=dict(metadata) if isinstance(metadata, Mapping) else None,
    )
    return ParseResult.accept(task)


def read_task_file(path: str | Path, session_id: str) -> ParseResult[Task]:
    """Read and parse one task file. Blocking; call via asyncio.to_thread from the loop."""
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        logger.warning("Skipping task file %s: %s (%s)", path, REASON_UNREADABLE, e)
        return ParseResult.reject(REASON_UNREADABLE)

    result = parse_task(raw, session_id=session_id, file_path=path.absolute())
    if not result.ok:
        logger.warning("Skipping task file %s: %s", path, result.reason)
    return result
