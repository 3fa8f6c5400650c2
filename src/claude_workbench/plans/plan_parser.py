# src/claude_workbench/plans/plan_parser.py

from __future__ import annotations

import logging
import re
from pathlib import Path

from ..core.results import REASON_UNPARSABLE, REASON_UNREADABLE, ParseResult
from .plan_models import Plan

logger = logging.getLogger(__name__)

PLAN_SUFFIX = ".md"

# A level-1 heading on any line: one '#', at least one space, then the title.
TITLE_REGEX = re.compile(r"^#[ \t]+(.+)$", re.MULTILINE)


def extract_title(content: str, fallback: str) -> str:
    m = TITLE_REGEX.search(content)
    if m:
        title = m.group(1).strip()
        if title:
            return title
    return fallback


def plan_id_for(path: str | Path) -> str:
    name = Path(path).name
    return name[: -len(PLAN_SUFFIX)] if name.endswith(PLAN_SUFFIX) else Path(name).stem


def parse_plan(content: str, *, file_path: str | Path, modified_at: float) -> Plan:
    plan_id = plan_id_for(file_path)
    return Plan(
        id=plan_id,
        title=extract_title(content, plan_id),
        content=content,
        file_path=str(file_path),
        modified_at=float(modified_at),
    )


def read_plan_file(path: str | Path) -> ParseResult[Plan]:
    """Read one plan (text + mtime). Blocking; call via asyncio.to_thread from the loop."""
    path = Path(path)
    try:
        raw = path.read_bytes()
        stat = path.stat()
    except OSError as e:
        logger.warning("Skipping plan file %s: %s (%s)", path, REASON_UNREADABLE, e)
        return ParseResult.reject(REASON_UNREADABLE)

    try:
        content = raw.decode("utf-8")
    except UnicodeDecodeError:
        logger.warning("Skipping plan file %s: %s", path, REASON_UNPARSABLE)
        return ParseResult.reject(REASON_UNPARSABLE)

    return ParseResult.accept(
        parse_plan(content, file_path=path.absolute(), modified_at=stat.st_mtime_ns / 1_000_000)
    )
