# src/claude_workbench/tasks/task_models.py

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

UNTITLED_SUBJECT = "Untitled Task"


class TaskStatus(StrEnum):
    """
    Task lifecycle status as written by the agent.

    Anything else found on disk (typos, "done", null, numbers) is read as PENDING.
    """

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"

    @classmethod
    def coerce(cls, raw: Any) -> TaskStatus:
        if not isinstance(raw, str) or not raw:
            return cls.PENDING
        try:
            return cls(raw)
        except ValueError:
            return cls.PENDING


TaskKey = tuple[str, str]
# (session_id, task id): task ids are only unique within one session.


@dataclass(slots=True, frozen=True)
class Task:
    id: str
    subject: str
    status: TaskStatus
    session_id: str
    file_path: str

    description: str | None = None
    owner: str | None = None
    active_form: str | None = None
    blocked_by: tuple[str, ...] | None = None
    blocks: tuple[str, ...] | None = None
    metadata: dict[str, Any] | None = None

    @property
    def key(self) -> TaskKey:
        return (self.session_id, self.id)

    @property
    def is_blocked(self) -> bool:
        return bool(self.blocked_by)

    def to_payload(self) -> dict[str, Any]:
        """Wire form for rendering surfaces (camelCase, unset optionals omitted)."""
        out: dict[str, Any] = {
            "id": self.id,
            "subject": self.subject,
            "status": self.status.value,
            "sessionId": self.session_id,
            "filePath": self.file_path,
        }
        optional = {
            "description": self.description,
            "owner": self.owner,
            "activeForm": self.active_form,
            "blockedBy": list(self.blocked_by) if self.blocked_by is not None else None,
            "blocks": list(self.blocks) if self.blocks is not None else None,
            "metadata": self.metadata,
        }
        out.update({k: v for k, v in optional.items() if v is not None})
        return out


def tasks_by_status(tasks: Iterable[Task]) -> dict[TaskStatus, list[Task]]:
    """Split a snapshot into swimlanes (one per status), keeping snapshot order."""
    lanes: dict[TaskStatus, list[Task]] = {status: [] for status in TaskStatus}
    for task in tasks:
        lanes[task.status].append(task)
    return lanes
