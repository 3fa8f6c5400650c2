# src/claude_workbench/plans/plan_models.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(slots=True, frozen=True)
class Plan:
    id: str  # filename without .md
    title: str
    content: str
    file_path: str
    modified_at: float  # mtime in milliseconds

    def matches(self, query: str) -> bool:
        needle = query.lower()
        return needle in self.title.lower() or needle in self.content.lower()

    def to_payload(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "content": self.content,
            "filePath": self.file_path,
            "modifiedAt": self.modified_at,
        }
