# src/claude_workbench/core/results.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

REASON_UNPARSABLE = "unparsable"
REASON_UNREADABLE = "unreadable"
REASON_MISSING_ID = "missing id"


@dataclass(slots=True, frozen=True)
class ParseResult(Generic[T]):
    """
    Outcome of parsing one source file.

    Exactly one of `value` / `reason` is set:
    - value: the parsed entity
    - reason: short diagnostic for a rejected file ("unparsable", "missing id", ...)
    """

    value: T | None = None
    reason: str | None = None

    @property
    def ok(self) -> bool:
        return self.value is not None

    @classmethod
    def accept(cls, value: T) -> ParseResult[T]:
        return cls(value=value)

    @classmethod
    def reject(cls, reason: str) -> ParseResult[T]:
        return cls(reason=reason)
