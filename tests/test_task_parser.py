# tests/test_task_parser.py

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from claude_workbench.core.results import REASON_MISSING_ID, REASON_UNPARSABLE, REASON_UNREADABLE
from claude_workbench.tasks.task_models import UNTITLED_SUBJECT, TaskStatus, tasks_by_status
from claude_workbench.tasks.task_parser import coerce_str, parse_task, read_task_file

from .helpers import write_task


def _parse(data, session_id: str = "sess-1"):
    raw = data if isinstance(data, (str, bytes)) else json.dumps(data)
    return parse_task(raw, session_id=session_id, file_path="/tmp/x.json")


def test_parse_full_record() -> None:
    result = _parse(
        {
            "id": "3",
            "subject": "Wire the bridge",
            "description": "Forward snapshots",
            "activeForm": "Wiring the bridge",
            "status": "in_progress",
            "owner": "agent-2",
            "blocks": ["4"],
            "blockedBy": ["1", "2"],
            "metadata": {"priority": "high"},
        }
    )

    assert result.ok
    task = result.value
    assert task.id == "3"
    assert task.subject == "Wire the bridge"
    assert task.status is TaskStatus.IN_PROGRESS
    assert task.session_id == "sess-1"
    assert task.file_path == "/tmp/x.json"
    assert task.active_form == "Wiring the bridge"
    assert task.blocked_by == ("1", "2")
    assert task.blocks == ("4",)
    assert task.metadata == {"priority": "high"}
    assert task.is_blocked
    assert task.key == ("sess-1", "3")


def test_minimal_record_gets_defaults() -> None:
    task = _parse({"id": "1"}).value

    assert task.subject == UNTITLED_SUBJECT
    assert task.status is TaskStatus.PENDING
    assert task.description is None
    assert task.owner is None
    assert task.blocked_by is None
    assert not task.is_blocked


@pytest.mark.parametrize("data", [{}, {"id": None}, {"id": ""}, {"id": False}, {"subject": "no id"}])
def test_missing_id_is_rejected(data) -> None:
    result = _parse(data)
    assert not result.ok
    assert result.reason == REASON_MISSING_ID


@pytest.mark.parametrize("raw", ["{not json", "", "[1, 2]", '"just a string"', "42", b"\xff\xfe{"])
def test_unparsable_input_is_rejected(raw) -> None:
    result = _parse(raw)
    assert not result.ok
    assert result.reason == REASON_UNPARSABLE


@pytest.mark.parametrize(
    ("raw_status", "expected"),
    [
        ("pending", TaskStatus.PENDING),
        ("in_progress", TaskStatus.IN_PROGRESS),
        ("completed", TaskStatus.COMPLETED),
        ("done", TaskStatus.PENDING),
        ("COMPLETED", TaskStatus.PENDING),
        (None, TaskStatus.PENDING),
        (3, TaskStatus.PENDING),
    ],
)
def test_status_coercion(raw_status, expected) -> None:
    assert _parse({"id": "1", "status": raw_status}).value.status is expected


def test_numeric_ids_become_strings() -> None:
    assert _parse({"id": 7}).value.id == "7"
    assert _parse({"id": 0}).value.id == "0"
    assert _parse({"id": 2.0}).value.id == "2"


def test_dependency_lists_are_coerced_per_element() -> None:
    task = _parse({"id": "1", "blockedBy": [1, "2", 3.0, True], "blocks": "4"}).value

    assert task.blocked_by == ("1", "2", "3", "true")
    # Not a list: treated as absent rather than rejecting the record.
    assert task.blocks is None


def test_empty_blocked_by_is_not_blocked() -> None:
    task = _parse({"id": "1", "blockedBy": []}).value
    assert task.blocked_by == ()
    assert not task.is_blocked


def test_bad_optional_fields_do_not_reject() -> None:
    task = _parse({"id": "1", "subject": "", "owner": 0, "metadata": ["x"], "description": None}).value

    assert task.subject == UNTITLED_SUBJECT
    assert task.owner is None
    assert task.metadata is None
    assert task.description is None


def test_coerce_str_matches_json_printing() -> None:
    assert coerce_str(True) == "true"
    assert coerce_str(False) == "false"
    assert coerce_str(1.5) == "1.5"
    assert coerce_str(10.0) == "10"
    assert coerce_str("x") == "x"


def test_payload_is_camel_case_and_omits_unset() -> None:
    payload = _parse({"id": "1", "activeForm": "Doing", "blockedBy": ["2"]}).value.to_payload()

    assert payload == {
        "id": "1",
        "subject": UNTITLED_SUBJECT,
        "status": "pending",
        "sessionId": "sess-1",
        "filePath": "/tmp/x.json",
        "activeForm": "Doing",
        "blockedBy": ["2"],
    }


def test_read_task_file_sets_absolute_path(tasks_root: Path) -> None:
    path = write_task(tasks_root, "sess-a", "1", {"id": "1", "subject": "A"})

    result = read_task_file(path, "sess-a")

    assert result.ok
    assert result.value.file_path == str(path.absolute())
    assert result.value.session_id == "sess-a"


def test_read_task_file_missing_is_unreadable(tasks_root: Path, caplog) -> None:
    with caplog.at_level(logging.WARNING):
        result = read_task_file(tasks_root / "gone" / "1.json", "gone")

    assert result.reason == REASON_UNREADABLE
    assert "Skipping task file" in caplog.text


def test_read_task_file_logs_rejection(tasks_root: Path, caplog) -> None:
    path = write_task(tasks_root, "sess-a", "half", '{"id": "1", "subj')

    with caplog.at_level(logging.WARNING):
        result = read_task_file(path, "sess-a")

    assert result.reason == REASON_UNPARSABLE
    assert REASON_UNPARSABLE in caplog.text


def test_tasks_by_status_keeps_order() -> None:
    tasks = [
        _parse({"id": "1", "status": "completed"}).value,
        _parse({"id": "2"}).value,
        _parse({"id": "3", "status": "completed"}).value,
    ]

    lanes = tasks_by_status(tasks)

    assert [t.id for t in lanes[TaskStatus.COMPLETED]] == ["1", "3"]
    assert [t.id for t in lanes[TaskStatus.PENDING]] == ["2"]
    assert lanes[TaskStatus.IN_PROGRESS] == []
