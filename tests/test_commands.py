# tests/test_commands.py

from __future__ import annotations

from pathlib import Path

import pytest

from claude_workbench.cli.commands import CommandRegistry, find_task, registry

from .fakes import FakeCopier, FakeOpener, RecordingSink
from .helpers import write_plan, write_task


@pytest.mark.asyncio
async def test_command_registry_routes_with_aliases(state) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    async def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("run", handler, "run it", aliases=["r"])

    assert await reg.handle(state, "/run a b") == "ok"
    assert await reg.handle(state, "/R x") == "ok"
    assert called == [["a", "b"], ["x"]]
    assert "/run - run it" in reg.build_help()


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_help_lists_registered_commands(state) -> None:
    reply = await registry.handle(state, "/help")
    for name in ("/tasks", "/plans", "/search", "/folders", "/open", "/copy", "/status"):
        assert name in reply


@pytest.mark.asyncio
async def test_status_reports_counts(state, tasks_root: Path) -> None:
    write_task(tasks_root, "sess-a", "1", {"id": "1"})
    await state.start()
    try:
        reply = await registry.handle(state, "/status")
    finally:
        await state.shutdown()

    assert "Tasks: 1 in 1 sessions" in reply
    assert "Debounce: 50 ms" in reply


@pytest.mark.asyncio
async def test_tasks_and_search_commands_post_through_bridge(
    state, sink: RecordingSink, tasks_root: Path, plans_root: Path
) -> None:
    write_task(tasks_root, "sess-a", "1", {"id": "1"})
    write_plan(plans_root, "auth", "# Auth\n")
    state.bridge.attach()
    await state.plans.refresh()

    assert await registry.handle(state, "/t") is None
    assert await registry.handle(state, "/search Auth") is None

    assert len(sink.last("tasksUpdated")["tasks"]) == 1
    assert sink.last("planSearchResults")["query"] == "Auth"


@pytest.mark.asyncio
async def test_open_plan_and_task(state, opener: FakeOpener, tasks_root: Path, plans_root: Path) -> None:
    task_path = write_task(tasks_root, "0123456789abcdef", "7", {"id": "7"})
    plan_path = write_plan(plans_root, "quiet-fox", "# Fox\n")
    await state.tasks.refresh()
    await state.plans.refresh()

    assert "Opening plan quiet-fox" in await registry.handle(state, "/open quiet-fox")
    assert "Opening task 01234567:7" in await registry.handle(state, "/open 01234567:7")
    assert "Nothing to open" in await registry.handle(state, "/open zzz:7")

    assert opener.opened == [str(plan_path.absolute()), str(task_path.absolute())]


def test_find_task_requires_unique_session_prefix(state, tasks_root: Path) -> None:
    assert find_task(state, "no-colon") is None
    assert find_task(state, "abc:") is None


@pytest.mark.asyncio
async def test_find_task_ambiguous_prefix(state, tasks_root: Path) -> None:
    write_task(tasks_root, "sess-a", "1", {"id": "1"})
    write_task(tasks_root, "sess-b", "1", {"id": "1"})
    await state.tasks.refresh()

    assert find_task(state, "sess:1") is None
    assert find_task(state, "sess-b:1").session_id == "sess-b"


@pytest.mark.asyncio
async def test_copy_command(state, copier: FakeCopier, plans_root: Path, workspace_root: Path, tmp_path: Path) -> None:
    plan_path = write_plan(plans_root, "quiet-fox", "# Fox\n")
    await state.plans.refresh()

    assert "Unknown plan" in await registry.handle(state, "/copy nope")
    await registry.handle(state, "/copy quiet-fox")
    await registry.handle(state, f"/copy quiet-fox {tmp_path}")

    source = str(plan_path.absolute())
    assert copier.calls == [(source, str(workspace_root)), (source, str(tmp_path))]
