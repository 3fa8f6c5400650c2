# src/claude_workbench/cli/commands.py

from __future__ import annotations

from collections.abc import Awaitable, Callable
from pathlib import Path

from ..core.bridge import MessageType
from ..core.state import AppState
from ..tasks.task_models import Task

CommandHandler = Callable[[AppState, list[str]], Awaitable[str | None]]
# Handlers return a reply to print, or None when the reply arrives as a bridge message.


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    def is_command(self, line: str) -> bool:
        return line.startswith("/")

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string, or None if there is nothing to print.
        """
        if not self.is_command(line):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def find_task(state: AppState, ref: str) -> Task | None:
    """
    Resolve "<session>:<task id>" against the current snapshot.
    The session part may be any unique prefix of the session id (as shown by the renderer).
    """
    session_ref, sep, task_id = ref.partition(":")
    if not sep or not task_id:
        return None
    matches = [
        t for t in state.tasks.current() if t.id == task_id and t.session_id.startswith(session_ref)
    ]
    return matches[0] if len(matches) == 1 else None


async def cmd_help(state: AppState, args: list[str]) -> str | None:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str]) -> str | None:
    settings = state.settings
    return (
        "Status:\n"
        f"  Tasks: {len(state.tasks.current())} in {len(state.tasks.session_ids())} sessions"
        f" ({state.tasks.root})\n"
        f"  Plans: {len(state.plans.current())} ({state.plans.root})\n"
        f"  Watched dirs: {len(state.tasks.watched_paths) + len(state.plans.watched_paths)}"
        f" (backend: {getattr(settings, 'watch_backend', 'native')})\n"
        f"  Debounce: {getattr(settings, 'debounce_ms', '?')} ms"
    )


async def cmd_tasks(state: AppState, args: list[str]) -> str | None:
    await state.bridge.handle_message({"type": MessageType.REQUEST_TASKS.value})
    return None


async def cmd_plans(state: AppState, args: list[str]) -> str | None:
    await state.bridge.handle_message({"type": MessageType.REQUEST_PLANS.value})
    return None


async def cmd_search(state: AppState, args: list[str]) -> str | None:
    await state.bridge.handle_message(
        {"type": MessageType.SEARCH_PLANS.value, "query": " ".join(args)}
    )
    return None


async def cmd_folders(state: AppState, args: list[str]) -> str | None:
    await state.bridge.handle_message({"type": MessageType.REQUEST_WORKSPACE_FOLDERS.value})
    return None


async def cmd_open(state: AppState, args: list[str]) -> str | None:
    """
    /open <plan-id>            -> open a plan
    /open <session>:<task-id>  -> open a task file
    /open <path>               -> open any file
    """
    if not args:
        return "Usage: /open <plan-id> | <session>:<task-id> | <path>"

    ref = " ".join(args)
    plan = state.plans.get(ref)
    if plan is not None:
        await state.bridge.handle_message(
            {"type": MessageType.OPEN_PLAN_FILE.value, "filePath": plan.file_path}
        )
        return f"Opening plan {plan.id}."

    task = find_task(state, ref)
    if task is not None:
        await state.bridge.handle_message(
            {"type": MessageType.OPEN_TASK_FILE.value, "filePath": task.file_path}
        )
        return f"Opening task {task.session_id[:8]}:{task.id}."

    path = Path(ref).expanduser()
    if path.is_file():
        await state.bridge.handle_message(
            {"type": MessageType.OPEN_TASK_FILE.value, "filePath": str(path.absolute())}
        )
        return f"Opening {path}."

    return f"Nothing to open for {ref!r}."


async def cmd_copy(state: AppState, args: list[str]) -> str | None:
    """
    /copy <plan-id>           -> copy the plan into the first workspace folder
    /copy <plan-id> <folder>  -> copy the plan into <folder>
    """
    if not args:
        return "Usage: /copy <plan-id> [folder]"

    plan = state.plans.get(args[0])
    if plan is None:
        return f"Unknown plan: {args[0]}"

    if len(args) == 1:
        await state.bridge.handle_message(
            {"type": MessageType.COPY_PLAN_TO_PROJECT.value, "sourcePath": plan.file_path}
        )
    else:
        target = str(Path(" ".join(args[1:])).expanduser().absolute())
        await state.bridge.handle_message(
            {
                "type": MessageType.COPY_PLAN_TO_FOLDER.value,
                "sourcePath": plan.file_path,
                "targetFolderPath": target,
            }
        )
    return None


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show roots, counts and watch state.")
registry.register("tasks", cmd_tasks, help_text="Reload and show tasks by status.", aliases=["t"])
registry.register("plans", cmd_plans, help_text="Reload and list plans (newest first).", aliases=["p"])
registry.register("search", cmd_search, help_text="Search plans by title/content: /search <text>.")
registry.register("folders", cmd_folders, help_text="List workspace folders (copy targets).")
registry.register(
    "open", cmd_open, help_text="Open a plan or task file: /open <plan-id> | <session>:<task-id>."
)
registry.register("copy", cmd_copy, help_text="Copy a plan to a folder: /copy <plan-id> [folder].")
