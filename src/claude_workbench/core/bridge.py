# src/claude_workbench/core/bridge.py

"""
Message bridge between the aggregators and a rendering surface.

Outbound (push, one message per event, always the full list):
- tasksUpdated            {"tasks": [...]}
- plansUpdated            {"plans": [...]}
- workspaceFoldersUpdated {"workspaceFolders": [...]}
- planSearchResults       {"query": str, "plans": [...]}

Inbound commands are plain dicts with a "type" key (see MessageType).
The bridge never raises into the surface: bad messages and collaborator
failures are logged and dropped.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Mapping, Sequence
from enum import StrEnum
from typing import Any

from ..fs.workspace import DEFAULT_MAX_DEPTH, WorkspaceFolder, list_workspace_folders
from ..plans.plan_aggregator import PlanAggregator
from ..plans.plan_models import Plan
from ..tasks.task_aggregator import TaskAggregator
from ..tasks.task_models import Task
from .events import Subscription
from .ports import FileOpener, Message, MessageSink, PlanCopier, WorkspaceRoots

logger = logging.getLogger(__name__)


class MessageType(StrEnum):
    # outbound
    TASKS_UPDATED = "tasksUpdated"
    PLANS_UPDATED = "plansUpdated"
    WORKSPACE_FOLDERS_UPDATED = "workspaceFoldersUpdated"
    PLAN_SEARCH_RESULTS = "planSearchResults"

    # inbound
    REQUEST_TASKS = "requestTasks"
    REQUEST_PLANS = "requestPlans"
    REQUEST_WORKSPACE_FOLDERS = "requestWorkspaceFolders"
    OPEN_TASK_FILE = "openTaskFile"
    OPEN_PLAN_FILE = "openPlanFile"
    COPY_PLAN_TO_FOLDER = "copyPlanToFolder"
    COPY_PLAN_TO_PROJECT = "copyPlanToProject"
    SEARCH_PLANS = "searchPlans"


def tasks_message(tasks: Sequence[Task]) -> Message:
    return {"type": MessageType.TASKS_UPDATED.value, "tasks": [t.to_payload() for t in tasks]}


def plans_message(plans: Sequence[Plan]) -> Message:
    return {"type": MessageType.PLANS_UPDATED.value, "plans": [p.to_payload() for p in plans]}


def folders_message(folders: Sequence[WorkspaceFolder]) -> Message:
    return {
        "type": MessageType.WORKSPACE_FOLDERS_UPDATED.value,
        "workspaceFolders": [f.to_payload() for f in folders],
    }


def _str_param(message: Mapping[str, Any], name: str) -> str | None:
    value = message.get(name)
    if isinstance(value, str) and value.strip():
        return value
    return None


class WorkbenchBridge:
    def __init__(
        self,
        *,
        tasks: TaskAggregator,
        plans: PlanAggregator,
        sink: MessageSink,
        opener: FileOpener,
        copier: PlanCopier,
        workspace_roots: WorkspaceRoots,
        workspace_max_depth: int = DEFAULT_MAX_DEPTH,
    ) -> None:
        self.tasks = tasks
        self.plans = plans
        self.sink = sink
        self.opener = opener
        self.copier = copier
        self.workspace_roots = workspace_roots
        self.workspace_max_depth = workspace_max_depth
        self._subscriptions: list[Subscription] = []

    # ---- subscriptions ----

    def attach(self) -> None:
        """Forward every aggregator snapshot to the sink."""
        if self._subscriptions:
            return
        self._subscriptions = [
            self.tasks.subscribe(lambda tasks: self._post(tasks_message(tasks))),
            self.plans.subscribe(lambda plans: self._post(plans_message(plans))),
        ]

    def detach(self) -> None:
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions = []

    # ---- commands ----

    async def handle_message(self, message: Mapping[str, Any]) -> None:
        raw_type = message.get("type") if isinstance(message, Mapping) else None
        try:
            kind = MessageType(raw_type)
        except ValueError:
            logger.warning("Unknown bridge message type: %r", raw_type)
            return

        try:
            await self._dispatch(kind, message)
        except Exception:
            logger.exception("Bridge command failed type=%s", kind.value)

    async def _dispatch(self, kind: MessageType, message: Mapping[str, Any]) -> None:
        if kind == MessageType.REQUEST_TASKS:
            await self.tasks.refresh()
            return

        if kind == MessageType.REQUEST_PLANS:
            await self.plans.refresh()
            return

        if kind == MessageType.REQUEST_WORKSPACE_FOLDERS:
            await self.post_workspace_folders()
            return

        if kind in (MessageType.OPEN_TASK_FILE, MessageType.OPEN_PLAN_FILE):
            file_path = _str_param(message, "filePath")
            if file_path is None:
                logger.warning("%s without filePath", kind.value)
                return
            await self.opener.open_file(file_path)
            return

        if kind == MessageType.COPY_PLAN_TO_FOLDER:
            source = _str_param(message, "sourcePath")
            target = _str_param(message, "targetFolderPath")
            if source is None or target is None:
                logger.warning("%s needs sourcePath and targetFolderPath", kind.value)
                return
            await self._copy(source, target)
            return

        if kind == MessageType.COPY_PLAN_TO_PROJECT:
            source = _str_param(message, "sourcePath")
            if source is None:
                logger.warning("%s without sourcePath", kind.value)
                return
            roots = list(self.workspace_roots.roots())
            if not roots:
                logger.warning("No workspace folder to copy %s into", source)
                return
            await self._copy(source, str(roots[0]))
            return

        if kind == MessageType.SEARCH_PLANS:
            query = message.get("query")
            query = query if isinstance(query, str) else ""
            results = self.plans.search(query)
            self._post(
                {
                    "type": MessageType.PLAN_SEARCH_RESULTS.value,
                    "query": query,
                    "plans": [p.to_payload() for p in results],
                }
            )
            return

        logger.warning("Bridge message %s is outbound-only; ignored", kind.value)

    async def post_workspace_folders(self) -> list[WorkspaceFolder]:
        roots = list(self.workspace_roots.roots())
        folders = await asyncio.to_thread(
            list_workspace_folders, roots, max_depth=self.workspace_max_depth
        )
        self._post(folders_message(folders))
        return folders

    async def _copy(self, source: str, target: str) -> None:
        copied = await self.copier.copy_plan(source, target)
        if copied:
            logger.info("Copied plan %s -> %s", source, target)
        else:
            logger.info("Plan copy %s -> %s skipped", source, target)

    def _post(self, message: Message) -> None:
        try:
            self.sink.post(message)
        except Exception:
            logger.exception("Sink rejected message type=%s", message.get("type"))
