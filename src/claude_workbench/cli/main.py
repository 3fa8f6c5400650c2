# src/claude_workbench/cli/main.py

"""
CLI entrypoint.

Initializes logging, builds AppState, starts both aggregators, then either:
- runs the console REPL (default), or
- just prints live updates until SIGINT/SIGTERM (console disabled).
"""

from __future__ import annotations

import asyncio
import logging
import signal

from ..cli.bootstrap import create_app_state
from ..config import get_settings
from ..connectors.actions import ConfirmingPlanCopier
from ..connectors.console_connector import ConsoleRenderer, StdinLines, run_console_loop
from ..core.state import AppState
from ..logging_setup import setup_logging

logger = logging.getLogger(__name__)


async def _shutdown(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    try:
        await state.shutdown()
    except Exception:
        logger.exception("Shutdown failed.")


def _install_signal_handlers(loop: asyncio.AbstractEventLoop, stop: asyncio.Event) -> None:
    def _handle_signal(signum: int) -> None:
        logger.info("Signal %s received, shutting down...", signum)
        stop.set()

    for signum in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(signum, _handle_signal, signum)
        except (NotImplementedError, RuntimeError):
            # Windows event loops do not support add_signal_handler.
            logger.debug("No signal handler for %s on this platform", signum)


async def run_app(settings) -> None:
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    _install_signal_handlers(loop, stop)

    lines = StdinLines(loop) if settings.console_enabled else None
    copier = ConfirmingPlanCopier(lines.confirm_overwrite if lines is not None else None)

    # IMPORTANT: reuse same settings object
    state = create_app_state(settings=settings, sink=ConsoleRenderer(), copier=copier)

    try:
        await state.start()
        if lines is not None:
            lines.start()
            await run_console_loop(state, lines, stop)
        else:
            logger.info("Console disabled. Printing live updates only. Press Ctrl+C to stop.")
            await stop.wait()
    finally:
        await _shutdown(state)
        logger.info("Bye.")


def main() -> None:
    settings = get_settings()

    # choose console log level from settings.log_level
    level_name = str(getattr(settings, "log_level", "INFO")).upper()
    console_level = getattr(logging, level_name, logging.INFO)

    setup_logging(log_dir=settings.data_dir, console_level=console_level)

    logger.info(
        "Starting %s (tasks=%s, plans=%s)...",
        settings.app_name,
        settings.tasks_dir,
        settings.plans_dir,
    )

    try:
        asyncio.run(run_app(settings))
    except KeyboardInterrupt:
        logger.info("Interrupted.")


if __name__ == "__main__":
    main()
