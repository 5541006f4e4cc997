# src/taskdesk/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.state import AppState

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


async def _read_line(prompt: str) -> str:
    # input() blocks; keep the event loop (and in-flight requests) alive.
    return await asyncio.to_thread(input, prompt)


async def run_console_loop(state: AppState) -> None:
    app_name = str(getattr(state.settings, "app_name", "taskdesk"))
    logger.info("Console connector started (%s).", app_name)
    _print_ts(f"[{app_name}] Use /help for commands. Use /exit to quit.\n")

    await state.show_list()

    while True:
        try:
            user_input = (await _read_line(">>> ")).strip()
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        if not user_input:
            continue

        if user_input.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            reply = await command_registry.handle(state, user_input)
        except Exception:
            logger.exception("Command handler crashed.")
            reply = "Internal error while handling a command."

        if reply is not None:
            _print_ts(reply)

    await state.shutdown()
    logger.info("Console connector finished.")
