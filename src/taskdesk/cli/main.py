# src/taskdesk/cli/main.py

"""
Console client entrypoint (`taskdesk`).

Initializes logging, builds AppState, then runs the console connector until
/exit, EOF or Ctrl+C. Every screen opens (and closes) its own HTTP client.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging

from ..config import get_settings
from ..connectors.console_connector import run_console_loop
from ..logging_setup import level_from_name, setup_logging
from .bootstrap import create_initial_state

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="taskdesk", description="Task list console client")
    parser.add_argument("--base-url", default=None, help="Task API base URL (default: TASKDESK_API_BASE_URL)")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)
    settings = get_settings()
    if args.base_url:
        settings = dataclasses.replace(settings, api_base_url=args.base_url.rstrip("/"))

    # Console is for the screens; keep our own logs at WARNING there, full detail in the file.
    console_level = max(level_from_name(settings.log_level), logging.WARNING)
    setup_logging(log_dir=settings.data_dir, console_level=console_level, log_file_name="client.log")

    logger.info("Starting %s console against %s", settings.app_name, settings.api_base_url)

    state = create_initial_state(settings=settings)
    try:
        asyncio.run(run_console_loop(state))
    except KeyboardInterrupt:
        logger.info("Interrupted.")
    finally:
        logger.info("Bye.")


if __name__ == "__main__":
    main()
