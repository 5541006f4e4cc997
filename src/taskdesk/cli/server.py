# src/taskdesk/cli/server.py

"""
Task API server entrypoint (`taskdesk-server`).

Usage:
    taskdesk-server
    taskdesk-server --port 9000 --seed
    taskdesk-server --host 0.0.0.0 --db ./tasks.sqlite3
"""

from __future__ import annotations

import argparse
import dataclasses
import logging
from pathlib import Path

import uvicorn

from ..config import get_settings
from ..logging_setup import level_from_name, setup_logging
from .bootstrap import create_server_app

logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="taskdesk-server", description="Task REST API server")
    parser.add_argument("--host", default=settings.api_host, help=f"Host to bind (default: {settings.api_host})")
    parser.add_argument("--port", type=int, default=settings.api_port, help=f"Port to bind (default: {settings.api_port})")
    parser.add_argument("--db", type=Path, default=None, help="SQLite file (default: TASKDESK_TASKS_DB_PATH)")
    parser.add_argument("--seed", action="store_true", help="Insert demo tasks when the store is empty")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = _parse_args(argv)

    settings = get_settings()
    changes: dict[str, object] = {"api_host": args.host, "api_port": args.port}
    if args.db is not None:
        changes["tasks_db_path"] = args.db.expanduser()
    if args.seed:
        changes["seed_demo_tasks"] = True
    settings = dataclasses.replace(settings, **changes)

    setup_logging(log_dir=settings.data_dir, console_level=level_from_name(settings.log_level))

    logger.info(
        "Starting %s API on http://%s:%s (db=%s)",
        settings.app_name,
        settings.api_host,
        settings.api_port,
        settings.tasks_db_path,
    )

    app = create_server_app(settings=settings)

    # log_config=None: uvicorn's loggers propagate into our handlers.
    uvicorn.run(app, host=settings.api_host, port=settings.api_port, log_config=None)


if __name__ == "__main__":
    main()
