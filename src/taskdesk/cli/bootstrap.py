# src/taskdesk/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures local (gitignored) directories exist,
- wires the SQLite store into the FastAPI app (server side),
- wires a per-screen TaskClient factory into AppState (console side).
"""

from __future__ import annotations

import logging
from collections.abc import Callable

import httpx
from fastapi import FastAPI

from ..api.app import create_app
from ..client.task_client import TaskClient
from ..config import Settings, get_settings
from ..core.ports import TaskGateway
from ..core.state import AppState
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)

DEMO_TASKS: tuple[tuple[str, bool], ...] = (
    ("Buy milk", False),
    ("Write the weekly report", False),
    ("Water the plants", True),
)


def _ensure_local_dirs(settings: Settings) -> None:
    settings.data_dir.mkdir(parents=True, exist_ok=True)
    settings.tasks_db_path.parent.mkdir(parents=True, exist_ok=True)


def seed_demo_tasks(store: TaskStore) -> int:
    """Insert a few demo tasks into an empty store. Returns how many were added."""
    if store.count_tasks() > 0:
        return 0
    for name, done in DEMO_TASKS:
        store.add_task(name, done=done)
    logger.info("Seeded %d demo tasks into %s", len(DEMO_TASKS), store.db_path)
    return len(DEMO_TASKS)


def create_server_app(*, settings: Settings | None = None, seed: bool | None = None) -> FastAPI:
    """
    Build the API app over the configured SQLite store.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)
    store = TaskStore(settings.tasks_db_path)

    if settings.seed_demo_tasks if seed is None else seed:
        seed_demo_tasks(store)

    return create_app(store, title=settings.app_name)


def make_gateway_factory(
    settings: Settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> Callable[[], TaskGateway]:
    """Every call yields a new TaskClient, so no two screens share a connection."""

    def _factory() -> TaskGateway:
        return TaskClient(
            settings.api_base_url,
            timeout=settings.http_timeout_seconds,
            transport=transport,
        )

    return _factory


def create_initial_state(*, settings: Settings | None = None) -> AppState:
    if settings is None:
        settings = get_settings()
    _ensure_local_dirs(settings)
    return AppState(settings=settings, gateway_factory=make_gateway_factory(settings))
