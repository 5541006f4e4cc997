# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI
from fastapi.testclient import TestClient

from taskdesk.api.app import create_app
from taskdesk.client.task_client import TaskClient
from taskdesk.config import Settings
from taskdesk.core.state import AppState
from taskdesk.tasks.task_models import Task
from taskdesk.tasks.task_store import TaskStore

from .fakes import FakeGateway


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    """
    Settings pointing at a per-test data dir.

    Built directly instead of from the environment to keep tests deterministic.
    """
    return Settings(
        app_name="taskdesk-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        tasks_db_path=tmp_path / "data" / "tasks.sqlite3",
        api_host="127.0.0.1",
        api_port=8080,
        seed_demo_tasks=False,
        api_base_url="http://testserver",
        http_timeout_seconds=5.0,
    )


@pytest.fixture()
def store(tmp_path: Path) -> TaskStore:
    return TaskStore(tmp_path / "tasks.sqlite3")


@pytest.fixture()
def app(store: TaskStore) -> FastAPI:
    return create_app(store)


@pytest.fixture()
def api(app: FastAPI) -> TestClient:
    return TestClient(app)


@pytest_asyncio.fixture()
async def client(app: FastAPI):
    """TaskClient wired to the real app in-process (no sockets)."""
    async with TaskClient("http://testserver", transport=httpx.ASGITransport(app=app)) as c:
        yield c


@pytest.fixture()
def gateways() -> list[FakeGateway]:
    """Every gateway handed out by the `state` fixture, in order."""
    return []


@pytest.fixture()
def output() -> list[str]:
    """Everything the `state` fixture emitted (rendered screens)."""
    return []


@pytest.fixture()
def state(settings: Settings, gateways: list[FakeGateway], output: list[str]) -> AppState:
    """
    AppState wired with fake gateways over one shared task table.

    Each screen still gets its own gateway, so close accounting stays per screen.
    """
    table = {
        1: Task(id=1, name="Buy milk", created="2024-01-01T09:00:00"),
        2: Task(id=2, name="Old", created="2024-01-01T09:00:00", done=True),
    }

    def factory() -> FakeGateway:
        gw = FakeGateway(table)
        gateways.append(gw)
        return gw

    return AppState(settings=settings, gateway_factory=factory, emit=output.append)
