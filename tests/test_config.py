# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from taskdesk.config import Settings

_VARS = (
    "APP_NAME",
    "LOG_LEVEL",
    "DATA_DIR",
    "TASKS_DB_PATH",
    "API_HOST",
    "API_PORT",
    "SEED_DEMO_TASKS",
    "API_BASE_URL",
    "HTTP_TIMEOUT_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for suffix in _VARS:
        monkeypatch.delenv(f"TASKDESK_{suffix}", raising=False)


def test_defaults() -> None:
    s = Settings.from_env()

    assert s.app_name == "taskdesk"
    assert s.api_port == 8080
    assert s.seed_demo_tasks is False
    assert s.tasks_db_path == Path(".local/taskdesk") / "tasks.sqlite3"
    assert s.api_base_url == "http://127.0.0.1:8080"
    assert s.http_timeout_seconds == 10.0


def test_base_url_follows_host_and_port(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKDESK_API_HOST", "0.0.0.0")
    monkeypatch.setenv("TASKDESK_API_PORT", "9000")

    assert Settings.from_env().api_base_url == "http://0.0.0.0:9000"


def test_explicit_base_url_wins(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKDESK_API_BASE_URL", "http://tasks.example:8000/")

    assert Settings.from_env().api_base_url == "http://tasks.example:8000"


def test_bad_numbers_fall_back(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TASKDESK_API_PORT", "eighty")
    monkeypatch.setenv("TASKDESK_HTTP_TIMEOUT_SECONDS", "0")

    s = Settings.from_env()

    assert s.api_port == 8080
    assert s.http_timeout_seconds == 0.1


def test_paths_and_flags(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("TASKDESK_DATA_DIR", str(tmp_path))
    monkeypatch.setenv("TASKDESK_SEED_DEMO_TASKS", "yes")

    s = Settings.from_env()

    assert s.data_dir == tmp_path
    assert s.tasks_db_path == tmp_path / "tasks.sqlite3"
    assert s.seed_demo_tasks is True
