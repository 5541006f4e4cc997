# src/taskdesk/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the API layer and the screens.

Both sides depend on Protocols instead of concrete implementations:
- the FastAPI router talks to a TaskRepo (SQLite TaskStore in production),
- the screens talk to a TaskGateway (httpx TaskClient in production).
This keeps storage and transport swappable and makes testing easier.
"""

from typing import Protocol

from ..tasks.task_models import Task
from .outcomes import Failure, NotFound, Ok


class TaskRepo(Protocol):
    """Backend persistence contract (owned by the server)."""

    def list_tasks(self) -> list[Task]: ...
    def get_task(self, task_id: int) -> Task | None: ...
    def add_task(self, name: str, *, done: bool = False) -> Task: ...
    def update_task(self, task_id: int, *, name: str, done: bool) -> Task | None: ...
    def mark_done(self, task_id: int) -> Task | None: ...
    def delete_task(self, task_id: int) -> bool: ...


class TaskGateway(Protocol):
    """
    Client-side data access used by the screens.

    Every call is one round trip and returns an outcome value; nothing raises.
    """

    async def list_tasks(self) -> Ok[list[Task]] | Failure: ...
    async def get_task(self, task_id: int) -> Ok[Task] | NotFound | Failure: ...
    async def update_task(self, task: Task) -> Ok[Task] | Failure: ...
    async def mark_task_done(self, task_id: int) -> Ok[Task] | Failure: ...
    async def create_task(self, name: str) -> Ok[Task] | Failure: ...
    async def aclose(self) -> None: ...
