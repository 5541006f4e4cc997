# src/taskdesk/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

# Longest name the store accepts (mirrors the server-side column constraint).
NAME_MAX_LENGTH = 50


def now_iso() -> str:
    """Local wall-clock timestamp, second precision: 2024-01-02T10:00:00."""
    return datetime.now().isoformat(timespec="seconds")


@dataclass(slots=True, frozen=True)
class Task:
    """
    A single to-do record.

    Notes:
    - id is assigned by the store and never changes.
    - created/updated are ISO strings set by the store; None means "unknown".
    - done only ever moves False -> True.
    """

    id: int
    name: str
    done: bool = False
    created: str | None = None
    updated: str | None = None

    def with_name(self, name: str) -> Task:
        return replace(self, name=name)
