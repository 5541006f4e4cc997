# src/taskdesk/core/outcomes.py

"""
Outcome values returned by the task client.

The client never lets an exception cross into the screens. Every call ends in
one of:
- Ok(value)       the request succeeded and the body decoded
- NotFound(id)    GET of a single task answered 404
- Failure(...)    anything else, classified by FailureKind
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Generic, TypeVar

T = TypeVar("T")


class FailureKind(StrEnum):
    TRANSPORT = "transport"  # connection refused, timeout, client closed
    DECODE = "decode"  # body is not the JSON we expect
    NOT_FOUND = "not_found"  # 404 on a mutating call
    VALIDATION = "validation"  # 400 / 422
    SERVER = "server"  # 5xx or any other unexpected status

    @classmethod
    def from_status(cls, status_code: int) -> FailureKind:
        if status_code == 404:
            return cls.NOT_FOUND
        if status_code in (400, 422):
            return cls.VALIDATION
        return cls.SERVER


@dataclass(slots=True, frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(slots=True, frozen=True)
class NotFound:
    task_id: int


@dataclass(slots=True, frozen=True)
class Failure:
    kind: FailureKind
    message: str
    status_code: int | None = None


def friendly_failure_message(failure: Failure) -> str:
    """Human-readable text for a failure, safe to put on screen."""
    detail = (failure.message or "").strip()
    if failure.kind is FailureKind.TRANSPORT:
        base = "Brak połączenia z serwerem"
    elif failure.kind is FailureKind.DECODE:
        base = "Niepoprawna odpowiedź serwera"
    elif failure.kind is FailureKind.NOT_FOUND:
        base = "Task nie został znaleziony"
    elif failure.kind is FailureKind.VALIDATION:
        base = "Niepoprawne dane"
    else:
        base = "Błąd serwera"
    return f"{base}: {detail}" if detail else base
