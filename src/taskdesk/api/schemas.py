# src/taskdesk/api/schemas.py

"""Wire models for the task REST interface."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from ..tasks.task_models import NAME_MAX_LENGTH, Task


class TaskDto(BaseModel):
    """
    Task as it travels over HTTP.

    Used both by the server (responses) and by the client (decoding).
    Unknown fields are ignored so older clients keep working against newer servers.
    """

    model_config = ConfigDict(extra="ignore", from_attributes=True)

    id: int
    name: str
    created: str | None = None
    updated: str | None = None
    done: bool

    @classmethod
    def from_task(cls, task: Task) -> TaskDto:
        return cls.model_validate(task)

    def to_task(self) -> Task:
        return Task(
            id=self.id,
            name=self.name,
            created=self.created,
            updated=self.updated,
            done=self.done,
        )


class TaskUpdateRequest(BaseModel):
    """PUT body: the full task. `id` may be omitted but must match the path if given."""

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    id: int | None = None
    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    created: str | None = None
    updated: str | None = None
    done: bool = False


class TaskCreateRequest(BaseModel):
    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=NAME_MAX_LENGTH)
    done: bool = False
