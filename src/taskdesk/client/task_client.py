# src/taskdesk/client/task_client.py

from __future__ import annotations

import logging
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from ..api.schemas import TaskDto
from ..core.outcomes import Failure, FailureKind, NotFound, Ok
from ..tasks.task_models import Task

logger = logging.getLogger(__name__)

_TASK_LIST = TypeAdapter(list[TaskDto])

TASKS_PATH = "/api/tasks"


def _make_timeout(timeout_s: float) -> httpx.Timeout:
    connect_s = min(5.0, timeout_s)
    return httpx.Timeout(connect=connect_s, read=timeout_s, write=timeout_s, pool=connect_s)


def _error_detail(response: httpx.Response) -> str:
    """Best-effort extraction of FastAPI's {"detail": ...} from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.text[:200]
    if isinstance(body, dict) and "detail" in body:
        detail = body["detail"]
        return detail if isinstance(detail, str) else str(detail)[:200]
    return response.text[:200]


class TaskClient:
    """
    Async client for the task REST interface.

    Behavior:
    - Every operation is exactly one HTTP round trip; no retries, no caching.
    - Nothing raises: every failure comes back as a Failure (or NotFound for
      a missing task on get_task).
    - The client owns one httpx.AsyncClient; aclose() releases it once and any
      later call fails fast with FailureKind.TRANSPORT.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._http = httpx.AsyncClient(
            base_url=self._base_url,
            timeout=_make_timeout(float(timeout)),
            transport=transport,
            headers={"Accept": "application/json"},
        )
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self._http.aclose()
        logger.debug("TaskClient closed base_url=%s", self._base_url)

    async def __aenter__(self) -> TaskClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    async def _send(self, method: str, path: str, **kwargs: Any) -> httpx.Response | Failure:
        if self._closed:
            return Failure(FailureKind.TRANSPORT, "client is closed")
        try:
            return await self._http.request(method, path, **kwargs)
        except httpx.TimeoutException as e:
            logger.info("%s %s timed out: %s", method, path, e)
            return Failure(FailureKind.TRANSPORT, "request timed out")
        except httpx.HTTPError as e:
            logger.info("%s %s failed: %s", method, path, e.__class__.__name__)
            return Failure(FailureKind.TRANSPORT, str(e) or e.__class__.__name__)
        except RuntimeError as e:
            # httpx raises RuntimeError when the pool is closed under an in-flight request.
            if not self._closed:
                raise
            logger.debug("%s %s aborted by close: %s", method, path, e)
            return Failure(FailureKind.TRANSPORT, "client is closed")

    @staticmethod
    def _status_failure(method: str, path: str, response: httpx.Response) -> Failure:
        kind = FailureKind.from_status(response.status_code)
        detail = _error_detail(response)
        log = logger.warning if kind is FailureKind.SERVER else logger.info
        log("%s %s -> HTTP %s: %s", method, path, response.status_code, detail)
        return Failure(kind, detail or f"HTTP {response.status_code}", response.status_code)

    @staticmethod
    def _decode_task(response: httpx.Response) -> Ok[Task] | Failure:
        try:
            return Ok(TaskDto.model_validate_json(response.content).to_task())
        except ValidationError as e:
            logger.warning("Malformed task body: %s", e.errors()[:1])
            return Failure(FailureKind.DECODE, "malformed task", response.status_code)

    async def _task_call(self, method: str, path: str, **kwargs: Any) -> Ok[Task] | Failure:
        result = await self._send(method, path, **kwargs)
        if isinstance(result, Failure):
            return result
        if not result.is_success:
            return self._status_failure(method, path, result)
        return self._decode_task(result)

    # ---- public API ----

    async def list_tasks(self) -> Ok[list[Task]] | Failure:
        result = await self._send("GET", TASKS_PATH)
        if isinstance(result, Failure):
            return result
        if not result.is_success:
            return self._status_failure("GET", TASKS_PATH, result)
        try:
            dtos = _TASK_LIST.validate_json(result.content)
        except ValidationError as e:
            logger.warning("Malformed task list body: %s", e.errors()[:1])
            return Failure(FailureKind.DECODE, "malformed task list", result.status_code)
        return Ok([d.to_task() for d in dtos])

    async def get_task(self, task_id: int) -> Ok[Task] | NotFound | Failure:
        path = f"{TASKS_PATH}/{int(task_id)}"
        result = await self._send("GET", path)
        if isinstance(result, Failure):
            return result
        if result.status_code == 404:
            logger.info("GET %s -> not found", path)
            return NotFound(int(task_id))
        if not result.is_success:
            return self._status_failure("GET", path, result)
        return self._decode_task(result)

    async def update_task(self, task: Task) -> Ok[Task] | Failure:
        payload = TaskDto.from_task(task).model_dump(mode="json")
        return await self._task_call("PUT", f"{TASKS_PATH}/{int(task.id)}", json=payload)

    async def mark_task_done(self, task_id: int) -> Ok[Task] | Failure:
        return await self._task_call("PATCH", f"{TASKS_PATH}/{int(task_id)}/done")

    async def create_task(self, name: str) -> Ok[Task] | Failure:
        return await self._task_call("POST", TASKS_PATH, json={"name": name})
