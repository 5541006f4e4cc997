# tests/test_task_client.py

from __future__ import annotations

import json

import httpx
import pytest

from taskdesk.client.task_client import TaskClient
from taskdesk.core.outcomes import Failure, FailureKind, NotFound, Ok
from taskdesk.tasks.task_models import Task
from taskdesk.tasks.task_store import TaskStore


def _mock_client(handler) -> TaskClient:
    return TaskClient("http://tasks.local", transport=httpx.MockTransport(handler))


# --------------------------------------------------------------------------------------
# Against the real app (ASGI, in-process)
# --------------------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_list_and_get(client: TaskClient, store: TaskStore) -> None:
    t1 = store.add_task("Buy milk")
    store.add_task("Walk the dog")

    listed = await client.list_tasks()
    got = await client.get_task(t1.id)

    assert isinstance(listed, Ok)
    assert [t.name for t in listed.value] == ["Buy milk", "Walk the dog"]
    assert got == Ok(t1)


@pytest.mark.asyncio
async def test_get_missing_is_not_found_not_failure(client: TaskClient) -> None:
    result = await client.get_task(999)

    assert result == NotFound(999)
    assert not isinstance(result, Failure)


@pytest.mark.asyncio
async def test_update_then_get_returns_edited_name(client: TaskClient, store: TaskStore) -> None:
    task = store.add_task("Buy milk")

    updated = await client.update_task(task.with_name("Buy oat milk"))
    fetched = await client.get_task(task.id)

    assert isinstance(updated, Ok)
    assert updated.value.name == "Buy oat milk"
    assert updated.value.updated is not None
    assert isinstance(fetched, Ok)
    assert fetched.value.name == "Buy oat milk"


@pytest.mark.asyncio
async def test_mark_done_twice_keeps_identity(client: TaskClient, store: TaskStore) -> None:
    task = store.add_task("Buy milk")

    first = await client.mark_task_done(task.id)
    second = await client.mark_task_done(task.id)

    assert isinstance(first, Ok) and isinstance(second, Ok)
    assert second.value.done is True
    assert (second.value.id, second.value.name, second.value.created) == (
        task.id,
        task.name,
        task.created,
    )


@pytest.mark.asyncio
async def test_create(client: TaskClient, store: TaskStore) -> None:
    result = await client.create_task("Write report")

    assert isinstance(result, Ok)
    assert store.get_task(result.value.id) == result.value


@pytest.mark.asyncio
async def test_update_missing_is_not_found_failure(client: TaskClient) -> None:
    result = await client.update_task(Task(id=77, name="ghost"))

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.NOT_FOUND
    assert result.status_code == 404


@pytest.mark.asyncio
async def test_update_with_empty_name_is_validation_failure(client: TaskClient, store: TaskStore) -> None:
    task = store.add_task("Buy milk")

    result = await client.update_task(task.with_name(""))

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.VALIDATION
    assert result.status_code == 400


# --------------------------------------------------------------------------------------
# Transport-level behavior (MockTransport)
# --------------------------------------------------------------------------------------


@pytest.mark.asyncio
async def test_connection_error_becomes_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    async with _mock_client(handler) as client:
        listed = await client.list_tasks()
        got = await client.get_task(1)

    assert isinstance(listed, Failure) and listed.kind is FailureKind.TRANSPORT
    assert isinstance(got, Failure) and got.kind is FailureKind.TRANSPORT


@pytest.mark.asyncio
async def test_timeout_becomes_transport_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ReadTimeout("slow", request=request)

    async with _mock_client(handler) as client:
        result = await client.mark_task_done(1)

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.TRANSPORT


@pytest.mark.asyncio
async def test_malformed_body_becomes_decode_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/api/tasks":
            return httpx.Response(200, json={"not": "a list"})
        return httpx.Response(200, content=b"<html>oops</html>")

    async with _mock_client(handler) as client:
        listed = await client.list_tasks()
        got = await client.get_task(1)

    assert isinstance(listed, Failure) and listed.kind is FailureKind.DECODE
    assert isinstance(got, Failure) and got.kind is FailureKind.DECODE


@pytest.mark.asyncio
async def test_server_error_becomes_server_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503, json={"detail": "maintenance"})

    async with _mock_client(handler) as client:
        result = await client.list_tasks()

    assert isinstance(result, Failure)
    assert result.kind is FailureKind.SERVER
    assert result.status_code == 503
    assert result.message == "maintenance"


@pytest.mark.asyncio
async def test_unknown_fields_are_ignored() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200,
            json=[{"id": 1, "name": "Buy milk", "done": False, "priority": "high", "tags": []}],
        )

    async with _mock_client(handler) as client:
        result = await client.list_tasks()

    assert result == Ok([Task(id=1, name="Buy milk", done=False)])


@pytest.mark.asyncio
async def test_put_sends_full_task() -> None:
    seen: list[dict] = []

    def handler(request: httpx.Request) -> httpx.Response:
        body = json.loads(request.content)
        seen.append({"method": request.method, "path": request.url.path, "body": body})
        return httpx.Response(200, json={**body, "updated": "2024-01-02T10:00:00"})

    async with _mock_client(handler) as client:
        result = await client.update_task(Task(id=1, name="Buy oat milk", created="2024-01-01T09:00:00"))

    assert seen == [
        {
            "method": "PUT",
            "path": "/api/tasks/1",
            "body": {
                "id": 1,
                "name": "Buy oat milk",
                "created": "2024-01-01T09:00:00",
                "updated": None,
                "done": False,
            },
        }
    ]
    assert isinstance(result, Ok)
    assert result.value.updated == "2024-01-02T10:00:00"


@pytest.mark.asyncio
async def test_closed_client_fails_fast_and_close_is_idempotent() -> None:
    calls: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append(request)
        return httpx.Response(200, json=[])

    client = _mock_client(handler)
    await client.aclose()
    await client.aclose()

    result = await client.list_tasks()

    assert client.closed
    assert isinstance(result, Failure) and result.kind is FailureKind.TRANSPORT
    assert calls == []


@pytest.mark.asyncio
async def test_get_out_of_range_id_is_not_found(client: TaskClient) -> None:
    huge = 99999999999999999999

    assert await client.get_task(huge) == NotFound(huge)
