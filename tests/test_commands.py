# tests/test_commands.py

from __future__ import annotations

import asyncio

import pytest

from taskdesk.cli.commands import BUSY_MESSAGE, CommandRegistry, registry
from taskdesk.core.state import AppState
from taskdesk.views.screens import DetailScreen, ListScreen

from .fakes import ECHO_STAMP, FakeGateway, transport_failure


@pytest.mark.asyncio
async def test_command_registry_routes_aliases(state: AppState) -> None:
    reg = CommandRegistry()
    called: list[list[str]] = []

    async def handler(state, args):
        called.append(args)
        return "ok"

    reg.register("go", handler, "go somewhere", aliases=["g"])

    assert await reg.handle(state, "/go a b") == "ok"
    assert await reg.handle(state, "/G") == "ok"
    assert called == [["a", "b"], []]
    assert "/go - go somewhere" in reg.build_help()


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state: AppState) -> None:
    reg = CommandRegistry()
    assert "start with '/'" in (await reg.handle(state, "hello") or "")
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")
    assert "Empty command" in (await reg.handle(state, "/") or "")


@pytest.mark.asyncio
async def test_list_renders_rows(state: AppState, output: list[str]) -> None:
    assert await registry.handle(state, "/list") is None

    assert isinstance(state.screen, ListScreen)
    assert "Buy milk" in output[-1]
    assert "Do zrobienia" in output[-1]


@pytest.mark.asyncio
async def test_edit_flow_and_back(
    state: AppState, gateways: list[FakeGateway], output: list[str]
) -> None:
    await registry.handle(state, "/open 1")
    detail_gw = gateways[-1]
    assert isinstance(state.screen, DetailScreen)

    assert await registry.handle(state, "/edit") is None
    assert await registry.handle(state, "/name Buy  oat milk") is None
    assert state.screen.state.draft_name == "Buy  oat milk"

    assert await registry.handle(state, "/save") is None
    assert state.screen.state.task.name == "Buy  oat milk"
    assert ECHO_STAMP in output[-1]

    assert await registry.handle(state, "/back") is None
    assert isinstance(state.screen, ListScreen)
    assert detail_gw.close_count == 1
    assert "Buy  oat milk" in output[-1]


@pytest.mark.asyncio
async def test_done_on_done_task_is_refused(state: AppState, gateways: list[FakeGateway]) -> None:
    await registry.handle(state, "/open 2")

    assert await registry.handle(state, "/done") == "Task is already done."
    assert gateways[-1].ops() == ["get"]


@pytest.mark.asyncio
async def test_mark_done_command(state: AppState, output: list[str]) -> None:
    await registry.handle(state, "/open 1")

    assert await registry.handle(state, "/done") is None

    assert "Wykonany" in output[-1]
    assert "/done" not in output[-1]


@pytest.mark.asyncio
async def test_detail_commands_need_open_task(state: AppState) -> None:
    await registry.handle(state, "/list")

    for line in ("/edit", "/name x", "/save", "/cancel", "/done"):
        assert await registry.handle(state, line) == "Open a task first: /open <id>"


@pytest.mark.asyncio
async def test_open_usage_errors(state: AppState) -> None:
    assert await registry.handle(state, "/open") == "Usage: /open <id>"
    assert await registry.handle(state, "/open abc") == "Not a task id: abc"
    assert state.screen is None


@pytest.mark.asyncio
async def test_open_missing_task(state: AppState, output: list[str]) -> None:
    await registry.handle(state, "/open 42")

    assert "Task nie został znaleziony" in output[-1]


@pytest.mark.asyncio
async def test_new_creates_and_reloads(state: AppState, output: list[str]) -> None:
    assert await registry.handle(state, "/new") == "Usage: /new <name>"

    assert await registry.handle(state, "/new Write report") is None

    assert isinstance(state.screen, ListScreen)
    assert "Write report" in output[-1]


@pytest.mark.asyncio
async def test_save_while_busy_is_rejected(state: AppState, gateways: list[FakeGateway]) -> None:
    await registry.handle(state, "/open 1")
    await registry.handle(state, "/edit")
    gw = gateways[-1]
    gw.gate = asyncio.Event()

    pending = asyncio.create_task(registry.handle(state, "/save"))
    await asyncio.sleep(0)

    assert await registry.handle(state, "/save") == BUSY_MESSAGE
    gw.gate.set()
    assert await pending is None
    assert gw.ops() == ["get", "update"]


@pytest.mark.asyncio
async def test_shutdown_closes_current_screen(state: AppState, gateways: list[FakeGateway]) -> None:
    await registry.handle(state, "/list")
    await state.shutdown()

    assert state.screen is None
    assert [g.close_count for g in gateways] == [1]


@pytest.mark.asyncio
async def test_refresh_after_failed_save_keeps_draft(
    state: AppState, gateways: list[FakeGateway]
) -> None:
    await registry.handle(state, "/open 1")
    gw = gateways[-1]
    gw.failures["update"] = transport_failure()
    await registry.handle(state, "/edit")
    await registry.handle(state, "/name Buy oat milk")
    await registry.handle(state, "/save")

    reply = await registry.handle(state, "/refresh")

    assert reply == "Task is already loaded. Use /back to reload the list."
    assert state.screen.state.draft_name == "Buy oat milk"
    assert gw.ops() == ["get", "update"]


@pytest.mark.asyncio
async def test_retry_reloads_missing_task(state: AppState, gateways: list[FakeGateway]) -> None:
    await registry.handle(state, "/open 42")

    assert await registry.handle(state, "/retry") is None
    assert gateways[-1].ops() == ["get", "get"]


@pytest.mark.asyncio
async def test_navigation_keeps_only_current_screen(
    state: AppState, gateways: list[FakeGateway]
) -> None:
    for line in ("/list", "/open 1", "/back", "/open 2", "/list"):
        await registry.handle(state, line)

    assert isinstance(state.screen, ListScreen)
    assert [g.close_count for g in gateways] == [1, 1, 1, 1, 0]
    assert not hasattr(state, "history")
