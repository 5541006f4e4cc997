# src/taskdesk/cli/commands.py

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable

from ..core.state import AppState
from ..views.screens import DetailScreen, ListScreen

CommandHandler = Callable[[AppState, list[str]], Awaitable[str | None]]

logger = logging.getLogger(__name__)

BUSY_MESSAGE = "Operation in progress, try again in a moment."


class CommandRegistry:
    """Simple slash-command registry used by the console connector (/help, /open, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(self, state: AppState, line: str) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string, or None when the command's output is the
        re-rendered screen itself (or the line is not a command at all).
        """
        if not line.startswith("/"):
            return "Commands start with '/'. Use /help to list available commands."

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        # /name keeps the raw remainder so spaces in the draft survive.
        rest = line[1 + len(parts[0]) :].strip()
        args = [rest] if name == "name" else parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def _detail(state: AppState) -> DetailScreen | None:
    return state.screen if isinstance(state.screen, DetailScreen) else None


async def cmd_help(state: AppState, args: list[str]) -> str | None:
    return registry.build_help()


async def cmd_list(state: AppState, args: list[str]) -> str | None:
    await state.show_list()
    return None


async def cmd_refresh(state: AppState, args: list[str]) -> str | None:
    screen = state.screen
    if isinstance(screen, ListScreen):
        return None if await screen.refresh() else BUSY_MESSAGE
    if isinstance(screen, DetailScreen):
        if screen.busy:
            return BUSY_MESSAGE
        if await screen.retry():
            return None
        return "Task is already loaded. Use /back to reload the list."
    await state.show_list()
    return None


async def cmd_new(state: AppState, args: list[str]) -> str | None:
    """
    /new <name>  -> create a task and reload the list
    """
    name = " ".join(args).strip()
    if not name:
        return "Usage: /new <name>"
    if not isinstance(state.screen, ListScreen):
        await state.show_list()
    screen = state.screen
    assert isinstance(screen, ListScreen)
    return None if await screen.create_task(name) else BUSY_MESSAGE


async def cmd_open(state: AppState, args: list[str]) -> str | None:
    """
    /open <id>  -> show task detail
    """
    if not args:
        return "Usage: /open <id>"
    try:
        task_id = int(args[0])
    except ValueError:
        return f"Not a task id: {args[0]}"
    await state.show_detail(task_id)
    return None


async def cmd_edit(state: AppState, args: list[str]) -> str | None:
    screen = _detail(state)
    if screen is None:
        return "Open a task first: /open <id>"
    return None if screen.start_edit() else "Nothing to edit right now."


async def cmd_name(state: AppState, args: list[str]) -> str | None:
    """
    /name <text>  -> replace the draft name while editing
    """
    screen = _detail(state)
    if screen is None:
        return "Open a task first: /open <id>"
    text = args[0] if args else ""
    return None if screen.change_draft(text) else "Start editing first: /edit"


async def cmd_save(state: AppState, args: list[str]) -> str | None:
    screen = _detail(state)
    if screen is None:
        return "Open a task first: /open <id>"
    if screen.busy:
        return BUSY_MESSAGE
    return None if await screen.save() else "Nothing to save. Use /edit first."


async def cmd_cancel(state: AppState, args: list[str]) -> str | None:
    screen = _detail(state)
    if screen is None:
        return "Open a task first: /open <id>"
    return None if screen.cancel_edit() else "Not editing."


async def cmd_done(state: AppState, args: list[str]) -> str | None:
    screen = _detail(state)
    if screen is None:
        return "Open a task first: /open <id>"
    if screen.busy:
        return BUSY_MESSAGE
    task = screen.state.task
    if task is not None and task.done:
        return "Task is already done."
    return None if await screen.mark_done() else "Cannot mark done right now."


async def cmd_back(state: AppState, args: list[str]) -> str | None:
    await state.go_back()
    return None


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("list", cmd_list, help_text="Show the task list.", aliases=["ls"])
registry.register("refresh", cmd_refresh, help_text="Reload the current screen.", aliases=["retry", "r"])
registry.register("new", cmd_new, help_text="Create a task: /new <name>.")
registry.register("open", cmd_open, help_text="Open task detail: /open <id>.")
registry.register("edit", cmd_edit, help_text="Start editing the task name.")
registry.register("name", cmd_name, help_text="Set the draft name: /name <text>.")
registry.register("save", cmd_save, help_text="Save the edited name.")
registry.register("cancel", cmd_cancel, help_text="Discard the draft.")
registry.register("done", cmd_done, help_text="Mark the task as done.")
registry.register("back", cmd_back, help_text="Back to the task list (unsaved draft is lost).")
