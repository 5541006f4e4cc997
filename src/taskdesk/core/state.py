# src/taskdesk/core/state.py

"""
Console application state and screen navigation.

Exactly one screen is active at a time. Entering a screen gives it a fresh
gateway (its own connection); leaving it closes the screen, which releases
that connection and drops any late results.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from ..views.render import render_detail, render_list
from ..views.screens import DetailScreen, ListScreen
from .ports import TaskGateway

logger = logging.getLogger(__name__)

Emitter = Callable[[str], None]


@dataclass
class AppState:
    settings: object
    gateway_factory: Callable[[], TaskGateway]
    emit: Emitter = print

    screen: ListScreen | DetailScreen | None = None
    back_requested: bool = False

    async def _leave_current(self) -> None:
        if self.screen is not None:
            await self.screen.close()
            self.screen = None
        self.back_requested = False

    async def show_list(self) -> ListScreen:
        await self._leave_current()
        screen = ListScreen(self.gateway_factory())
        screen.subscribe(lambda s: self.emit(render_list(s)))
        self.screen = screen
        logger.debug("Navigate -> list")
        await screen.mount()
        return screen

    async def show_detail(self, task_id: int) -> DetailScreen:
        await self._leave_current()
        screen = DetailScreen(
            self.gateway_factory(),
            task_id,
            on_navigate_back=self._request_back,
        )
        screen.subscribe(lambda s: self.emit(render_detail(s)))
        self.screen = screen
        logger.debug("Navigate -> detail %s", task_id)
        await screen.mount()
        return screen

    def _request_back(self) -> None:
        self.back_requested = True

    async def go_back(self) -> None:
        """Leave the detail screen for the list (no-op on the list itself)."""
        if isinstance(self.screen, DetailScreen):
            self.screen.navigate_back()
        if self.back_requested or self.screen is None:
            await self.show_list()

    async def shutdown(self) -> None:
        await self._leave_current()
