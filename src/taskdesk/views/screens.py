# src/taskdesk/views/screens.py

"""
Screen controllers.

A screen owns:
- one TaskGateway (its own connection, released exactly once by close()),
- one CancelToken (cancelled by close(); late results are dropped),
- the current immutable view state plus the listeners that render it.

Key invariants:
- at most one network operation per screen is in flight; re-entrant triggers
  are rejected (the action returns False and state is untouched),
- results are applied only through the reducer and only while the token is live,
- nothing here raises on network trouble: the gateway returns outcome values.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Generic, TypeVar

from ..core.outcomes import Failure, NotFound, Ok, friendly_failure_message
from ..core.ports import TaskGateway
from .state import (
    DetailEvent,
    DetailLoaded,
    DetailLoadFailed,
    DetailLoadStarted,
    DetailMissing,
    DetailMode,
    DetailPhase,
    DetailViewState,
    DraftChanged,
    EditCancelled,
    EditStarted,
    ListEvent,
    ListLoaded,
    ListLoadFailed,
    ListLoadStarted,
    ListViewState,
    MarkDoneFailed,
    MarkDoneStarted,
    MarkDoneSucceeded,
    SaveFailed,
    SaveStarted,
    SaveSucceeded,
    reduce_detail,
    reduce_list,
)

logger = logging.getLogger(__name__)

S = TypeVar("S")
E = TypeVar("E")

StateListener = Callable[[S], None]


class CancelToken:
    """One-way flag: once cancelled, stays cancelled."""

    __slots__ = ("_cancelled",)

    def __init__(self) -> None:
        self._cancelled = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled

    def cancel(self) -> None:
        self._cancelled = True


class _Screen(Generic[S, E]):
    def __init__(
        self,
        gateway: TaskGateway,
        initial: S,
        reducer: Callable[[S, E], S],
    ) -> None:
        self._gateway = gateway
        self._state = initial
        self._reducer = reducer
        self._listeners: list[StateListener[S]] = []
        self._token = CancelToken()
        self._busy = False
        self._mounted = False

    @property
    def state(self) -> S:
        return self._state

    @property
    def busy(self) -> bool:
        return self._busy

    @property
    def closed(self) -> bool:
        return self._token.cancelled

    def subscribe(self, listener: StateListener[S]) -> Callable[[], None]:
        """Register a listener; it is called with every new snapshot. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _dispatch(self, event: E) -> bool:
        """Apply an event; returns True if the snapshot changed."""
        if self._token.cancelled:
            logger.debug("%s closed; dropping %s", type(self).__name__, type(event).__name__)
            return False

        new_state = self._reducer(self._state, event)
        if new_state == self._state:
            logger.debug("%s ignored %s", type(self).__name__, type(event).__name__)
            return False

        self._state = new_state
        for listener in list(self._listeners):
            try:
                listener(new_state)
            except Exception:
                logger.exception("State listener failed in %s", type(self).__name__)
        return True

    def _try_begin(self, action: str) -> CancelToken | None:
        if self._token.cancelled:
            logger.debug("%s: %s after close rejected", type(self).__name__, action)
            return None
        if self._busy:
            logger.info("%s: %s rejected, operation in progress", type(self).__name__, action)
            return None
        self._busy = True
        return self._token

    def _end(self) -> None:
        self._busy = False

    async def close(self) -> None:
        """Tear the screen down: drop late results and release the connection (once)."""
        if self._token.cancelled:
            return
        self._token.cancel()
        self._listeners.clear()
        await self._gateway.aclose()
        logger.debug("%s closed", type(self).__name__)


class ListScreen(_Screen[ListViewState, ListEvent]):
    """Task list: loads once on mount, reloads on refresh."""

    def __init__(self, gateway: TaskGateway) -> None:
        super().__init__(gateway, ListViewState(), reduce_list)

    async def mount(self) -> bool:
        if self._mounted:
            return False
        self._mounted = True
        return await self.refresh()

    async def refresh(self) -> bool:
        token = self._try_begin("refresh")
        if token is None:
            return False
        try:
            self._dispatch(ListLoadStarted())
            result = await self._gateway.list_tasks()
        finally:
            self._end()

        if token.cancelled:
            return False

        if isinstance(result, Ok):
            self._dispatch(ListLoaded(tuple(result.value)))
        else:
            self._dispatch(
                ListLoadFailed(f"Błąd podczas pobierania tasków: {friendly_failure_message(result)}")
            )
        return True

    async def create_task(self, name: str) -> bool:
        """Create a task on the server, then reload the list."""
        token = self._try_begin("create")
        if token is None:
            return False
        try:
            self._dispatch(ListLoadStarted())
            created = await self._gateway.create_task(name)
            result = await self._gateway.list_tasks() if isinstance(created, Ok) else created
        finally:
            self._end()

        if token.cancelled:
            return False

        if isinstance(created, Failure):
            self._dispatch(
                ListLoadFailed(f"Nie udało się utworzyć taska: {friendly_failure_message(created)}")
            )
        elif isinstance(result, Ok):
            self._dispatch(ListLoaded(tuple(result.value)))
        else:
            self._dispatch(
                ListLoadFailed(f"Błąd podczas pobierania tasków: {friendly_failure_message(result)}")
            )
        return True


class DetailScreen(_Screen[DetailViewState, DetailEvent]):
    """
    Single task: view, edit name, mark done.

    on_navigate_back is invoked by navigate_back() from any state; it never
    touches the network and the unsaved draft is discarded with the screen.
    """

    def __init__(
        self,
        gateway: TaskGateway,
        task_id: int,
        *,
        on_navigate_back: Callable[[], None] | None = None,
    ) -> None:
        super().__init__(gateway, DetailViewState(task_id=int(task_id)), reduce_detail)
        self._on_navigate_back = on_navigate_back

    @property
    def task_id(self) -> int:
        return self._state.task_id

    async def mount(self) -> bool:
        if self._mounted:
            return False
        self._mounted = True
        return await self._load()

    async def retry(self) -> bool:
        """Reload after NOT_FOUND or a failed load; a loaded task (and its draft) is left alone."""
        if self._state.phase not in (DetailPhase.NOT_FOUND, DetailPhase.ERROR):
            return False
        return await self._load()

    async def _load(self) -> bool:
        token = self._try_begin("load")
        if token is None:
            return False
        try:
            self._dispatch(DetailLoadStarted())
            result = await self._gateway.get_task(self.task_id)
        finally:
            self._end()

        if token.cancelled:
            return False

        if isinstance(result, Ok):
            self._dispatch(DetailLoaded(result.value))
        elif isinstance(result, NotFound):
            self._dispatch(DetailMissing())
        else:
            self._dispatch(
                DetailLoadFailed(f"Błąd podczas pobierania taska: {friendly_failure_message(result)}")
            )
        return True

    # ---- pure UI events (no network) ----

    def start_edit(self) -> bool:
        return self._dispatch(EditStarted())

    def change_draft(self, text: str) -> bool:
        return self._dispatch(DraftChanged(text))

    def cancel_edit(self) -> bool:
        return self._dispatch(EditCancelled())

    def navigate_back(self) -> None:
        logger.debug("DetailScreen(%s): navigate back", self.task_id)
        if self._on_navigate_back is not None:
            self._on_navigate_back()

    # ---- mutations ----

    async def save(self) -> bool:
        if self._state.mode is not DetailMode.EDITING or self._state.task is None:
            return False
        token = self._try_begin("save")
        if token is None:
            return False
        try:
            candidate = self._state.task.with_name(self._state.draft_name)
            if not self._dispatch(SaveStarted()):
                return False
            result = await self._gateway.update_task(candidate)
        finally:
            self._end()

        if token.cancelled:
            return False

        if isinstance(result, Ok):
            self._dispatch(SaveSucceeded(result.value))
        else:
            self._dispatch(SaveFailed(f"Błąd podczas zapisywania: {friendly_failure_message(result)}"))
        return True

    async def mark_done(self) -> bool:
        # Client-side check: a done task never triggers another transition.
        if not self._state.can_mark_done:
            return False
        token = self._try_begin("mark_done")
        if token is None:
            return False
        try:
            if not self._dispatch(MarkDoneStarted()):
                return False
            result = await self._gateway.mark_task_done(self.task_id)
        finally:
            self._end()

        if token.cancelled:
            return False

        if isinstance(result, Ok):
            self._dispatch(MarkDoneSucceeded(result.value))
        else:
            self._dispatch(
                MarkDoneFailed(f"Błąd podczas zmiany statusu: {friendly_failure_message(result)}")
            )
        return True
