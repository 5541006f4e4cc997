# src/taskdesk/views/state.py

"""
Immutable view state for the task screens.

Each screen holds one frozen snapshot. Events describe what happened
(a load started, a save came back, the user typed) and a pure reducer turns
(previous state, event) into the next snapshot. Events that make no sense in
the current state return the state unchanged.

Rendering precedence for a snapshot: loading > error > content/empty.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import StrEnum

from ..tasks.task_models import Task


class ActivePanel(StrEnum):
    LOADING = "loading"
    ERROR = "error"
    CONTENT = "content"
    EMPTY = "empty"
    NOT_FOUND = "not_found"


# --------------------------------------------------------------------------------------
# List screen
# --------------------------------------------------------------------------------------


class ListPhase(StrEnum):
    IDLE = "idle"
    LOADING = "loading"
    CONTENT = "content"
    EMPTY = "empty"
    ERROR = "error"


@dataclass(slots=True, frozen=True)
class ListViewState:
    phase: ListPhase = ListPhase.IDLE
    tasks: tuple[Task, ...] = ()
    error: str | None = None

    @property
    def loading(self) -> bool:
        return self.phase is ListPhase.LOADING

    @property
    def entity(self) -> tuple[Task, ...]:
        return self.tasks

    @property
    def active(self) -> ActivePanel:
        if self.loading:
            return ActivePanel.LOADING
        if self.error is not None:
            return ActivePanel.ERROR
        return ActivePanel.CONTENT if self.tasks else ActivePanel.EMPTY


@dataclass(slots=True, frozen=True)
class ListLoadStarted:
    pass


@dataclass(slots=True, frozen=True)
class ListLoaded:
    tasks: tuple[Task, ...]


@dataclass(slots=True, frozen=True)
class ListLoadFailed:
    message: str


ListEvent = ListLoadStarted | ListLoaded | ListLoadFailed


def reduce_list(state: ListViewState, event: ListEvent) -> ListViewState:
    if isinstance(event, ListLoadStarted):
        # Previous rows stay in the snapshot; the loading panel hides them.
        return replace(state, phase=ListPhase.LOADING, error=None)

    if isinstance(event, ListLoaded):
        if not state.loading:
            return state
        tasks = tuple(event.tasks)
        return ListViewState(
            phase=ListPhase.CONTENT if tasks else ListPhase.EMPTY,
            tasks=tasks,
            error=None,
        )

    if isinstance(event, ListLoadFailed):
        if not state.loading:
            return state
        return replace(state, phase=ListPhase.ERROR, tasks=(), error=event.message)

    return state


# --------------------------------------------------------------------------------------
# Detail screen
# --------------------------------------------------------------------------------------


class DetailPhase(StrEnum):
    LOADING = "loading"
    CONTENT = "content"
    NOT_FOUND = "not_found"
    ERROR = "error"


class DetailMode(StrEnum):
    VIEWING = "viewing"
    EDITING = "editing"
    SAVING = "saving"
    TOGGLING_DONE = "toggling_done"


@dataclass(slots=True, frozen=True)
class DetailViewState:
    task_id: int
    phase: DetailPhase = DetailPhase.LOADING
    mode: DetailMode = DetailMode.VIEWING
    task: Task | None = None
    error: str | None = None
    draft_name: str = ""

    @property
    def entity(self) -> Task | None:
        return self.task

    @property
    def loading(self) -> bool:
        return self.phase is DetailPhase.LOADING or self.mode in (
            DetailMode.SAVING,
            DetailMode.TOGGLING_DONE,
        )

    @property
    def editing(self) -> bool:
        return self.mode in (DetailMode.EDITING, DetailMode.SAVING)

    @property
    def can_mark_done(self) -> bool:
        return (
            self.phase is DetailPhase.CONTENT
            and self.mode is DetailMode.VIEWING
            and self.task is not None
            and not self.task.done
        )

    @property
    def active(self) -> ActivePanel:
        if self.loading:
            return ActivePanel.LOADING
        if self.error is not None:
            return ActivePanel.ERROR
        if self.phase is DetailPhase.NOT_FOUND:
            return ActivePanel.NOT_FOUND
        return ActivePanel.CONTENT


@dataclass(slots=True, frozen=True)
class DetailLoadStarted:
    pass


@dataclass(slots=True, frozen=True)
class DetailLoaded:
    task: Task


@dataclass(slots=True, frozen=True)
class DetailMissing:
    pass


@dataclass(slots=True, frozen=True)
class DetailLoadFailed:
    message: str


@dataclass(slots=True, frozen=True)
class EditStarted:
    pass


@dataclass(slots=True, frozen=True)
class DraftChanged:
    text: str


@dataclass(slots=True, frozen=True)
class EditCancelled:
    pass


@dataclass(slots=True, frozen=True)
class SaveStarted:
    pass


@dataclass(slots=True, frozen=True)
class SaveSucceeded:
    task: Task


@dataclass(slots=True, frozen=True)
class SaveFailed:
    message: str


@dataclass(slots=True, frozen=True)
class MarkDoneStarted:
    pass


@dataclass(slots=True, frozen=True)
class MarkDoneSucceeded:
    task: Task


@dataclass(slots=True, frozen=True)
class MarkDoneFailed:
    message: str


DetailEvent = (
    DetailLoadStarted
    | DetailLoaded
    | DetailMissing
    | DetailLoadFailed
    | EditStarted
    | DraftChanged
    | EditCancelled
    | SaveStarted
    | SaveSucceeded
    | SaveFailed
    | MarkDoneStarted
    | MarkDoneSucceeded
    | MarkDoneFailed
)


def _in_content(state: DetailViewState, mode: DetailMode) -> bool:
    return state.phase is DetailPhase.CONTENT and state.mode is mode and state.task is not None


def reduce_detail(state: DetailViewState, event: DetailEvent) -> DetailViewState:
    # ---- loading ----
    if isinstance(event, DetailLoadStarted):
        if state.mode in (DetailMode.SAVING, DetailMode.TOGGLING_DONE):
            return state
        return replace(state, phase=DetailPhase.LOADING, mode=DetailMode.VIEWING, error=None)

    if isinstance(event, DetailLoaded):
        if state.phase is not DetailPhase.LOADING:
            return state
        return replace(
            state,
            phase=DetailPhase.CONTENT,
            mode=DetailMode.VIEWING,
            task=event.task,
            draft_name=event.task.name,
            error=None,
        )

    if isinstance(event, DetailMissing):
        if state.phase is not DetailPhase.LOADING:
            return state
        return replace(state, phase=DetailPhase.NOT_FOUND, task=None, draft_name="", error=None)

    if isinstance(event, DetailLoadFailed):
        if state.phase is not DetailPhase.LOADING:
            return state
        return replace(state, phase=DetailPhase.ERROR, task=None, error=event.message)

    # ---- editing ----
    if isinstance(event, EditStarted):
        if not _in_content(state, DetailMode.VIEWING):
            return state
        assert state.task is not None
        return replace(state, mode=DetailMode.EDITING, draft_name=state.task.name, error=None)

    if isinstance(event, DraftChanged):
        if not _in_content(state, DetailMode.EDITING):
            return state
        return replace(state, draft_name=event.text)

    if isinstance(event, EditCancelled):
        if not _in_content(state, DetailMode.EDITING):
            return state
        assert state.task is not None
        return replace(state, mode=DetailMode.VIEWING, draft_name=state.task.name, error=None)

    # ---- saving ----
    if isinstance(event, SaveStarted):
        if not _in_content(state, DetailMode.EDITING):
            return state
        return replace(state, mode=DetailMode.SAVING, error=None)

    if isinstance(event, SaveSucceeded):
        if state.mode is not DetailMode.SAVING:
            return state
        return replace(
            state,
            mode=DetailMode.VIEWING,
            task=event.task,
            draft_name=event.task.name,
            error=None,
        )

    if isinstance(event, SaveFailed):
        if state.mode is not DetailMode.SAVING:
            return state
        # Back to editing with the user's draft intact.
        return replace(state, mode=DetailMode.EDITING, error=event.message)

    # ---- mark done ----
    if isinstance(event, MarkDoneStarted):
        if not state.can_mark_done:
            return state
        return replace(state, mode=DetailMode.TOGGLING_DONE, error=None)

    if isinstance(event, MarkDoneSucceeded):
        if state.mode is not DetailMode.TOGGLING_DONE:
            return state
        return replace(
            state,
            mode=DetailMode.VIEWING,
            task=event.task,
            draft_name=event.task.name,
            error=None,
        )

    if isinstance(event, MarkDoneFailed):
        if state.mode is not DetailMode.TOGGLING_DONE:
            return state
        return replace(state, mode=DetailMode.VIEWING, error=event.message)

    return state
