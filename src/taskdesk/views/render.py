# src/taskdesk/views/render.py

"""Plain-text rendering of screen snapshots for the console connector."""

from __future__ import annotations

from ..tasks.task_models import Task
from .state import ActivePanel, DetailMode, DetailViewState, ListViewState

LIST_TITLE = "Lista Tasków"
DETAIL_TITLE = "Szczegóły Taska"
INFO_TITLE = "Informacje o tasku"
LOADING = "Ładowanie..."
EMPTY = "Brak tasków do wyświetlenia"
NOT_FOUND = "Task nie został znaleziony"
STATUS_DONE = "Wykonany"
STATUS_TODO = "Do zrobienia"
CREATED = "Utworzony"
UPDATED = "Zaktualizowany"
UNKNOWN = "nieznany"
NAME_LABEL = "Nazwa taska"

ACTION_REFRESH = "Odśwież"
ACTION_EDIT = "Edytuj"
ACTION_SAVE = "Zapisz"
ACTION_CANCEL = "Anuluj"
ACTION_MARK_DONE = "Oznacz jako wykonane"
ACTION_BACK = "Wróć"


def status_label(task: Task) -> str:
    return STATUS_DONE if task.done else STATUS_TODO


def _error_card(message: str) -> str:
    return f"[!] {message}"


def _task_row(task: Task) -> list[str]:
    lines = [f"#{task.id}  {task.name}  [{status_label(task)}]"]
    if task.created is not None:
        lines.append(f"    {CREATED}: {task.created}")
    if task.updated is not None:
        lines.append(f"    {UPDATED}: {task.updated}")
    return lines


def render_list(state: ListViewState) -> str:
    lines = [f"== {LIST_TITLE} ==  (/refresh: {ACTION_REFRESH})"]

    panel = state.active
    if panel is ActivePanel.LOADING:
        lines.append(LOADING)
    elif panel is ActivePanel.ERROR:
        lines.append(_error_card(state.error or ""))
    elif panel is ActivePanel.EMPTY:
        lines.append(EMPTY)
    else:
        for task in state.tasks:
            lines.extend(_task_row(task))

    return "\n".join(lines)


def _actions(state: DetailViewState) -> list[str]:
    actions = [f"/back: {ACTION_BACK}"]
    if state.task is None:
        actions.append(f"/retry: {ACTION_REFRESH}")
    elif state.mode is DetailMode.EDITING:
        actions += [f"/save: {ACTION_SAVE}", f"/cancel: {ACTION_CANCEL}"]
    elif state.mode is DetailMode.VIEWING and state.task is not None:
        actions.append(f"/edit: {ACTION_EDIT}")
        if state.can_mark_done:
            actions.append(f"/done: {ACTION_MARK_DONE}")
    return actions


def _detail_body(state: DetailViewState) -> list[str]:
    task = state.task
    assert task is not None

    if state.editing:
        lines = [f"{NAME_LABEL}: {state.draft_name}_"]
    else:
        lines = [task.name]
    lines.append(f"Status: {status_label(task)}")
    lines.append(f"-- {INFO_TITLE} --")
    lines.append(f"ID: {task.id}")
    lines.append(f"{CREATED}: {task.created or UNKNOWN}")
    lines.append(f"{UPDATED}: {task.updated or UNKNOWN}")
    return lines


def render_detail(state: DetailViewState) -> str:
    lines = [f"== {DETAIL_TITLE} =="]

    panel = state.active
    if panel is ActivePanel.LOADING:
        lines.append(LOADING)
    elif panel is ActivePanel.ERROR:
        lines.append(_error_card(state.error or ""))
        # A failed save/mark-done keeps the task (and the draft) on screen.
        if state.task is not None:
            lines.extend(_detail_body(state))
    elif panel is ActivePanel.NOT_FOUND:
        lines.append(NOT_FOUND)
    else:
        lines.extend(_detail_body(state))

    if panel is not ActivePanel.LOADING:
        lines.append("  ".join(_actions(state)))
    return "\n".join(lines)
