# src/taskdesk/api/routes.py

"""Task REST routes: /api/tasks."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException, Request, Response

from ..core.ports import TaskRepo
from .schemas import TaskCreateRequest, TaskDto, TaskUpdateRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/tasks", tags=["tasks"])


def get_repo(request: Request) -> TaskRepo:
    return request.app.state.task_repo


def _not_found(task_id: int) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Task {task_id} not found")


@router.get("", response_model=list[TaskDto])
def list_tasks(repo: TaskRepo = Depends(get_repo)) -> list[TaskDto]:
    logger.info("GET /api/tasks")
    return [TaskDto.from_task(t) for t in repo.list_tasks()]


@router.get("/{task_id}", response_model=TaskDto)
def get_task(task_id: int, repo: TaskRepo = Depends(get_repo)) -> TaskDto:
    logger.info("GET /api/tasks/%s", task_id)
    task = repo.get_task(task_id)
    if task is None:
        raise _not_found(task_id)
    return TaskDto.from_task(task)


@router.post("", response_model=TaskDto, status_code=201)
def create_task(
    body: TaskCreateRequest,
    response: Response,
    repo: TaskRepo = Depends(get_repo),
) -> TaskDto:
    logger.info("POST /api/tasks")
    try:
        task = repo.add_task(body.name, done=body.done)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    response.headers["Location"] = f"/api/tasks/{task.id}"
    return TaskDto.from_task(task)


@router.put("/{task_id}", response_model=TaskDto)
def update_task(
    task_id: int,
    body: TaskUpdateRequest,
    repo: TaskRepo = Depends(get_repo),
) -> TaskDto:
    logger.info("PUT /api/tasks/%s", task_id)
    if body.id is not None and body.id != task_id:
        raise HTTPException(
            status_code=400,
            detail=f"Body id {body.id} does not match path id {task_id}",
        )
    try:
        task = repo.update_task(task_id, name=body.name, done=body.done)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e)) from e
    if task is None:
        raise _not_found(task_id)
    return TaskDto.from_task(task)


@router.patch("/{task_id}/done", response_model=TaskDto)
def mark_task_done(task_id: int, repo: TaskRepo = Depends(get_repo)) -> TaskDto:
    logger.info("PATCH /api/tasks/%s/done", task_id)
    task = repo.mark_done(task_id)
    if task is None:
        raise _not_found(task_id)
    return TaskDto.from_task(task)


@router.delete("/{task_id}", status_code=204)
def delete_task(task_id: int, repo: TaskRepo = Depends(get_repo)) -> Response:
    logger.info("DELETE /api/tasks/%s", task_id)
    if not repo.delete_task(task_id):
        raise _not_found(task_id)
    return Response(status_code=204)
