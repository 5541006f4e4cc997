# src/taskdesk/api/app.py

"""FastAPI application factory for the task backend."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from ..core.ports import TaskRepo
from .routes import router as tasks_router

logger = logging.getLogger(__name__)


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # The task contract reports malformed bodies as 400, not FastAPI's default 422.
    logger.info("%s %s rejected: invalid request", request.method, request.url.path)
    return JSONResponse(status_code=400, content={"detail": jsonable_encoder(exc.errors())})


def create_app(repo: TaskRepo, *, title: str = "taskdesk") -> FastAPI:
    """
    Build the API app around an already-constructed repository.

    The repository is attached to app.state so routes resolve it per request;
    tests pass their own store (or a fake) here.
    """
    app = FastAPI(title=title)
    app.state.task_repo = repo
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.include_router(tasks_router)
    return app
