from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from cosmo_notes.api.responses import envelope, error_envelope
from cosmo_notes.api.routes import notifications, sharing, tasks
from cosmo_notes.config import SETTINGS, Settings
from cosmo_notes.domain.errors import (
    SharedTaskNotFoundError,
    TaskNotFoundError,
    ValidationFailedError,
)
from cosmo_notes.infra.repository import TaskRepository
from cosmo_notes.services.overdue_service import OverdueService
from cosmo_notes.services.scheduler import OverdueScheduler
from cosmo_notes.services.task_service import TaskService
from cosmo_notes.web import pages

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def _register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationFailedError)
    async def handle_validation_failed(request: Request, exc: ValidationFailedError):
        logger.info("method=%s path=%s outcome=400 reason=%s", request.method, request.url.path, exc)
        return error_envelope(400, "Validation failed", str(exc))

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        message = _describe_validation_error(exc)
        logger.info("method=%s path=%s outcome=400 reason=%s", request.method, request.url.path, message)
        return error_envelope(400, "Validation failed", message)

    @app.exception_handler(TaskNotFoundError)
    async def handle_task_not_found(request: Request, exc: TaskNotFoundError):
        logger.info("method=%s path=%s outcome=404 id=%s", request.method, request.url.path, exc.task_id)
        return error_envelope(404, "Task not found", str(exc))

    @app.exception_handler(SharedTaskNotFoundError)
    async def handle_shared_not_found(request: Request, exc: SharedTaskNotFoundError):
        logger.info(
            "method=%s path=%s outcome=404 share_id=%s", request.method, request.url.path, exc.share_id
        )
        return error_envelope(404, "Shared task not found", str(exc))

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        logger.error(
            "method=%s path=%s outcome=500 database error", request.method, request.url.path, exc_info=exc
        )
        detail = getattr(exc, "orig", None) or exc
        return error_envelope(500, "Database operation failed", str(detail) or "Unknown error")

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(
            "method=%s path=%s outcome=500 unhandled error", request.method, request.url.path, exc_info=exc
        )
        return error_envelope(500, "Internal server error", "An unexpected error occurred")


def create_app(
    settings: Settings = SETTINGS,
    repo: TaskRepository | None = None,
    scheduler: OverdueScheduler | None = None,
) -> FastAPI:
    repo = repo or TaskRepository()
    task_service = TaskService(repo)
    overdue_service = OverdueService(repo)
    if scheduler is None and settings.overdue_sweep_enabled:
        scheduler = OverdueScheduler(overdue_service, settings.overdue_sweep_interval_min)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        if scheduler is not None:
            scheduler.start()
        try:
            yield
        finally:
            if scheduler is not None:
                scheduler.stop()

    app = FastAPI(title="Cosmo Notes", lifespan=lifespan)
    app.state.settings = settings
    app.state.task_service = task_service
    app.state.overdue_service = overdue_service
    app.state.scheduler = scheduler

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        logger.debug("Request started method=%s path=%s", request.method, request.url.path)
        response = await call_next(request)
        duration_ms = (time.perf_counter() - started) * 1000
        logger.info(
            "Request completed method=%s path=%s status=%s duration=%.1fms",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
        )
        return response

    _register_exception_handlers(app)

    app.include_router(tasks.router, prefix=API_PREFIX)
    app.include_router(sharing.router, prefix=API_PREFIX)
    app.include_router(notifications.router, prefix=API_PREFIX)
    app.include_router(pages.router)

    @app.get("/health")
    def health():
        return envelope({"status": "ok"})

    return app
