from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from jobboard.api.routes import router as api_router
from jobboard.config import get_settings
from jobboard.db.init import init_database
from jobboard.errors import (
    AuthenticationError,
    DuplicateApplicationError,
    DuplicateUserError,
    IllegalTransitionError,
    JobBoardError,
    PermissionDeniedError,
    StorageCorruptionError,
    ValidationError,
)

logger = logging.getLogger(__name__)

ERROR_STATUS: dict[type[JobBoardError], int] = {
    ValidationError: 422,
    DuplicateApplicationError: 409,
    DuplicateUserError: 409,
    IllegalTransitionError: 409,
    PermissionDeniedError: 403,
    AuthenticationError: 401,
    StorageCorruptionError: 500,
}


def _error_context(exc: JobBoardError) -> dict:
    return {key: value for key, value in vars(exc).items() if isinstance(value, (str, int, list))}


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(title=settings.app_name)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.on_event("startup")
    def _startup() -> None:
        init_database()

    @app.exception_handler(JobBoardError)
    def _job_board_error(request: Request, exc: JobBoardError) -> JSONResponse:
        status_code = next(
            (code for error_type, code in ERROR_STATUS.items() if isinstance(exc, error_type)),
            400,
        )
        detail = str(exc)
        if isinstance(exc, StorageCorruptionError):
            logger.error("Storage corruption on %s %s: %s", request.method, request.url.path, exc)
            detail = f"{exc}; run `jobboard reset-store --key {exc.key}` to restore defaults"
        return JSONResponse(
            status_code=status_code,
            content={"detail": detail, "error": type(exc).__name__, "context": _error_context(exc)},
        )

    @app.get("/health")
    def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(api_router)
    return app
