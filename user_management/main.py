from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from user_management.auth import ApiKeyError
from user_management.errors import UserStoreError
from user_management.logging_config import configure_logging
from user_management.models import ErrorResponse
from user_management.routers.users import router as users_router
from user_management.settings import get_settings

_settings = get_settings()
configure_logging(_settings.log_level)

logger = logging.getLogger("user_management")
http_logger = logging.getLogger("user_management.http")

APP_VERSION = "1.0.0"

app = FastAPI(title=_settings.app_title, version=APP_VERSION)
app.include_router(users_router)


def _error_response(status_code: int, message: str, *, field: str | None = None) -> JSONResponse:
    body = ErrorResponse(error=message, status_code=status_code, field=field)
    return JSONResponse(status_code=status_code, content=body.model_dump(by_alias=True, exclude_none=True))


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    elapsed_ms = (time.perf_counter() - started) * 1000.0
    http_logger.info("%s %s -> %s (%.1f ms)", request.method, request.url.path, response.status_code, elapsed_ms)
    return response


@app.exception_handler(UserStoreError)
async def user_store_error_handler(request: Request, exc: UserStoreError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("Internal store failure on %s: %s", request.url.path, exc.message)
        return _error_response(500, "An unexpected error occurred")
    return _error_response(exc.status_code, exc.message, field=exc.field)


@app.exception_handler(ApiKeyError)
async def api_key_error_handler(request: Request, exc: ApiKeyError) -> JSONResponse:
    return _error_response(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Non-JSON or wrongly typed bodies.
    return _error_response(400, "Invalid request body")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    # The traceback goes to the log only.
    logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(500, "An unexpected error occurred")


@app.get("/healthz")
def healthz():
    # Avoid secrets: only report whether an API key is configured.
    s = get_settings()
    return JSONResponse(
        {
            "ok": True,
            "service": "user-management",
            "version": APP_VERSION,
            "api_key_configured": bool(s.api_key),
        }
    )
