"""API error type and the application-wide exception handlers.

Every failure leaves the API as the four-field error object
`{status, code, message, detail}` described by `schemas.ApiErrorOut`.
"""

import logging
from typing import Optional

import redis
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from .schemas import ApiErrorOut
from .utils.logs import format_stack_trace

logger = logging.getLogger("student_app.errors")


class ApiError(Exception):
    """An error that maps directly onto an HTTP status and error object."""

    def __init__(self, status: int, code: str, message: str, detail: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.code = code
        self.message = message
        self.detail = detail

    def to_dict(self) -> dict:
        return ApiErrorOut.of(self.status, self.code, self.message, self.detail).model_dump()


def build_error_message(exc: BaseException) -> str:
    """One-line summary of `exc` followed by its truncated stack trace."""
    summary = f"{type(exc).__name__}: {exc}"
    trace = format_stack_trace(exc)
    return summary if trace is None else summary + trace


def error_response(status: int, code: str, message: str, detail: Optional[str] = None) -> JSONResponse:
    return JSONResponse(status_code=status, content=ApiErrorOut.of(status, code, message, detail).model_dump())


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path")]
        parts.append(f"{'.'.join(loc) or 'request'}: {err.get('msg', 'invalid value')}")
    return "; ".join(parts)


def register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ApiError)
    async def api_error_handler(request: Request, exc: ApiError):
        logger.warning("api_error %s %s -> %s %s", request.method, request.url.path, exc.status, exc.code)
        return JSONResponse(status_code=exc.status, content=exc.to_dict())

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        detail = _describe_validation(exc)
        logger.info("validation_failed %s %s: %s", request.method, request.url.path, detail)
        return error_response(400, "400", "Validation failed", detail)

    @app.exception_handler(redis.RedisError)
    async def redis_error_handler(request: Request, exc: redis.RedisError):
        logger.error("redis_unavailable %s", build_error_message(exc))
        return error_response(503, "503", "Cache unavailable", str(exc))

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error("[MyException] %s %s %s", request.method, request.url.path, build_error_message(exc))
        return error_response(500, "500", "Internal server error", str(exc))
