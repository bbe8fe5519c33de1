"""Error types and the JSON error responses rendered at the app edge.

Every error body is ``{"error": ...}``. Upstream failures embed the raw
upstream text, and unexpected faults expose message and stack trace.
"""
import logging
import traceback

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class LessonPlannerError(Exception):
    """Base exception for application errors."""


class UnsupportedDatabaseError(LessonPlannerError):
    """The configured database dialect has no upsert support here."""


class UpstreamError(LessonPlannerError):
    """An upstream API (Google, OpenAI) answered with a non-success status."""

    def __init__(self, message: str, status_code: int = 500, details: str | None = None):
        self.message = message
        self.status_code = status_code
        self.details = details
        super().__init__(message)


def error_response(status_code: int, error: str, **extra) -> JSONResponse:
    return JSONResponse({"error": error, **extra}, status_code=status_code)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # Known path with the wrong method is just another unknown route
    if exc.status_code in (404, 405):
        return error_response(404, "Not Found")
    return JSONResponse(
        {"error": exc.detail}, status_code=exc.status_code, headers=getattr(exc, "headers", None)
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return error_response(400, "Invalid request", details=_plain_errors(exc))


async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, details=exc.details)


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error for %s %s: %s", request.method, request.url.path, exc)
    return error_response(
        500,
        "Internal Server Error",
        message=str(exc),
        stack="".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )


def _plain_errors(exc: RequestValidationError) -> list[dict]:
    # ctx may hold exception objects that JSONResponse cannot serialize
    return [
        {"loc": list(err.get("loc", ())), "msg": err.get("msg", ""), "type": err.get("type", "")}
        for err in exc.errors()
    ]
