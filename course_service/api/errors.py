"""Map failures to HTTP responses with a ``{"message": ...}`` body.

  NotFoundError        → 404
  ValidationError      → 400 (request body validation included)
  ForbiddenError       → 403
  ConflictError        → 409
  HTTPException        → its own status (401 from the auth dependency)
  anything else        → 500, logged with traceback

Inside the app stack RequestContextMiddleware answers the 500 itself so the
request id survives; the handler below covers failures outside it.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from course_service.services.errors import (
    ConflictError,
    CourseServiceError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: tuple[tuple[type[CourseServiceError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (ForbiddenError, status.HTTP_403_FORBIDDEN),
    (ConflictError, status.HTTP_409_CONFLICT),
)


def status_for(exc: CourseServiceError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _message(code: int, message: str, headers: dict | None = None) -> JSONResponse:
    return JSONResponse(status_code=code, content={"message": message}, headers=headers)


def _describe_validation(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # loc starts with "body"/"path"/"query"; the rest names the field
        field = ".".join(str(p) for p in err["loc"][1:]) or str(err["loc"][0])
        parts.append(f"{field}: {err['msg']}")
    return "; ".join(parts) or "invalid request"


async def _handle_service_error(
    request: Request, exc: CourseServiceError
) -> JSONResponse:
    code = status_for(exc)
    if code >= 500:
        logger.error("Unmapped service error on %s: %s", request.url.path, exc)
    return _message(code, exc.message)


async def _handle_request_validation(
    _request: Request, exc: RequestValidationError
) -> JSONResponse:
    message = _describe_validation(exc)
    logger.warning("Rejected request body: %s", message)
    return _message(status.HTTP_400_BAD_REQUEST, message)


async def _handle_http_exception(
    _request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return _message(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return _message(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CourseServiceError, _handle_service_error)
    app.add_exception_handler(RequestValidationError, _handle_request_validation)
    app.add_exception_handler(StarletteHTTPException, _handle_http_exception)
    app.add_exception_handler(Exception, _handle_unexpected)
