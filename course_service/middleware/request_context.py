"""Request id propagation and access logging.

The id comes from the caller's X-Request-ID header when present and is
generated otherwise.  It is held in a ContextVar so concurrent requests on
one event loop never see each other's id; the logging handler stamps it
onto every record emitted while the request is in flight.

An exception escaping the handlers is logged and turned into the 500 body
here, before the id is released, so the traceback, the access line and the
response header all carry the same id.
"""

from __future__ import annotations

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from course_service.core.logging import request_id_var

logger = logging.getLogger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag the request with an id, time it and log one summary line."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        token = request_id_var.set(req_id)
        start = time.monotonic()
        try:
            try:
                response = await call_next(request)
            except Exception:
                logger.exception(
                    "Unhandled error on %s %s",
                    request.method,
                    request.url.path,
                    extra={"request_id": req_id},
                )
                response = JSONResponse(
                    status_code=500, content={"message": "Internal server error"}
                )

            duration_ms = round((time.monotonic() - start) * 1000, 1)
            logger.info(
                "%s %s → %d (%.1fms)",
                request.method,
                request.url.path,
                response.status_code,
                duration_ms,
                extra={
                    "request_id": req_id,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": response.status_code,
                    "duration_ms": duration_ms,
                },
            )
            response.headers["X-Request-ID"] = req_id
            return response
        finally:
            request_id_var.reset(token)
