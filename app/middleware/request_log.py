"""Request logging middleware — one line per request, tagged with a request id."""


import logging
import time
import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app.request")

REQUEST_ID_HEADER = "X-Request-ID"

class RequestLogMiddleware(BaseHTTPMiddleware):
    """Logs method, path, status and duration; echoes or assigns X-Request-ID."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        start = time.monotonic()
        response = await call_next(request)
        duration_ms = round((time.monotonic() - start) * 1000)

        response.headers[REQUEST_ID_HEADER] = request_id
        logger.info(
            "%s %s -> %s (%dms) request_id=%s",
            request.method, request.url.path, response.status_code, duration_ms, request_id,
        )
        return response
