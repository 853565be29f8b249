"""Per-request deadline middleware.

Plain ASGI middleware, so the deadline cancels the downstream application
itself: the in-flight store await is aborted, ``get_db`` rolls the session
back, and the caller receives a timeout error instead of a late success.
"""


import asyncio
import logging

from starlette.requests import Request
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from app.core.exceptions import RequestTimeoutError, render_error

logger = logging.getLogger(__name__)

class TimeoutMiddleware:
    def __init__(self, app: ASGIApp, timeout_seconds: float):
        self.app = app
        self.timeout_seconds = timeout_seconds

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        response_started = False

        async def send_tracking(message: Message) -> None:
            nonlocal response_started
            if message["type"] == "http.response.start":
                response_started = True
            await send(message)

        try:
            await asyncio.wait_for(
                self.app(scope, receive, send_tracking), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            request = Request(scope)
            logger.warning(
                "%s %s exceeded %.1fs deadline", request.method, request.url.path,
                self.timeout_seconds,
            )
            if response_started:
                # Headers already sent; the client sees a truncated body
                return
            response = render_error(
                request, RequestTimeoutError(f"request exceeded {self.timeout_seconds:g}s deadline")
            )
            await response(scope, receive, send)
