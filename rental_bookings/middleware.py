"""
Request correlation middleware.

Every request gets a request id that is echoed back in the X-Request-ID
response header and bound into structlog's context so that all log events
emitted while handling the request (route, service, writers) carry it.
"""

from __future__ import annotations

import uuid
from typing import Awaitable, Callable

import structlog
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a request id to each HTTP request.

    An incoming X-Request-ID header is reused (so a caller or gateway can
    correlate its own logs), otherwise a UUID4 is generated. The id is:

    1. stored in request.state.request_id,
    2. bound to structlog contextvars for the lifetime of the request,
    3. returned in the X-Request-ID response header.

    Example:
        >>> app.add_middleware(RequestIDMiddleware)
        >>>
        >>> @router.get("/bookings/{booking_id}")
        >>> def read_booking(booking_id: int, request: Request):
        ...     logger.info("booking_read", booking_id=booking_id)  # includes request_id
    """

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            method=request.method,
            path=request.url.path,
        )
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.clear_contextvars()

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
