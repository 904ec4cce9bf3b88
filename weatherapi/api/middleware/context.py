"""Logging context middleware for observability.

Binds a request id, the HTTP method and the path to structlog contextvars
for the duration of each request, so every log entry emitted while handling
the request carries them as attributes.
"""

import uuid
from collections.abc import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from structlog.contextvars import bind_contextvars, clear_contextvars

from weatherapi.observability.logging import get_logger
from weatherapi.observability.tracing import get_current_trace_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
TRACE_ID_HEADER = "X-Trace-ID"


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Middleware that binds request context to structlog contextvars.

    Headers:
        X-Request-ID: Reused as the request id when the client sends one;
            echoed back on the response either way
        X-Trace-ID: Set on the response when a trace is active
    """

    async def dispatch(  # type: ignore[override]
        self, request: Request, call_next: Callable[[Request], Response]
    ) -> Response:
        """Process request and bind logging context."""
        clear_contextvars()

        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        bind_contextvars(
            request_id=request_id,
            http_method=request.method,
            http_path=request.url.path,
        )

        logger.debug("request_started")

        try:
            response = await call_next(request)  # type: ignore[misc]

            logger.debug("request_completed", status_code=response.status_code)

            response.headers[REQUEST_ID_HEADER] = request_id
            trace_id = get_current_trace_id()
            if trace_id:
                response.headers[TRACE_ID_HEADER] = trace_id

            return response  # type: ignore[no-any-return]
        finally:
            clear_contextvars()
