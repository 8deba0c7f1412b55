"""FastAPI middleware for observability.

Provides correlation ID injection and request/response logging.
"""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from dispatcher.observability.constants import (
    CORRELATION_ID_HEADER,
    LogEvents,
)
from dispatcher.observability.context import set_correlation_id
from dispatcher.observability.sanitizer import sanitize_headers

logger = structlog.get_logger(__name__)


class CorrelationIDMiddleware(BaseHTTPMiddleware):
    """Middleware to extract or generate correlation IDs for request tracing.

    The correlation ID is taken from the X-Correlation-ID header (or generated
    as a UUID v4), stored in a ContextVar, bound to the structlog context and
    echoed back in the response header.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(CORRELATION_ID_HEADER)
        if not correlation_id:
            correlation_id = str(uuid.uuid4())

        set_correlation_id(correlation_id)

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

        response = await call_next(request)
        response.headers[CORRELATION_ID_HEADER] = correlation_id

        return response


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Middleware to log request/response details with timing."""

    def __init__(
        self,
        app: ASGIApp,
        log_request_headers: bool = False,
        exclude_paths: set[str] | None = None,
    ) -> None:
        super().__init__(app)
        self.log_request_headers = log_request_headers
        self.exclude_paths = exclude_paths or {"/health", "/ready"}

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        start_time = time.perf_counter()

        request_context = {
            "method": request.method,
            "path": request.url.path,
            "client_ip": request.client.host if request.client else "unknown",
        }
        if self.log_request_headers:
            request_context["headers"] = sanitize_headers(dict(request.headers))

        logger.info(LogEvents.REQUEST_STARTED, **request_context)

        try:
            response = await call_next(request)
        except Exception as exc:
            duration_ms = int((time.perf_counter() - start_time) * 1000)
            logger.error(
                LogEvents.REQUEST_FAILED,
                **request_context,
                duration_ms=duration_ms,
                error_type=type(exc).__name__,
                error_message=str(exc),
            )
            raise

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        response_context = {
            **request_context,
            "status_code": response.status_code,
            "duration_ms": duration_ms,
        }

        if response.status_code >= 500:
            logger.error(LogEvents.REQUEST_FAILED, **response_context)
        elif response.status_code >= 400:
            logger.warning(LogEvents.REQUEST_COMPLETED, **response_context)
        else:
            logger.info(LogEvents.REQUEST_COMPLETED, **response_context)

        return response
