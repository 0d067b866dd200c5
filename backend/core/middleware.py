"""Request middleware for logging and tracing.

Provides:
- Correlation IDs taken from ``X-Correlation-ID`` or generated per request
- Start/completion logging with timing
- Training session id bound into the log context for session routes
"""
import re
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from core.logging import (
    generate_correlation_id,
    bind_context,
    clear_context,
    api_logger,
)

log = api_logger()

_SESSION_PATH = re.compile(r"^/api/training/sessions/(?P<session_id>[^/]+)")

# Polled by load balancers; logged at debug only
_QUIET_PATHS = frozenset({"/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs requests/responses and manages the per-request log context."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        correlation_id = request.headers.get("X-Correlation-ID") or generate_correlation_id()
        path = request.url.path

        clear_context()
        bind_context(
            correlation_id=correlation_id,
            method=request.method,
            path=path,
            client_ip=request.client.host if request.client else "unknown",
        )
        match = _SESSION_PATH.match(path)
        if match:
            bind_context(session_id=match.group("session_id"))

        quiet = path in _QUIET_PATHS
        start = time.perf_counter()

        (log.debug if quiet else log.info)(
            "request_started",
            query=str(request.query_params) if request.query_params else None,
            user_agent=request.headers.get("User-Agent", "")[:100],
        )

        try:
            response = await call_next(request)
            duration_ms = (time.perf_counter() - start) * 1000
            response.headers["X-Correlation-ID"] = correlation_id

            status = response.status_code
            if status >= 500:
                log_method = log.error
            elif status >= 400:
                log_method = log.warning
            else:
                log_method = log.debug if quiet else log.info
            log_method(
                "request_completed",
                status=status,
                duration_ms=round(duration_ms, 2),
            )
            return response

        except Exception as exc:
            duration_ms = (time.perf_counter() - start) * 1000
            log.exception(
                "request_failed",
                error=str(exc),
                error_type=type(exc).__name__,
                duration_ms=round(duration_ms, 2),
            )
            raise
        finally:
            clear_context()


class SlowRequestMiddleware(BaseHTTPMiddleware):
    """Warns about requests slower than a threshold."""

    def __init__(self, app, slow_threshold_ms: float = 500):
        super().__init__(app)
        self.slow_threshold_ms = slow_threshold_ms

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start) * 1000

        if duration_ms > self.slow_threshold_ms:
            log.warning(
                "slow_request",
                path=request.url.path,
                duration_ms=round(duration_ms, 2),
                threshold_ms=self.slow_threshold_ms,
            )

        return response
