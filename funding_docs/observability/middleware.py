"""
HTTP observability middleware.

CorrelationMiddleware binds the caller's X-Correlation-ID (or a new one)
for the request and echoes it on the response. RequestLoggingMiddleware
logs one line per request and one per response with the elapsed time;
health probes are logged at DEBUG.

Dependencies: fastapi, starlette, funding_docs.observability
System role: Request/response observability
"""

import logging
import time

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from funding_docs.observability.correlation import correlation_scope
from funding_docs.observability.log_utils import log_with_context

logger = logging.getLogger(__name__)

CORRELATION_HEADER = "X-Correlation-ID"


def _level_for(path: str) -> int:
    return logging.DEBUG if "/health" in path else logging.INFO


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log requests and responses with timing."""

    async def dispatch(self, request: Request, call_next):
        method = request.method
        path = request.url.path
        level = _level_for(path)
        started = time.perf_counter()

        log_with_context(
            logger,
            level,
            f"{method} {path}",
            method=method,
            path=path,
            query_string=request.url.query or None,
            content_length=request.headers.get("content-length"),
        )

        try:
            response: Response = await call_next(request)
        except Exception as e:
            logger.exception(
                f"{method} {path} - unhandled exception",
                extra={
                    "method": method,
                    "path": path,
                    "elapsed_ms": round((time.perf_counter() - started) * 1000, 2),
                    "error_type": type(e).__name__,
                },
            )
            raise

        log_with_context(
            logger,
            logging.WARNING if response.status_code >= 500 else level,
            f"{method} {path} - {response.status_code}",
            method=method,
            path=path,
            status_code=response.status_code,
            elapsed_ms=round((time.perf_counter() - started) * 1000, 2),
        )
        return response


class CorrelationMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID for each request and return it in a header."""

    async def dispatch(self, request: Request, call_next):
        with correlation_scope(request.headers.get(CORRELATION_HEADER)) as correlation_id:
            response: Response = await call_next(request)
        response.headers[CORRELATION_HEADER] = correlation_id
        return response
