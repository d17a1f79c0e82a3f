"""Log estruturado de cada request HTTP com correlation_id.

Eventos:
- http_request_started (debug)
- http_request_completed (info; warning para status >= 400)
- http_request_failed (exceção não tratada)
"""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from app.observability import (
    CORRELATION_HEADER,
    correlation_id_from_headers,
    get_correlation_id,
    reset_correlation_id,
    set_correlation_id,
)

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        token = set_correlation_id(correlation_id_from_headers(request.headers))
        method = request.method
        path = request.url.path
        started_at = time.perf_counter()

        logger.debug("http_request_started", extra={"method": method, "path": path})
        try:
            try:
                response = await call_next(request)
            except Exception as exc:
                logger.error(
                    "http_request_failed",
                    extra={
                        "method": method,
                        "path": path,
                        "error_type": type(exc).__name__,
                        "duration_ms": _elapsed_ms(started_at),
                    },
                )
                raise

            level = logging.WARNING if response.status_code >= 400 else logging.INFO
            logger.log(
                level,
                "http_request_completed",
                extra={
                    "method": method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": _elapsed_ms(started_at),
                },
            )
            response.headers[CORRELATION_HEADER] = get_correlation_id()
            return response
        finally:
            reset_correlation_id(token)


def _elapsed_ms(started_at: float) -> float:
    return round((time.perf_counter() - started_at) * 1000, 2)
