"""
HTTP request logging middleware for the Storefront Service.

Assigns a request id and a correlation id to every request, logs start and
completion with timing, and echoes both ids back as response headers.
"""

import time
import uuid
from typing import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from ...utils.logging import setup_storefront_logging as setup_logging

logger = setup_logging("storefront_service.request_logging")

SLOW_REQUEST_MS = 1000


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        request_id = str(uuid.uuid4())
        correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
        start_time = time.time()

        request.state.request_id = request_id
        request.state.correlation_id = correlation_id

        logger.info(
            "HTTP request started",
            extra={
                "request_id": request_id,
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "query_params": dict(request.query_params),
                "client_ip": request.client.host if request.client else "unknown",
                "event_type": "http_request_start",
            },
        )

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "HTTP request failed",
                extra={
                    "request_id": request_id,
                    "correlation_id": correlation_id,
                    "method": request.method,
                    "path": request.url.path,
                    "duration_ms": round((time.time() - start_time) * 1000, 2),
                    "error": str(e),
                    "event_type": "http_request_error",
                },
                exc_info=True,
            )
            raise

        duration_ms = round((time.time() - start_time) * 1000, 2)

        if response.status_code >= 500:
            log = logger.error
        elif response.status_code >= 400 or duration_ms > SLOW_REQUEST_MS:
            log = logger.warning
        else:
            log = logger.info

        log(
            "HTTP request completed",
            extra={
                "request_id": request_id,
                "correlation_id": correlation_id,
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "duration_ms": duration_ms,
                "slow_request": duration_ms > SLOW_REQUEST_MS,
                "event_type": "http_request_complete",
            },
        )

        response.headers["X-Request-ID"] = request_id
        response.headers["X-Correlation-ID"] = correlation_id
        return response
