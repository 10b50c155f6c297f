"""
Jeb's API — Request Logging Middleware
=======================================

What:  One access log line per HTTP request with status and duration.
How:   Times the downstream call and logs on the `jebs_api.access` logger,
       choosing the level from the status code.
Who:   Applied to every request after RequestIDMiddleware.

Log line:
    POST /api/create-checkout-session 200 412.3ms [a1b2c3d4] from 203.0.113.7

What we log vs what we DON'T log (privacy):
    ✅ Log: method, path, status, duration, IP, request ID
    ❌ Don't log: request bodies (applications contain personal details)
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from jebs_api.middleware.request_id import request_id_var

logger = logging.getLogger("jebs_api.access")

# Probed by uptime monitors every few seconds
QUIET_PATHS = frozenset({"/", "/api/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Level by status:
        5xx     → ERROR
        4xx     → WARNING
        2xx/3xx → INFO
    Health probes are passed through without a log line.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if path in QUIET_PATHS and request.method == "GET":
            return await call_next(request)

        start_time = time.perf_counter()
        client_ip = request.client.host if request.client else "unknown"
        method = request.method
        rid = request_id_var.get("")

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000
        status = response.status_code
        if status >= 500:
            log_level = logging.ERROR
        elif status >= 400:
            log_level = logging.WARNING
        else:
            log_level = logging.INFO

        logger.log(
            log_level,
            "%s %s %d %.1fms [%s] from %s",
            method,
            path,
            status,
            duration_ms,
            rid,
            client_ip,
            extra={
                "request_id": rid,
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
