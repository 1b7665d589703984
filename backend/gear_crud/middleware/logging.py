"""
Gear CRUD — Request Logging Middleware
=======================================

What:  One access-log line per HTTP request: method, path, status, duration.
How:   Measures the time spent in the rest of the stack and logs at a level
       chosen from the status class (5xx ERROR, 4xx WARNING, else INFO).
When:  Runs inside RequestIDMiddleware, so RequestIDLogFilter stamps each
       access line with the request ID.

What we log vs what we DON'T log:
    ✅ Log: method, path, query string, status, duration, client IP, request ID
    ❌ Don't log: request bodies
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("gear_crud.access")

# Probed every few seconds by orchestrators; not worth a log line each
_QUIET_PATHS = frozenset({"/ping", "/health"})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        client_ip = getattr(request.client, "host", "unknown") if request.client else "unknown"
        method = request.method
        path = request.url.path
        query = request.url.query

        if path in _QUIET_PATHS:
            return await call_next(request)

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
            "%s %s%s %d %.1fms from %s",
            method,
            path,
            f"?{query}" if query else "",
            status,
            duration_ms,
            client_ip,
            extra={
                "method": method,
                "path": path,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": client_ip,
            },
        )

        return response
