"""
QuickNotes Backend — Request Logging Middleware
=================================================

What:  One access-log line per HTTP request.
How:   Measures the time spent in the rest of the stack and logs
       method, path, status, duration, request id and client address.

Log line:
    2026-10-18T12:00:00 [INFO] quicknotes.access: POST /note 201 3.2ms [a1b2c3d4] from 127.0.0.1

Request bodies are never logged; note content stays out of the logs.
"""

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from quicknotes.middleware.request_id import request_id_var

logger = logging.getLogger("quicknotes.access")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs each request once the response is ready.

    Level by status code:
        5xx → ERROR
        4xx → WARNING
        everything else → INFO
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        start_time = time.perf_counter()

        # request.client is None under some test transports
        client_ip = request.client.host if request.client else "unknown"

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
            request.method,
            request.url.path,
            status,
            duration_ms,
            request_id_var.get(""),
            client_ip,
        )

        return response
