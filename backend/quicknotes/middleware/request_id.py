"""
QuickNotes Backend — Request ID Middleware
============================================

What:  Assigns a correlation id to each request and echoes it in the response.
How:   Takes the client's X-Request-ID header or generates a short UUID,
       stores it in a ContextVar.
Who:   Read by the access log and by the exception handlers in main.py.
"""

import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

# Coroutine-local: concurrent requests on one event loop each see their own id
request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Attach X-Request-ID to the request context and to the response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        # 8 hex chars are enough to correlate log lines of one process
        rid = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex[:8]

        request_id_var.set(rid)

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
