"""
QuickNotes Backend — Request Body Size Limit Middleware
=========================================================

What:  Rejects requests whose declared body is larger than max_body_size.
How:   Inspects the Content-Length header before the route handler runs
       and answers 413 with a plain-text message. The handler, and
       therefore the database, never sees the request.
When:  Before the access log; after the request id has been assigned.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.types import ASGIApp

from quicknotes.middleware.request_id import request_id_var

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Enforces an upper bound on request body size.

    Responses:
        413 Request Entity Too Large: Content-Length above the limit
        400 Bad Request: Content-Length is not a non-negative integer
    """

    def __init__(self, app: ASGIApp, max_body_size: int = 1_048_576):
        super().__init__(app)
        self.max_body_size = max_body_size

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        declared = request.headers.get("content-length")
        if declared is None:
            return await call_next(request)

        try:
            length = int(declared)
        except ValueError:
            length = -1
        if length < 0:
            logger.warning("[%s] Invalid Content-Length: %r", request_id_var.get(""), declared)
            return PlainTextResponse("invalid Content-Length header", status_code=400)

        if length > self.max_body_size:
            logger.warning(
                "[%s] Request body too large: %d bytes (limit %d)",
                request_id_var.get(""),
                length,
                self.max_body_size,
            )
            return PlainTextResponse(
                f"request body too large: limit is {self.max_body_size} bytes",
                status_code=413,
            )

        return await call_next(request)
