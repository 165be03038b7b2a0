"""
HeroDex Backend — Request Body Size Limit Middleware
======================================================

What:  Rejects requests whose declared body is larger than
       settings.max_body_size (50MB by default).
How:   Compares the Content-Length header against the limit before the
       request reaches any route; oversized requests get a 413 JSON error.
When:  First in the middleware chain.

Requests without Content-Length (chunked uploads) are passed through.
"""

import logging
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from herodex.config import settings
from herodex.exceptions import PayloadTooLargeError

logger = logging.getLogger(__name__)


class BodySizeLimitMiddleware(BaseHTTPMiddleware):
    """
    Content-Length based body limit.

    The limit is read at construction so tests can build an app with a
    smaller one: app.add_middleware(BodySizeLimitMiddleware, max_body_size=10).
    """

    def __init__(self, app, max_body_size: Optional[int] = None, **kwargs):
        super().__init__(app, **kwargs)
        self.max_body_size = settings.max_body_size if max_body_size is None else max_body_size

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        declared = request.headers.get("content-length")
        if declared is not None and declared.isdigit() and int(declared) > self.max_body_size:
            exc = PayloadTooLargeError(max_size=self.max_body_size)
            logger.warning(
                "Rejected %s %s: body of %s bytes exceeds %d",
                request.method,
                request.url.path,
                declared,
                self.max_body_size,
            )
            return JSONResponse(
                status_code=413,
                content={
                    "error": "payload_too_large",
                    "message": exc.message,
                    "details": exc.context,
                },
            )

        return await call_next(request)
