"""Request context middleware."""

import time
from typing import Callable
from uuid import uuid4

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
import structlog

from .logging import bind_request_context, clear_request_context

logger = structlog.get_logger(__name__)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a request id into the logging context and log each request."""

    def __init__(self, app, skip_paths: list = None):
        super().__init__(app)
        self.skip_paths = skip_paths or ["/docs", "/redoc", "/openapi.json", "/health"]

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid4())

        clear_request_context()
        bind_request_context(request_id=request_id)

        start_time = time.time()
        response = await call_next(request)
        response.headers["X-Request-ID"] = request_id

        if not any(request.url.path.startswith(path) for path in self.skip_paths):
            logger.info(
                "Request handled",
                method=request.method,
                path=request.url.path,
                status_code=response.status_code,
                duration_seconds=round(time.time() - start_time, 3)
            )

        return response
