#!/usr/bin/env python3

"""
Request Logging Middleware for ynal.

Emits one ``INFO`` line per request once the response status is known:

    GET [200] /mit (1ms)

The path includes the query string, if any. Logging has no effect on the
response itself.
"""

import logging
import time
from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)


def format_request_line(method: str, status_code: int, path: str, duration_ms: int) -> str:
    """Build the log line for a completed request."""
    return f"{method} [{status_code}] {path} ({duration_ms}ms)"


class RequestLogMiddleware(BaseHTTPMiddleware):
    """
    Middleware that logs method, final status code and path for every request.

    Configuration is read from the application settings object passed at
    construction time via the ``config`` keyword argument.
    """

    def __init__(self, app, config) -> None:
        """
        Initialise the request-log middleware.

        Args:
            app: FastAPI / ASGI application instance.
            config: Application settings object (must expose a
                ``request_logging_enabled`` boolean attribute).
        """
        super().__init__(app)
        self.enabled = config.request_logging_enabled

        if self.enabled:
            logger.info("Request logging middleware enabled")
        else:
            logger.info("Request logging middleware disabled")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process the request, call the next handler, then log the outcome.

        Args:
            request: Incoming HTTP request.
            call_next: Next middleware or route handler in the chain.

        Returns:
            HTTP response (unmodified).
        """
        if not self.enabled:
            return await call_next(request)

        start_time = time.monotonic()
        response = await call_next(request)
        duration_ms = int((time.monotonic() - start_time) * 1000)

        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"
        logger.info(format_request_line(request.method, response.status_code, path, duration_ms))
        return response
