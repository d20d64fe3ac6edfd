"""Access logging middleware."""

import time
import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortlink.common.logging_config import get_logger


class LoggingMiddleware(BaseHTTPMiddleware):
    """Log one access line per request.

    Server errors are logged at WARNING, unhandled exceptions at ERROR with
    the traceback before being re-raised. Method, path, status and duration
    are also attached as ``extra`` fields for the JSON formatter.
    """

    def __init__(self, app, logger: logging.Logger = None):
        super().__init__(app)
        self.logger = logger or get_logger("web")

    async def dispatch(self, request: Request, call_next: Callable):
        start_time = time.perf_counter()
        fields = {
            "method": request.method,
            "path": request.url.path,
            "client": request.client.host if request.client else "unknown",
        }

        try:
            response = await call_next(request)
        except Exception:
            fields["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
            self.logger.exception(
                f"{fields['method']} {fields['path']} failed after {fields['duration_ms']}ms",
                extra=fields,
            )
            raise

        fields["status"] = response.status_code
        fields["duration_ms"] = round((time.perf_counter() - start_time) * 1000, 2)
        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        self.logger.log(
            level,
            f"{fields['client']} {fields['method']} {fields['path']} "
            f"{fields['status']} {fields['duration_ms']}ms",
            extra=fields,
        )
        return response
