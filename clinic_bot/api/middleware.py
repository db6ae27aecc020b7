"""
Request id middleware.
Binds a request id to the logging context and echoes it in the response.
"""

import time
from collections.abc import Callable
from typing import Any

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from clinic_bot.utils.logger import get_logger, new_request_id, set_request_id

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class RequestIdMiddleware(BaseHTTPMiddleware):
    """
    Tags every request with an id (taken from ``X-Request-ID`` when present)
    and logs method, path, status and latency.
    """

    EXCLUDE_PATHS: tuple[str, ...] = ("/health",)

    async def dispatch(
        self, request: Request, call_next: Callable[[Request], Any]
    ) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or new_request_id()
        set_request_id(request_id)
        start_time = time.perf_counter()
        try:
            response = await call_next(request)
        finally:
            set_request_id(None)

        response.headers[REQUEST_ID_HEADER] = request_id
        if request.url.path not in self.EXCLUDE_PATHS:
            logger.info(
                "http_request",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                status=response.status_code,
                elapsed_ms=round((time.perf_counter() - start_time) * 1000, 1),
            )
        return response
