"""Per-request id and access logging.

Clients poll the thread list, the open thread and the typing state every few
seconds, so successful polling GETs are logged at DEBUG and everything else at
INFO. Slow requests are always logged as warnings.
"""
from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

logger = logging.getLogger("tradielink.access")

correlation_id_ctx: ContextVar[str] = ContextVar("correlation_id", default="")

HEADER = "X-Request-ID"
POLLED_PREFIXES = ("/messages/threads", "/messages/typing/")


class CorrelationIdFilter(logging.Filter):
    """Expose the current request id to log formats as ``%(correlation_id)s``."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = correlation_id_ctx.get() or "-"
        return True


def _is_poll(request: Request) -> bool:
    return request.method == "GET" and request.url.path.startswith(POLLED_PREFIXES)


class RequestContextMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: ASGIApp, slow_request_ms: float = 1000.0) -> None:
        super().__init__(app)
        self._slow_request_ms = slow_request_ms

    async def dispatch(
        self,
        request: Request,
        call_next: RequestResponseEndpoint,
    ) -> Response:
        request_id = request.headers.get(HEADER) or uuid.uuid4().hex
        token = correlation_id_ctx.set(request_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000

            if elapsed_ms >= self._slow_request_ms:
                level = logging.WARNING
            elif response.status_code < 400 and _is_poll(request):
                level = logging.DEBUG
            else:
                level = logging.INFO
            logger.log(
                level,
                "%s %s %d %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )

            response.headers[HEADER] = request_id
            return response
        finally:
            correlation_id_ctx.reset(token)
