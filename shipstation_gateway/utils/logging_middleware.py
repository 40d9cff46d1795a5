import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

logger = logging.getLogger("shipstation.api")

CORRELATION_HEADER = "X-Correlation-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """One access-log line per request, tagged with the gateway operation it ran.

    Routes record the operation on ``request.state.operation`` (see
    ``routes.deps.get_dispatcher``); requests that never reach the
    dispatcher log ``-``.
    """

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())
        request.state.correlation_id = correlation_id
        start = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[CORRELATION_HEADER] = correlation_id
        operation = getattr(request.state, "operation", None) or "-"
        log = logger.warning if response.status_code >= 400 else logger.info
        log(
            "%s %s -> %d | op=%s | %.1fms | cid=%s",
            request.method,
            request.url.path,
            response.status_code,
            operation,
            elapsed_ms,
            correlation_id,
        )
        return response
