import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("app.requests")

CORRELATION_HEADER = "X-Correlation-ID"


class LoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with a correlation id and log method, path, status and timing."""

    async def dispatch(self, request: Request, call_next):
        correlation_id = request.headers.get(CORRELATION_HEADER) or str(uuid.uuid4())[:8]
        request.state.correlation_id = correlation_id
        start = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - start) * 1000
        response.headers[CORRELATION_HEADER] = correlation_id
        log = logger.warning if response.status_code >= 400 else logger.info
        log(f"[{correlation_id}] {request.method} {request.url.path} -> {response.status_code} ({elapsed_ms:.1f}ms)")
        return response
