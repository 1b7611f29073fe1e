import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

log = logging.getLogger("gateway")


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Tag each request with X-Request-ID (reusing the caller's) and log API calls with latency."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or uuid.uuid4().hex
        request.state.request_id = request_id
        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers["X-Request-ID"] = request_id
        if request.url.path.startswith("/api/"):
            log.info("%s %s -> %s (%s ms) [%s]", request.method, request.url.path, response.status_code, latency_ms, request_id)
        return response
