"""
Access log for the search service.

Every request gets a correlation id, taken from ``X-Request-ID`` when the
caller sends one, which is echoed back on the response. Search requests also
log the query length (never the query text).
"""

import logging
import time
import uuid

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger("catalog_search.api")

REQUEST_ID_HEADER = "X-Request-ID"
SEARCH_PATHS = frozenset({"/search", "/api/v1/search"})


def client_ip(request: Request) -> str:
    """First X-Forwarded-For hop behind a proxy, else the peer address."""
    forwarded_for = request.headers.get("X-Forwarded-For")
    if forwarded_for:
        return forwarded_for.split(",")[0].strip()
    if request.client:
        return request.client.host
    return "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get(REQUEST_ID_HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        extra = {
            "request_id": request_id,
            "path": request.url.path,
            "client_ip": client_ip(request),
        }
        if request.url.path in SEARCH_PATHS:
            extra["query_len"] = len(request.query_params.get("q", ""))

        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path, extra=extra)
            raise

        duration_ms = round((time.perf_counter() - started) * 1000, 2)
        logger.info(
            "%s %s -> %s (%s ms)",
            request.method,
            request.url.path,
            response.status_code,
            duration_ms,
            extra={**extra, "status_code": response.status_code, "duration_ms": duration_ms},
        )
        response.headers[REQUEST_ID_HEADER] = request_id
        return response
