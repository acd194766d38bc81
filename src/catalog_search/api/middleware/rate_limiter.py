"""
Per-client rate limits for the search endpoints.

Clients are keyed by their first forwarded address, so limits stay per user
behind the reverse proxy.
"""

from fastapi import Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded

from catalog_search.api.middleware.request_logging import client_ip
from catalog_search.core.config import settings

limiter = Limiter(key_func=client_ip, enabled=settings.RATE_LIMIT_ENABLED)

SEARCH_API_LIMIT = settings.SEARCH_API_RATE_LIMIT
SEARCH_FRAGMENT_LIMIT = settings.SEARCH_FRAGMENT_RATE_LIMIT


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded):
    """429 in the same ``detail`` shape as the other API errors."""
    return JSONResponse(
        status_code=429,
        content={"detail": f"Rate limit exceeded: {exc.detail}"},
    )
