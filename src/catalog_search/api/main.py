import logging
from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from slowapi.errors import RateLimitExceeded
from starlette.middleware.base import BaseHTTPMiddleware

from catalog_search.api.middleware.rate_limiter import limiter, rate_limit_exceeded_handler
from catalog_search.api.middleware.request_logging import RequestLoggingMiddleware
from catalog_search.api.routers import health, index, search, search_api
from catalog_search.core.config import settings
from catalog_search.core.errors import IndexFormatError
from catalog_search.search.indexer import read_index
from catalog_search.search.session import SearchSession

logger = logging.getLogger(__name__)


# Responses are JSON or inert HTML fragments: no scripts, styles or frames
SECURITY_HEADERS = {
    "Content-Security-Policy": "default-src 'none'; frame-ancestors 'none'; base-uri 'none'",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Lock down every response; a route may still set its own values."""

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response


@asynccontextmanager
async def lifespan(app: FastAPI):
    # --- Search index ---
    index_path = Path(settings.INDEX_PATH)
    session = SearchSession(
        index_url=settings.INDEX_URL, timeout=settings.INDEX_FETCH_TIMEOUT_SEC
    )
    if index_path.is_file():
        try:
            session.load_documents(read_index(index_path))
        except IndexFormatError as e:
            logger.error(f"Search index at {index_path} is invalid: {e}")
    else:
        logger.warning("Search index not found at %s; searches return 503", index_path)

    app.state.index_path = index_path
    app.state.search_session = session
    yield


# --- OpenAPI Metadata ---
app = FastAPI(
    lifespan=lifespan,
    title="Catalog Search",
    version="0.1.0",
    description="Keyphrase search over a catalog of code snippets and collections.",
    openapi_tags=[
        {"name": "search", "description": "Search endpoints"},
        {"name": "index", "description": "Search index artifact"},
        {"name": "system", "description": "Health checks"},
        {"name": "ui", "description": "HTML fragments"},
    ],
)

# --- Rate Limiter ---
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)

# --- Middleware (order matters: last added = first executed) ---
app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(RequestLoggingMiddleware)

# --- CORS ---
if settings.CORS_ORIGINS:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

# Include Routers
app.include_router(health.router, tags=["system"])
app.include_router(index.router, tags=["index"])
app.include_router(search.router, tags=["ui"])
app.include_router(search_api.router, prefix="/api/v1", tags=["search"])


def run() -> None:
    uvicorn.run(
        "catalog_search.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
