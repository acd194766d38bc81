"""
Health Check Router

Provides Kubernetes-compatible health check endpoints:
- /health: Simple health for load balancers
- /health/live: Liveness probe (process alive)
- /health/ready: Readiness probe (search index loaded)
"""

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from catalog_search.api.deps import get_search_session

router = APIRouter()


@router.get("/health")
async def health():
    """Simple health check for load balancers."""
    return {"status": "ok"}


@router.get("/health/live")
async def liveness():
    """Kubernetes liveness probe - is the process running?"""
    return {"status": "ok"}


@router.get("/health/ready")
async def readiness(request: Request):
    """Kubernetes readiness probe - is the search index loaded?"""
    session = get_search_session(request)
    checks = {"search_index": session.state.value}
    ready = session.is_ready
    return JSONResponse(
        {"status": "ok" if ready else "degraded", "checks": checks},
        status_code=200 if ready else 503,
    )
