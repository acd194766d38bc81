"""Search UI Router - HTML fragment shown under the search box."""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse

from catalog_search.api.deps import get_ready_session
from catalog_search.api.middleware.rate_limiter import SEARCH_FRAGMENT_LIMIT, limiter
from catalog_search.api.routers.search_api import clamp_query
from catalog_search.search.render import renderer
from catalog_search.search.session import SearchSession

router = APIRouter()


@router.get("/search", response_class=HTMLResponse)
@limiter.limit(SEARCH_FRAGMENT_LIMIT)
async def search_fragment(
    request: Request,
    q: str | None = None,
    session: SearchSession = Depends(get_ready_session),
):
    """Rendered results, prompt or not-found state for the query."""
    results = session.search(clamp_query(q))
    return HTMLResponse(renderer.render(results))
