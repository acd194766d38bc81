"""Search API Router - JSON keyphrase search."""

import logging
from typing import Any

from fastapi import APIRouter, Depends, Request

from catalog_search.api.deps import get_ready_session
from catalog_search.api.middleware.rate_limiter import SEARCH_API_LIMIT, limiter
from catalog_search.core.config import settings
from catalog_search.search.searcher import SearchHit
from catalog_search.search.session import SearchSession

logger = logging.getLogger(__name__)

router = APIRouter()


def clamp_query(q: str | None) -> str:
    query = (q or "").strip()
    if len(query) > settings.MAX_QUERY_LEN:
        query = query[: settings.MAX_QUERY_LEN]
    return query


def _hit_to_dict(hit: SearchHit) -> dict[str, Any]:
    doc = hit.document
    return {
        "id": doc.id,
        "url": doc.url,
        "title": doc.title,
        "tag": doc.tag,
        "type": doc.type.value,
        "rank": doc.rank,
        "score": hit.score,
    }


@router.get("/search")
@limiter.limit(SEARCH_API_LIMIT)
async def api_search(
    request: Request,
    q: str | None = None,
    session: SearchSession = Depends(get_ready_session),
):
    """Keyphrase search (JSON) over the loaded search index."""
    query = clamp_query(q)
    results = session.search(query)

    logger.debug(
        "Search (query_len=%s): state=%s total=%s",
        len(query),
        results.state.value,
        results.total,
    )
    return {
        "query": results.query,
        "state": results.state.value,
        "total": results.total,
        "collections": [_hit_to_dict(h) for h in results.collections],
        "snippets": [_hit_to_dict(h) for h in results.snippets],
    }
