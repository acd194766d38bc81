"""
API Dependencies

Dependency injection for FastAPI routes.
"""

from fastapi import HTTPException, Request

from catalog_search.search.session import SearchSession


def get_search_session(request: Request) -> SearchSession:
    """Session created by the application lifespan."""
    return request.app.state.search_session


def get_ready_session(request: Request) -> SearchSession:
    """Session whose index is loaded; 503 otherwise."""
    session = get_search_session(request)
    if not session.is_ready:
        raise HTTPException(status_code=503, detail="Search index not loaded")
    return session
