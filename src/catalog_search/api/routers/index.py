"""Index Router - serves the prebuilt search index artifact."""

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import FileResponse

router = APIRouter()


@router.get("/search-data.json")
async def search_data(request: Request):
    """Search index artifact fetched once per search session."""
    index_path = request.app.state.index_path
    if not index_path.is_file():
        raise HTTPException(status_code=404, detail="Search index not built")
    return FileResponse(index_path, media_type="application/json")
