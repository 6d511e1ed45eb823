"""
TMDb search endpoint used by the add / suggest dialog.
"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from moviedb.api.dependencies import get_db, get_metadata_service
from moviedb.api.models.search import SearchResult
from moviedb.core.metadata import MAX_SEARCH_RESULTS, MetadataService
from moviedb.database import crud

router = APIRouter(prefix="/api/search", tags=["search"])


@router.get("", response_model=list[SearchResult])
def search_catalog(
    query: str = Query(""),
    db: Session = Depends(get_db),
    metadata: MetadataService = Depends(get_metadata_service),
):
    """Search TMDb and flag titles that are already in the collection."""
    results = []
    for tmdb_movie in metadata.search_movies(query)[:MAX_SEARCH_RESULTS]:
        result = SearchResult(**metadata.format_search_result(tmdb_movie))
        existing = crud.get_movie_by_tmdb_id(db, tmdb_movie["id"])
        if existing:
            result.existing_status = existing.status
            result.existing_id = existing.id
        results.append(result)
    return results
