"""
Movie suggestion API endpoints.

Anyone may suggest a movie; only the admin can see and review suggestions.
"""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from moviedb.api.dependencies import (
    get_db,
    get_metadata_service,
    require_admin,
    to_http_exception,
)
from moviedb.api.models.movie import CatalogAddRequest, MovieResponse
from moviedb.api.models.pending import PendingMovieResponse
from moviedb.core.errors import MovieDBError
from moviedb.core.metadata import MetadataService
from moviedb.database import crud

router = APIRouter(prefix="/api/pending", tags=["pending"])


@router.post("/from-catalog", response_model=PendingMovieResponse, status_code=201)
def suggest_movie(
    request: CatalogAddRequest,
    db: Session = Depends(get_db),
    metadata: MetadataService = Depends(get_metadata_service),
):
    """Suggest a TMDb movie for the collection."""
    existing = crud.get_movie_by_tmdb_id(db, request.tmdb_id)
    if existing:
        raise HTTPException(
            status_code=409,
            detail=f"{existing.title} already exists in the collection",
        )
    try:
        movie_data = metadata.build_movie(request.tmdb_id, request.status)
        return crud.add_pending_movie(db, movie_data)
    except MovieDBError as e:
        raise to_http_exception(e)


@router.get("", response_model=list[PendingMovieResponse])
def list_pending(
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Suggestions awaiting review (admin)."""
    return crud.get_pending_movies(db)


@router.post("/{pending_id}/approve", response_model=MovieResponse)
def approve(
    pending_id: str,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Approve a suggestion and add it to the collection (admin)."""
    try:
        return crud.approve_pending_movie(db, pending_id)
    except MovieDBError as e:
        raise to_http_exception(e)


@router.post("/{pending_id}/reject", response_model=PendingMovieResponse)
def reject(
    pending_id: str,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Reject a suggestion (admin)."""
    try:
        return crud.reject_pending_movie(db, pending_id)
    except MovieDBError as e:
        raise to_http_exception(e)


@router.delete("/{pending_id}", status_code=204)
def delete(
    pending_id: str,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Delete a suggestion (admin)."""
    if not crud.delete_pending_movie(db, pending_id):
        raise HTTPException(status_code=404, detail="Pending movie not found")
