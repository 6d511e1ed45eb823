"""
Movie collection API endpoints.

Reads are public; every write requires an admin session.
"""

import logging
from datetime import date
from typing import Any

from fastapi import APIRouter, Body, Depends, Query, HTTPException
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaError
from sqlalchemy.orm import Session

from moviedb.api.dependencies import (
    get_db,
    get_metadata_service,
    require_admin,
    to_http_exception,
)
from moviedb.api.models.movie import (
    BatchDeleteRequest,
    BatchUpdateRequest,
    CatalogAddRequest,
    ClearRequest,
    CountResponse,
    FacetsResponse,
    MovieCreate,
    MovieList,
    MovieResponse,
    MovieUpdate,
    StatsResponse,
)
from moviedb.core import filters
from moviedb.core.errors import MovieDBError, ValidationError
from moviedb.core.metadata import MetadataService
from moviedb.database import crud

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/movies", tags=["movies"])


def get_filter_state(
    tab: str | None = Query(None, pattern="^(watched|watchlist)$"),
    search: str = Query(""),
    genres: list[str] = Query([]),
    country: str = Query(""),
    decades: list[int] = Query([]),
    min_rating: float = Query(0.0, ge=0, le=10),
    sort: str = Query("date_watched"),
) -> filters.FilterState:
    """Build a FilterState from query parameters; tab None means every status."""
    return filters.FilterState(
        genres=genres,
        country=country,
        decades=decades,
        min_rating=min_rating,
        search=search.strip(),
        sort=sort,
        current_tab=tab or "",
    )


def _filtered(db: Session, state: filters.FilterState) -> list:
    movies = crud.get_movies(db)
    if not state.current_tab:
        # No tab selected: sort the whole collection
        return filters.apply_sort(movies, state.sort)
    return filters.apply_filters(movies, state)


@router.get("", response_model=MovieList)
def list_movies(
    state: filters.FilterState = Depends(get_filter_state),
    db: Session = Depends(get_db),
):
    """List movies for a tab with filters and sorting applied."""
    movies = _filtered(db, state)
    return MovieList(
        movies=[MovieResponse.model_validate(m) for m in movies],
        total=len(movies),
    )


@router.get("/facets", response_model=FacetsResponse)
def get_facets(db: Session = Depends(get_db)):
    """Genres, countries and decades present in the collection."""
    movies = crud.get_movies(db)
    return FacetsResponse(
        genres=filters.get_all_genres(movies),
        countries=filters.get_all_countries(movies),
        decades=filters.get_all_decades(movies),
    )


@router.get("/stats", response_model=StatsResponse)
def get_stats(db: Session = Depends(get_db)):
    """Collection statistics."""
    movies = crud.get_movies(db)
    return StatsResponse(total=len(movies), **filters.compute_stats(movies))


@router.get("/random", response_model=MovieResponse)
def random_movie(
    state: filters.FilterState = Depends(get_filter_state),
    db: Session = Depends(get_db),
):
    """Pick a random movie matching the current filters."""
    if not state.current_tab:
        state.current_tab = "watched"
    movie = filters.pick_random(crud.get_movies(db), state)
    if movie is None:
        raise HTTPException(status_code=404, detail="No movies found with current filters")
    return movie


@router.get("/export")
def export_movies(db: Session = Depends(get_db)):
    """Download the whole collection as JSON."""
    data = crud.export_movies(db)
    filename = f"moviedb-export-{date.today().isoformat()}.json"
    return JSONResponse(
        content=data,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/lookup/{tmdb_id}", response_model=MovieResponse)
def get_movie_by_tmdb_id(tmdb_id: int, db: Session = Depends(get_db)):
    """Find the collection entry for a TMDb ID."""
    movie = crud.get_movie_by_tmdb_id(db, tmdb_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@router.get("/{movie_id}", response_model=MovieResponse)
def get_movie(movie_id: str, db: Session = Depends(get_db)):
    """Get movie details by ID."""
    movie = crud.get_movie(db, movie_id)
    if not movie:
        raise HTTPException(status_code=404, detail="Movie not found")
    return movie


@router.post("", response_model=MovieResponse, status_code=201)
def create_movie(
    movie_in: MovieCreate,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Add a movie by hand (admin)."""
    try:
        return crud.add_movie(db, movie_in.model_dump())
    except MovieDBError as e:
        raise to_http_exception(e)


@router.post("/from-catalog", response_model=MovieResponse, status_code=201)
def add_movie_from_catalog(
    request: CatalogAddRequest,
    db: Session = Depends(get_db),
    metadata: MetadataService = Depends(get_metadata_service),
    _: str = Depends(require_admin),
):
    """Fetch a movie from TMDb/OMDb and add it to the collection (admin)."""
    existing = crud.get_movie_by_tmdb_id(db, request.tmdb_id)
    if existing:
        raise HTTPException(
            status_code=409,
            detail=f"{existing.title} already exists in the collection",
        )
    try:
        movie_data = metadata.build_movie(request.tmdb_id, request.status)
        return crud.add_movie(db, movie_data)
    except MovieDBError as e:
        raise to_http_exception(e)


@router.patch("/{movie_id}", response_model=MovieResponse)
def update_movie(
    movie_id: str,
    updates: MovieUpdate,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Edit a movie (admin)."""
    try:
        return crud.update_movie(db, movie_id, **updates.model_dump(exclude_unset=True))
    except MovieDBError as e:
        raise to_http_exception(e)


@router.delete("/{movie_id}", status_code=204)
def delete_movie(
    movie_id: str,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Delete a movie (admin)."""
    if not crud.delete_movie(db, movie_id):
        raise HTTPException(status_code=404, detail="Movie not found")


@router.post("/batch-delete", response_model=CountResponse)
def batch_delete(
    request: BatchDeleteRequest,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Delete several movies at once (admin)."""
    try:
        return CountResponse(count=crud.batch_delete_movies(db, request.ids))
    except MovieDBError as e:
        raise to_http_exception(e)


@router.post("/batch-update", response_model=CountResponse)
def batch_update(
    request: BatchUpdateRequest,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Apply the same changes to several movies (admin)."""
    try:
        count = crud.batch_update_movies(
            db, request.ids, **request.updates.model_dump(exclude_unset=True)
        )
        return CountResponse(count=count)
    except MovieDBError as e:
        raise to_http_exception(e)


def _validate_import(records: Any) -> list:
    """Check every record against the movie schema before anything is written."""
    if not isinstance(records, list):
        raise ValidationError("Import data must be a JSON array of movies")
    validated = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise ValidationError("Each imported movie must be a JSON object")
        try:
            movie = MovieCreate.model_validate(record)
        except SchemaError as e:
            raise ValidationError(f"Invalid movie at position {index}", str(e)) from e
        # Keep the exported timestamps alongside the normalized content
        validated.append({**record, **movie.model_dump()})
    return validated


@router.post("/import", response_model=CountResponse)
def import_movies(
    records: Any = Body(...),
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Import an exported JSON array; identifiers are regenerated (admin)."""
    try:
        return CountResponse(count=crud.import_movies(db, _validate_import(records)))
    except MovieDBError as e:
        db.rollback()
        raise to_http_exception(e)


@router.post("/clear", response_model=CountResponse)
def clear_movies(
    request: ClearRequest,
    db: Session = Depends(get_db),
    _: str = Depends(require_admin),
):
    """Delete the whole collection (admin); confirm must be 'DELETE'."""
    if request.confirm != "DELETE":
        raise HTTPException(status_code=400, detail="Confirmation text does not match")
    return CountResponse(count=crud.clear_movies(db))
