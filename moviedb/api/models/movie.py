"""
Pydantic schemas for Movie API.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

MovieStatus = Literal["watchlist", "watched"]


class MovieBase(BaseModel):
    """Content fields shared by movies and suggestions."""

    tmdb_id: int | None = None
    title: str = Field(..., min_length=1)
    year: int | None = None
    poster_path: str | None = None
    genres: list[str] = Field(default_factory=list)
    country: str = "Unknown"
    imdb_rating: str | None = None
    plot: str = ""
    runtime: int | None = Field(None, ge=0)
    admin_rating: float | None = Field(None, ge=0, le=10, multiple_of=0.5)
    letterboxd_rating: str | None = None
    notes: str = ""
    date_watched: str | None = None
    status: MovieStatus = "watchlist"


class MovieCreate(MovieBase):
    """Request body for adding a movie by hand."""


class MovieUpdate(BaseModel):
    """Request body for editing a movie (all fields optional)."""

    title: str | None = Field(None, min_length=1)
    year: int | None = None
    poster_path: str | None = None
    genres: list[str] | None = None
    country: str | None = None
    imdb_rating: str | None = None
    plot: str | None = None
    runtime: int | None = Field(None, ge=0)
    admin_rating: float | None = Field(None, ge=0, le=10, multiple_of=0.5)
    letterboxd_rating: str | None = None
    notes: str | None = None
    date_watched: str | None = Field(None, pattern=r"^\d{4}-\d{2}-\d{2}$")
    status: MovieStatus | None = None


class MovieResponse(MovieBase):
    """Response model for a single movie."""

    id: str
    date_added: datetime | None = None
    last_modified: datetime | None = None

    class Config:
        from_attributes = True


class MovieList(BaseModel):
    """Response model for list of movies with total count."""

    movies: list[MovieResponse]
    total: int


class CatalogAddRequest(BaseModel):
    """Request body for adding (or suggesting) a movie by its TMDb ID."""

    tmdb_id: int = Field(..., gt=0)
    status: MovieStatus = "watchlist"


class BatchDeleteRequest(BaseModel):
    """Request body for deleting several movies at once."""

    ids: list[str] = Field(..., min_length=1)


class BatchUpdateRequest(BaseModel):
    """Request body for applying the same changes to several movies."""

    ids: list[str] = Field(..., min_length=1)
    updates: MovieUpdate


class ClearRequest(BaseModel):
    """Request body for clearing the collection; confirm must be 'DELETE'."""

    confirm: str


class CountResponse(BaseModel):
    """Number of records affected by a bulk operation."""

    count: int


class FacetsResponse(BaseModel):
    """Values available for the genre, country and decade filters."""

    genres: list[str]
    countries: list[str]
    decades: list[int]


class StatsResponse(BaseModel):
    """Collection statistics."""

    total: int
    watched_count: int
    watchlist_count: int
    average_rating: float | None
    watched_this_month: int
