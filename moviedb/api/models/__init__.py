"""
Pydantic schemas for API request/response validation.
"""

from moviedb.api.models.movie import (
    MovieCreate,
    MovieUpdate,
    MovieResponse,
    MovieList,
    CatalogAddRequest,
    BatchDeleteRequest,
    BatchUpdateRequest,
    ClearRequest,
    CountResponse,
    FacetsResponse,
    StatsResponse,
)
from moviedb.api.models.pending import PendingMovieResponse
from moviedb.api.models.admin import (
    LoginRequest,
    SessionResponse,
    PasswordChangeRequest,
    PasswordChangeResponse,
)
from moviedb.api.models.search import SearchResult

__all__ = [
    "MovieCreate",
    "MovieUpdate",
    "MovieResponse",
    "MovieList",
    "CatalogAddRequest",
    "BatchDeleteRequest",
    "BatchUpdateRequest",
    "ClearRequest",
    "CountResponse",
    "FacetsResponse",
    "StatsResponse",
    "PendingMovieResponse",
    "LoginRequest",
    "SessionResponse",
    "PasswordChangeRequest",
    "PasswordChangeResponse",
    "SearchResult",
]
