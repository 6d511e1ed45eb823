"""
Pydantic schemas for the suggestion (pending movie) API.
"""

from datetime import datetime
from typing import Literal

from moviedb.api.models.movie import MovieBase


class PendingMovieResponse(MovieBase):
    """Response model for a suggested movie."""

    id: str
    suggestion_status: Literal["pending", "approved", "rejected"]
    date_suggested: datetime | None = None
    approved_at: datetime | None = None
    rejected_at: datetime | None = None

    class Config:
        from_attributes = True
