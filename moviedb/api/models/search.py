"""
Pydantic schemas for TMDb search results.
"""

from pydantic import BaseModel


class SearchResult(BaseModel):
    """A TMDb search hit with its status in the collection, if any."""

    id: int
    title: str | None
    year: int | str
    poster: str
    overview: str
    rating: str
    existing_status: str | None = None
    existing_id: str | None = None
