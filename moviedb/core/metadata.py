"""
Movie metadata lookup combining TMDb catalog data with OMDb ratings.

The lookup methods never raise for upstream trouble: search failures give an
empty list, detail failures give None and a failed rating lookup leaves the
rating empty. Only build_movie turns a missing record into an UpstreamError.
"""

import logging
from datetime import date
from typing import Any, Dict, List, Optional

from moviedb.core.errors import MovieDBError, UpstreamError
from moviedb.core.upstream import OmdbClient, TmdbClient

logger = logging.getLogger(__name__)

TMDB_IMAGE_BASE_URL = "https://image.tmdb.org/t/p"
POSTER_SIZE = "w500"
BACKDROP_SIZE = "original"
PLACEHOLDER_POSTER = "https://via.placeholder.com/500x750/241a30/ab9db9?text=No+Poster"
MIN_SEARCH_LENGTH = 2
MAX_SEARCH_RESULTS = 12


def _release_year(release_date: Optional[str]) -> Optional[int]:
    if not release_date:
        return None
    try:
        return date.fromisoformat(release_date[:10]).year
    except ValueError:
        return None


class MetadataService:
    """
    High-level metadata lookups used when adding or suggesting a movie.

    Usage:
        service = MetadataService(TmdbClient(key), OmdbClient(key))
        results = service.search_movies("heat")
        movie_data = service.get_full_movie_data(results[0]["id"])
    """

    def __init__(
        self,
        tmdb: TmdbClient,
        omdb: OmdbClient,
        image_base_url: str = TMDB_IMAGE_BASE_URL,
        poster_size: str = POSTER_SIZE,
    ):
        self.tmdb = tmdb
        self.omdb = omdb
        self.image_base_url = image_base_url.rstrip("/")
        self.poster_size = poster_size

    def search_movies(self, query: str) -> List[Dict[str, Any]]:
        """
        Search TMDb by title.

        Args:
            query: Free-text title query

        Returns:
            Raw TMDb result dicts; empty for short queries or on failure
        """
        query = (query or "").strip()
        if len(query) < MIN_SEARCH_LENGTH:
            return []
        try:
            data = self.tmdb.fetch("search/movie", {"query": query, "include_adult": "false"})
        except MovieDBError as e:
            logger.error("Error searching TMDb: %s", e)
            return []
        return data.get("results") or []

    def get_movie_details(self, tmdb_id: int) -> Optional[Dict[str, Any]]:
        """Fetch TMDb details (with credits) or None on failure."""
        try:
            return self.tmdb.fetch(f"movie/{tmdb_id}", {"append_to_response": "credits"})
        except MovieDBError as e:
            logger.error("Error fetching TMDb details for %s: %s", tmdb_id, e)
            return None

    def get_imdb_rating(self, imdb_id: str) -> Optional[str]:
        """Fetch the IMDb rating string, or None when unavailable."""
        try:
            data = self.omdb.fetch(imdb_id)
        except MovieDBError as e:
            logger.error("Error fetching IMDb rating for %s: %s", imdb_id, e)
            return None
        rating = data.get("imdbRating")
        if not rating or rating == "N/A":
            return None
        return rating

    def get_full_movie_data(self, tmdb_id: int) -> Optional[Dict[str, Any]]:
        """
        Build a movie record from TMDb details plus the OMDb rating.

        The rating is only fetched when TMDb knows the IMDb ID.

        Args:
            tmdb_id: TMDb movie ID

        Returns:
            Movie content dict (status 'watchlist'), or None if the details
            could not be fetched
        """
        details = self.get_movie_details(tmdb_id)
        if not details:
            return None

        imdb_rating = None
        if details.get("imdb_id"):
            imdb_rating = self.get_imdb_rating(details["imdb_id"])

        countries = details.get("production_countries") or []
        return {
            "tmdb_id": details.get("id", tmdb_id),
            "title": details.get("title"),
            "year": _release_year(details.get("release_date")),
            "poster_path": self.poster_url(details.get("poster_path"), placeholder=False),
            "genres": [genre["name"] for genre in details.get("genres") or []],
            "country": countries[0]["name"] if countries else "Unknown",
            "imdb_rating": imdb_rating,
            "plot": details.get("overview") or "",
            "runtime": details.get("runtime") or None,
            "admin_rating": None,
            "letterboxd_rating": None,
            "notes": "",
            "date_watched": None,
            "status": "watchlist",
        }

    def build_movie(self, tmdb_id: int, status: str, today: Optional[date] = None) -> Dict[str, Any]:
        """
        Full movie record ready to store with the chosen status.

        Watched movies get today's date as the watch date.

        Raises:
            UpstreamError: If the TMDb details could not be fetched
        """
        movie_data = self.get_full_movie_data(tmdb_id)
        if movie_data is None:
            raise UpstreamError("Failed to fetch movie details")
        movie_data["status"] = status
        if status == "watched":
            movie_data["date_watched"] = (today or date.today()).isoformat()
        return movie_data

    def poster_url(
        self,
        poster_path: Optional[str],
        size: Optional[str] = None,
        placeholder: bool = True,
    ) -> Optional[str]:
        """Full poster URL; the placeholder image (or None) when there is no poster."""
        if not poster_path:
            return PLACEHOLDER_POSTER if placeholder else None
        return f"{self.image_base_url}/{size or self.poster_size}{poster_path}"

    def backdrop_url(self, backdrop_path: Optional[str], size: str = BACKDROP_SIZE) -> Optional[str]:
        """Full backdrop URL or None."""
        if not backdrop_path:
            return None
        return f"{self.image_base_url}/{size}{backdrop_path}"

    def format_search_result(self, tmdb_movie: Dict[str, Any]) -> Dict[str, Any]:
        """Shape a TMDb search hit for display."""
        vote_average = tmdb_movie.get("vote_average")
        year = _release_year(tmdb_movie.get("release_date"))
        return {
            "id": tmdb_movie["id"],
            "title": tmdb_movie.get("title"),
            "year": year if year is not None else "N/A",
            "poster": self.poster_url(tmdb_movie.get("poster_path")),
            "overview": tmdb_movie.get("overview") or "No overview available",
            "rating": f"{vote_average:.1f}" if vote_average else "N/A",
        }
