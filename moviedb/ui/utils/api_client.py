"""
FastAPI client wrapper for Streamlit UI.
"""

import os
import requests


def get_api_base_url() -> str:
    """Get API base URL from env or default."""
    return os.getenv("API_BASE_URL", "http://localhost:8000").rstrip("/")


def _headers(token: str | None) -> dict:
    return {"X-Admin-Token": token} if token else {}


def error_message(error: Exception) -> str:
    """Human-readable message for a failed API call."""
    if isinstance(error, requests.HTTPError) and error.response is not None:
        try:
            body = error.response.json()
        except ValueError:
            return str(error)
        if not isinstance(body, dict):
            return str(error)
        detail = body.get("detail") or body.get("error")
        return detail if isinstance(detail, str) else str(error)
    return str(error)


def health_check() -> dict:
    """Check API health."""
    r = requests.get(f"{get_api_base_url()}/api/health", timeout=5)
    r.raise_for_status()
    return r.json()


# ==================== COLLECTION ====================

def list_movies(
    tab: str | None = None,
    search: str = "",
    genres: list[str] | None = None,
    country: str = "",
    decades: list[int] | None = None,
    min_rating: float = 0.0,
    sort: str = "date_watched",
) -> dict:
    """List movies with filters applied server-side."""
    params = {
        "search": search,
        "genres": genres or [],
        "country": country,
        "decades": decades or [],
        "min_rating": min_rating,
        "sort": sort,
    }
    if tab:
        params["tab"] = tab
    r = requests.get(f"{get_api_base_url()}/api/movies", params=params, timeout=10)
    r.raise_for_status()
    return r.json()


def get_facets() -> dict:
    """Genres, countries and decades available for filtering."""
    r = requests.get(f"{get_api_base_url()}/api/movies/facets", timeout=10)
    r.raise_for_status()
    return r.json()


def get_stats() -> dict:
    """Collection statistics."""
    r = requests.get(f"{get_api_base_url()}/api/movies/stats", timeout=10)
    r.raise_for_status()
    return r.json()


def random_movie(**filters) -> dict | None:
    """Random movie matching the filters, or None when nothing matches."""
    params = {key: value for key, value in filters.items() if value not in (None, "", [])}
    r = requests.get(f"{get_api_base_url()}/api/movies/random", params=params, timeout=10)
    if r.status_code == 404:
        return None
    r.raise_for_status()
    return r.json()


def update_movie(token: str, movie_id: str, **updates) -> dict:
    """Edit a movie."""
    r = requests.patch(
        f"{get_api_base_url()}/api/movies/{movie_id}",
        json=updates,
        headers=_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def delete_movie(token: str, movie_id: str) -> None:
    """Delete a movie."""
    r = requests.delete(
        f"{get_api_base_url()}/api/movies/{movie_id}",
        headers=_headers(token),
        timeout=10,
    )
    r.raise_for_status()


def export_movies() -> bytes:
    """Raw JSON export of the collection."""
    r = requests.get(f"{get_api_base_url()}/api/movies/export", timeout=30)
    r.raise_for_status()
    return r.content


def import_movies(token: str, records: list) -> int:
    """Import an exported collection; returns the number of movies imported."""
    r = requests.post(
        f"{get_api_base_url()}/api/movies/import",
        json=records,
        headers=_headers(token),
        timeout=30,
    )
    r.raise_for_status()
    return r.json()["count"]


def clear_movies(token: str, confirm: str) -> int:
    """Delete the whole collection; confirm must be 'DELETE'."""
    r = requests.post(
        f"{get_api_base_url()}/api/movies/clear",
        json={"confirm": confirm},
        headers=_headers(token),
        timeout=30,
    )
    r.raise_for_status()
    return r.json()["count"]


# ==================== SEARCH & SUGGESTIONS ====================

def search_catalog(query: str) -> list:
    """Search TMDb; hits carry existing_status when already collected."""
    r = requests.get(f"{get_api_base_url()}/api/search", params={"query": query}, timeout=15)
    r.raise_for_status()
    return r.json()


def add_from_catalog(token: str, tmdb_id: int, status: str) -> dict:
    """Add a TMDb movie directly to the collection (admin)."""
    r = requests.post(
        f"{get_api_base_url()}/api/movies/from-catalog",
        json={"tmdb_id": tmdb_id, "status": status},
        headers=_headers(token),
        timeout=30,
    )
    r.raise_for_status()
    return r.json()


def suggest_from_catalog(tmdb_id: int, status: str) -> dict:
    """Suggest a TMDb movie for admin approval."""
    r = requests.post(
        f"{get_api_base_url()}/api/pending/from-catalog",
        json={"tmdb_id": tmdb_id, "status": status},
        timeout=30,
    )
    r.raise_for_status()
    return r.json()


def list_pending(token: str) -> list:
    """Suggestions awaiting review."""
    r = requests.get(f"{get_api_base_url()}/api/pending", headers=_headers(token), timeout=10)
    r.raise_for_status()
    return r.json()


def approve_pending(token: str, pending_id: str) -> dict:
    """Approve a suggestion."""
    r = requests.post(
        f"{get_api_base_url()}/api/pending/{pending_id}/approve",
        headers=_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def reject_pending(token: str, pending_id: str) -> dict:
    """Reject a suggestion."""
    r = requests.post(
        f"{get_api_base_url()}/api/pending/{pending_id}/reject",
        headers=_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


# ==================== ADMIN ====================

def login(password: str) -> dict:
    """Log in as admin; returns token and expires_at."""
    r = requests.post(
        f"{get_api_base_url()}/api/admin/login",
        json={"password": password},
        timeout=10,
    )
    r.raise_for_status()
    return r.json()


def logout(token: str) -> None:
    """End the admin session."""
    r = requests.post(f"{get_api_base_url()}/api/admin/logout", headers=_headers(token), timeout=10)
    r.raise_for_status()


def change_password(token: str, current: str, new: str, confirm: str) -> str:
    """Change the admin password; returns the new hash."""
    r = requests.post(
        f"{get_api_base_url()}/api/admin/password",
        json={"current_password": current, "new_password": new, "confirm_password": confirm},
        headers=_headers(token),
        timeout=10,
    )
    r.raise_for_status()
    return r.json()["password_hash"]
