"""
API configuration loaded from environment or defaults.
"""

import os
from pathlib import Path

from moviedb.core.metadata import TMDB_IMAGE_BASE_URL
from moviedb.core.upstream import OMDB_API_BASE_URL, TMDB_API_BASE_URL

# Proxy responses may be cached by a shared cache for an hour
PROXY_CACHE_CONTROL = "s-maxage=3600, stale-while-revalidate"


def get_database_path() -> str:
    """Get database file path from env or default."""
    return os.getenv("DATABASE_URL", "sqlite:///").replace("sqlite:///", "") or str(
        Path(__file__).resolve().parents[2] / "data" / "moviedb.db"
    )


def get_tmdb_api_key() -> str | None:
    """Get the TMDb API key (None when not configured)."""
    return os.getenv("TMDB_API_KEY") or None


def get_omdb_api_key() -> str | None:
    """Get the OMDb API key (None when not configured)."""
    return os.getenv("OMDB_API_KEY") or None


def get_tmdb_base_url() -> str:
    return os.getenv("TMDB_BASE_URL", TMDB_API_BASE_URL)


def get_omdb_base_url() -> str:
    return os.getenv("OMDB_BASE_URL", OMDB_API_BASE_URL)


def get_tmdb_image_base_url() -> str:
    return os.getenv("TMDB_IMAGE_BASE_URL", TMDB_IMAGE_BASE_URL)


def get_upstream_timeout() -> float:
    """Get timeout in seconds for calls to TMDb/OMDb."""
    return float(os.getenv("UPSTREAM_TIMEOUT", "10"))


def get_admin_password_hash() -> str | None:
    """Get the SHA-256 hex digest of the admin password."""
    return os.getenv("ADMIN_PASSWORD_HASH") or None


def get_admin_session_timeout() -> int:
    """Get admin session lifetime in seconds (default 24 hours)."""
    return int(os.getenv("ADMIN_SESSION_TIMEOUT", str(24 * 60 * 60)))


def get_log_level() -> str:
    """Get log level from env or default."""
    return os.getenv("LOG_LEVEL", "INFO").upper()


def get_api_host() -> str:
    """Get API host for binding."""
    return os.getenv("API_HOST", "0.0.0.0")


def get_api_port() -> int:
    """Get API port."""
    return int(os.getenv("API_PORT", "8000"))
