"""
FastAPI dependency injection for database session, upstream clients and admin sessions.
"""

import logging
from typing import Generator

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from moviedb.database.connection import get_db_manager
from moviedb.core.auth import AdminSessionStore
from moviedb.core.errors import MovieDBError
from moviedb.core.metadata import MetadataService
from moviedb.core.upstream import OmdbClient, TmdbClient
from moviedb.api.config import (
    get_admin_password_hash,
    get_admin_session_timeout,
    get_database_path,
    get_omdb_api_key,
    get_omdb_base_url,
    get_tmdb_api_key,
    get_tmdb_base_url,
    get_tmdb_image_base_url,
    get_upstream_timeout,
)

logger = logging.getLogger(__name__)


def get_db() -> Generator[Session, None, None]:
    """Yield database session for FastAPI Depends()."""
    db_path = get_database_path()
    if db_path.startswith("sqlite"):
        db_path = db_path.replace("sqlite:///", "")
    if not db_path.strip():
        db_path = None  # use connection default
    db_manager = get_db_manager(db_path=db_path) if db_path else get_db_manager()
    with db_manager.session_scope() as session:
        yield session


def get_tmdb_client() -> TmdbClient:
    """TMDb client with the server-side API key."""
    return TmdbClient(get_tmdb_api_key(), get_tmdb_base_url(), timeout=get_upstream_timeout())


def get_omdb_client() -> OmdbClient:
    """OMDb client with the server-side API key."""
    return OmdbClient(get_omdb_api_key(), get_omdb_base_url(), timeout=get_upstream_timeout())


def get_metadata_service(
    tmdb: TmdbClient = Depends(get_tmdb_client),
    omdb: OmdbClient = Depends(get_omdb_client),
) -> MetadataService:
    """Metadata lookup service built on the upstream clients."""
    return MetadataService(tmdb, omdb, image_base_url=get_tmdb_image_base_url())


# Singleton admin session store
_session_store: AdminSessionStore | None = None


def get_session_store() -> AdminSessionStore:
    """Get or create singleton AdminSessionStore."""
    global _session_store
    if _session_store is None:
        password_hash = get_admin_password_hash()
        if not password_hash:
            logger.warning("ADMIN_PASSWORD_HASH not configured; admin login is disabled")
        _session_store = AdminSessionStore(
            password_hash=password_hash,
            timeout_seconds=get_admin_session_timeout(),
        )
    return _session_store


def get_admin_token(x_admin_token: str | None = Header(None)) -> str | None:
    """Admin session token sent by the client, if any."""
    return x_admin_token


def is_admin(
    token: str | None = Depends(get_admin_token),
    store: AdminSessionStore = Depends(get_session_store),
) -> bool:
    """True when the request carries a live admin session."""
    return store.is_active(token)


def require_admin(
    token: str | None = Depends(get_admin_token),
    store: AdminSessionStore = Depends(get_session_store),
) -> str:
    """Reject the request unless it carries a live admin session."""
    if not store.is_active(token):
        raise HTTPException(status_code=401, detail="Admin access required")
    return token


def to_http_exception(error: MovieDBError) -> HTTPException:
    """Translate an application error into an HTTPException."""
    return HTTPException(status_code=error.status_code, detail=error.message)
