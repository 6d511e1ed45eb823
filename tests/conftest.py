"""
Shared pytest fixtures.

Every test gets its own in-memory SQLite database. API tests run the real
FastAPI app with the database, upstream HTTP sessions and admin session
store swapped out through dependency overrides.
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from moviedb.api import dependencies
from moviedb.api.main import app
from moviedb.core.auth import AdminSessionStore, hash_password
from moviedb.core.upstream import OmdbClient, TmdbClient
from moviedb.database.connection import DatabaseManager

ADMIN_PASSWORD = "letmein"


@pytest.fixture
def db_manager():
    """Create an in-memory database with all tables."""
    manager = DatabaseManager(db_path=":memory:")
    manager.create_tables()
    yield manager
    manager.close()


@pytest.fixture
def session(db_manager):
    """Create a new database session for testing."""
    session = db_manager.get_session()
    yield session
    session.close()


@pytest.fixture
def json_response():
    """Factory for fake requests.Response objects."""
    def _make(data=None, status_code=200):
        response = MagicMock()
        response.status_code = status_code
        response.ok = status_code < 400
        response.json.return_value = data
        return response
    return _make


@pytest.fixture
def tmdb_http():
    """Mocked HTTP session used by the TMDb client."""
    return MagicMock()


@pytest.fixture
def omdb_http():
    """Mocked HTTP session used by the OMDb client."""
    return MagicMock()


@pytest.fixture
def session_store():
    """Admin session store with a known password."""
    return AdminSessionStore(password_hash=hash_password(ADMIN_PASSWORD))


@pytest.fixture
def client(db_manager, tmdb_http, omdb_http, session_store):
    """TestClient wired to the in-memory database and mocked upstreams."""
    def override_get_db():
        with db_manager.session_scope() as session:
            yield session

    app.dependency_overrides[dependencies.get_db] = override_get_db
    app.dependency_overrides[dependencies.get_tmdb_client] = lambda: TmdbClient(
        "tmdb-key", session=tmdb_http
    )
    app.dependency_overrides[dependencies.get_omdb_client] = lambda: OmdbClient(
        "omdb-key", session=omdb_http
    )
    app.dependency_overrides[dependencies.get_session_store] = lambda: session_store

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """Headers carrying a live admin session token."""
    r = client.post("/api/admin/login", json={"password": ADMIN_PASSWORD})
    assert r.status_code == 200
    return {"X-Admin-Token": r.json()["token"]}


@pytest.fixture
def admin_password():
    """Plain-text admin password accepted by session_store."""
    return ADMIN_PASSWORD
