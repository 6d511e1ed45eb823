"""
API tests for the suggestion workflow and TMDb search.
"""

import pytest

from moviedb.database import crud

TMDB_DETAILS = {
    "id": 949,
    "title": "Heat",
    "release_date": "1995-12-15",
    "poster_path": "/heat.jpg",
    "genres": [{"id": 80, "name": "Crime"}],
    "production_countries": [],
    "imdb_id": None,
    "overview": "",
    "runtime": 170,
}


@pytest.fixture
def suggestion(db_manager):
    with db_manager.session_scope() as session:
        return crud.add_pending_movie(session, {"tmdb_id": 949, "title": "Heat", "status": "watched"}).id


class TestSuggestions:
    """Tests for /api/pending."""

    def test_public_can_suggest(self, client, tmdb_http, json_response):
        tmdb_http.get.return_value = json_response(TMDB_DETAILS)

        r = client.post("/api/pending/from-catalog", json={"tmdb_id": 949, "status": "watchlist"})

        assert r.status_code == 201
        data = r.json()
        assert data["suggestion_status"] == "pending"
        assert data["country"] == "Unknown"
        assert client.get("/api/movies/stats").json()["total"] == 0

    def test_suggest_existing_movie(self, client, db_manager, tmdb_http):
        with db_manager.session_scope() as session:
            crud.add_movie(session, {"tmdb_id": 949, "title": "Heat"})

        r = client.post("/api/pending/from-catalog", json={"tmdb_id": 949})

        assert r.status_code == 409
        tmdb_http.get.assert_not_called()

    def test_list_requires_admin(self, client, suggestion):
        assert client.get("/api/pending").status_code == 401

    def test_list_pending(self, client, admin_headers, suggestion):
        r = client.get("/api/pending", headers=admin_headers)
        assert [p["id"] for p in r.json()] == [suggestion]

    def test_approve(self, client, admin_headers, suggestion):
        r = client.post(f"/api/pending/{suggestion}/approve", headers=admin_headers)

        assert r.status_code == 200
        movie = r.json()
        assert movie["title"] == "Heat"
        assert movie["id"] != suggestion
        assert client.get("/api/pending", headers=admin_headers).json() == []
        assert client.get("/api/movies/lookup/949").json()["id"] == movie["id"]

        r = client.post(f"/api/pending/{suggestion}/approve", headers=admin_headers)
        assert r.status_code == 409

    def test_reject(self, client, admin_headers, suggestion):
        r = client.post(f"/api/pending/{suggestion}/reject", headers=admin_headers)

        assert r.status_code == 200
        assert r.json()["suggestion_status"] == "rejected"
        assert client.get("/api/movies/stats").json()["total"] == 0

    def test_review_unknown(self, client, admin_headers):
        assert client.post("/api/pending/missing/approve", headers=admin_headers).status_code == 404
        assert client.post("/api/pending/missing/reject", headers=admin_headers).status_code == 404

    def test_delete(self, client, admin_headers, suggestion):
        assert client.delete(f"/api/pending/{suggestion}", headers=admin_headers).status_code == 204
        assert client.delete(f"/api/pending/{suggestion}", headers=admin_headers).status_code == 404


class TestSearch:
    """Tests for GET /api/search."""

    def test_search_marks_existing(self, client, db_manager, tmdb_http, json_response):
        with db_manager.session_scope() as session:
            existing_id = crud.add_movie(
                session, {"tmdb_id": 949, "title": "Heat", "status": "watched"}
            ).id
        tmdb_http.get.return_value = json_response({"results": [
            {"id": 949, "title": "Heat", "release_date": "1995-12-15", "vote_average": 7.9},
            {"id": 11, "title": "Heat Wave", "release_date": ""},
        ]})

        r = client.get("/api/search", params={"query": "heat"})

        assert r.status_code == 200
        first, second = r.json()
        assert first["existing_status"] == "watched"
        assert first["existing_id"] == existing_id
        assert first["year"] == 1995
        assert second["existing_status"] is None
        assert second["year"] == "N/A"

    def test_search_capped(self, client, tmdb_http, json_response):
        tmdb_http.get.return_value = json_response(
            {"results": [{"id": i, "title": f"Movie {i}"} for i in range(1, 30)]}
        )
        assert len(client.get("/api/search", params={"query": "movie"}).json()) == 12

    def test_short_query(self, client, tmdb_http):
        assert client.get("/api/search", params={"query": "h"}).json() == []
        tmdb_http.get.assert_not_called()

    def test_search_failure_is_empty(self, client, tmdb_http, json_response):
        tmdb_http.get.return_value = json_response({}, status_code=500)
        assert client.get("/api/search", params={"query": "heat"}).json() == []
