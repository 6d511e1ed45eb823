"""
Unit tests for database CRUD operations.

Tests for Movie, PendingMovie and AdminConfig CRUD operations using an
in-memory SQLite database for fast, isolated testing.
"""

import pytest

from moviedb.core.errors import (
    DuplicateMovieError,
    InvalidSuggestionError,
    MovieNotFoundError,
    ValidationError,
)
from moviedb.database import crud
from moviedb.database.models import PendingMovie


def heat(**overrides):
    data = {
        'tmdb_id': 949,
        'title': 'Heat',
        'year': 1995,
        'genres': ['Action', 'Crime'],
        'country': 'United States of America',
        'imdb_rating': '8.3',
        'status': 'watched',
        'date_watched': '2024-06-01',
    }
    data.update(overrides)
    return data


class TestMovieCRUD:
    """Tests for Movie CRUD operations."""

    def test_create_movie(self, session):
        """Test creating a new movie."""
        movie = crud.create_movie(session, **heat())

        assert movie.id is not None
        assert len(movie.id) == 32
        assert movie.title == 'Heat'
        assert movie.genres == ['Action', 'Crime']
        assert movie.date_added is not None
        assert movie.last_modified is not None

    def test_create_movie_defaults(self, session):
        """Optional fields get their defaults."""
        movie = crud.create_movie(session, title='Untitled')

        assert movie.status == 'watchlist'
        assert movie.genres == []
        assert movie.country == 'Unknown'
        assert movie.notes == ''

    def test_create_movie_ignores_unknown_fields(self, session):
        movie = crud.create_movie(session, title='Heat', id='forced', favourite=True)
        assert movie.id != 'forced'

    @pytest.mark.parametrize('fields', [
        {'title': ''},
        {'title': 'Heat', 'status': 'seen'},
        {'title': 'Heat', 'admin_rating': 11},
        {'title': 'Heat', 'admin_rating': 7.3},
        {'title': 'Heat', 'genres': 'Action'},
        {'title': 'Heat', 'admin_rating': 'abc'},
        {'title': 'Heat', 'genres': ['Drama', 5]},
        {'title': 'Heat', 'year': 'nineteen'},
    ])
    def test_create_movie_invalid(self, session, fields):
        """Invalid fields raise ValidationError."""
        with pytest.raises(ValidationError):
            crud.create_movie(session, **fields)

    def test_add_movie_rejects_duplicate(self, session):
        """A second movie with the same tmdb_id is refused."""
        crud.add_movie(session, heat())

        with pytest.raises(DuplicateMovieError) as exc_info:
            crud.add_movie(session, heat(status='watchlist'))

        assert 'Heat already exists' in exc_info.value.message
        assert crud.get_movie_count(session) == 1

    def test_get_movie(self, session):
        """Test retrieving a movie by ID."""
        movie = crud.add_movie(session, heat())

        retrieved = crud.get_movie(session, movie.id)
        assert retrieved is not None
        assert retrieved.title == 'Heat'
        assert crud.get_movie(session, 'missing') is None

    def test_get_movie_by_tmdb_id(self, session):
        movie = crud.add_movie(session, heat())

        assert crud.get_movie_by_tmdb_id(session, 949).id == movie.id
        assert crud.movie_exists(session, 949)
        assert not crud.movie_exists(session, 550)

    def test_get_movie_count(self, session):
        """Test getting movie counts, optionally per status."""
        assert crud.get_movie_count(session) == 0

        crud.add_movie(session, heat())
        crud.add_movie(session, heat(tmdb_id=550, title='Fight Club', status='watchlist'))

        assert crud.get_movie_count(session) == 2
        assert crud.get_movie_count(session, status='watched') == 1
        assert crud.get_movie_count(session, status='watchlist') == 1

    def test_update_movie(self, session):
        """Test updating movie fields."""
        movie = crud.add_movie(session, heat())

        updated = crud.update_movie(session, movie.id, admin_rating=9.5, notes='Diner scene')

        assert updated.admin_rating == 9.5
        assert updated.notes == 'Diner scene'
        assert updated.title == 'Heat'  # Unchanged

    def test_update_movie_not_found(self, session):
        with pytest.raises(MovieNotFoundError):
            crud.update_movie(session, 'missing', notes='x')

    def test_update_movie_invalid_rating(self, session):
        movie = crud.add_movie(session, heat())
        with pytest.raises(ValidationError):
            crud.update_movie(session, movie.id, admin_rating=-1)

    def test_delete_movie(self, session):
        """Test deleting a movie."""
        movie = crud.add_movie(session, heat())

        assert crud.delete_movie(session, movie.id) is True
        assert crud.get_movie(session, movie.id) is None
        assert crud.delete_movie(session, movie.id) is False


class TestBatchOperations:
    """Tests for batch writes."""

    @pytest.fixture
    def movies(self, session):
        return [
            crud.add_movie(session, heat(tmdb_id=i, title=f'Movie {i}', status='watchlist'))
            for i in range(1, 4)
        ]

    def test_batch_update(self, session, movies):
        count = crud.batch_update_movies(session, [m.id for m in movies[:2]], status='watched')

        assert count == 2
        assert crud.get_movie_count(session, status='watched') == 2

    def test_batch_delete(self, session, movies):
        assert crud.batch_delete_movies(session, [m.id for m in movies]) == 3
        assert crud.get_movie_count(session) == 0

    def test_batch_delete_unknown_id_deletes_nothing(self, session, movies):
        """One unknown ID aborts the whole batch."""
        with pytest.raises(MovieNotFoundError):
            crud.batch_delete_movies(session, [movies[0].id, 'missing'])

        assert crud.get_movie_count(session) == 3

    def test_batch_update_invalid_updates_nothing(self, session, movies):
        with pytest.raises(ValidationError):
            crud.batch_update_movies(session, [m.id for m in movies], status='seen')

        assert crud.get_movie_count(session, status='watchlist') == 3


class TestExportImport:
    """Tests for JSON export, import and clear."""

    def test_export_import_round_trip(self, session):
        """Everything but the identifier survives export, clear and import."""
        crud.add_movie(session, heat(admin_rating=9.0, notes='Best heist'))
        crud.add_movie(session, heat(tmdb_id=550, title='Fight Club', status='watchlist'))
        exported = crud.export_movies(session)
        old_ids = {record['id'] for record in exported}

        assert crud.clear_movies(session) == 2
        assert crud.import_movies(session, exported) == 2

        imported = crud.export_movies(session)
        assert not old_ids & {record['id'] for record in imported}
        strip = lambda records: sorted(
            ({k: v for k, v in r.items() if k != 'id'} for r in records),
            key=lambda r: r['tmdb_id'],
        )
        assert strip(imported) == strip(exported)

    def test_export_serializes_timestamps(self, session):
        crud.add_movie(session, heat())
        record = crud.export_movies(session)[0]
        assert isinstance(record['date_added'], str)
        assert 'T' in record['date_added']

    def test_import_accepts_utc_suffix(self, session):
        count = crud.import_movies(session, [
            {'title': 'Heat', 'date_added': '2023-01-02T03:04:05Z'}
        ])
        assert count == 1
        movie = crud.get_movies(session)[0]
        assert movie.date_added.isoformat() == '2023-01-02T03:04:05'

    @pytest.mark.parametrize('payload', [
        {'title': 'Not a list'},
        [{'title': 'Good'}, 'bad'],
        [{'title': 'Good'}, {'title': ''}],
        [{'title': 'Good', 'date_added': 'yesterday'}],
        [{'title': 'Good'}, {'title': 'X', 'admin_rating': 'abc'}],
        [{'title': 'Good'}, {'title': 'X', 'genres': ['Drama', 5]}],
        [{'title': 'Good'}, {'title': 'X', 'year': 'nineteen'}],
    ])
    def test_import_is_all_or_nothing(self, session, payload):
        with pytest.raises(ValidationError):
            crud.import_movies(session, payload)
        assert crud.get_movie_count(session) == 0

    def test_clear_movies_keeps_suggestions(self, session):
        crud.add_movie(session, heat())
        crud.add_pending_movie(session, heat(tmdb_id=550, title='Fight Club'))

        assert crud.clear_movies(session) == 1
        assert crud.get_movie_count(session) == 0
        assert crud.get_pending_count(session) == 1


class TestPendingCRUD:
    """Tests for the suggestion workflow."""

    def test_add_pending_movie(self, session):
        pending = crud.add_pending_movie(session, heat())

        assert pending.suggestion_status == 'pending'
        assert pending.date_suggested is not None
        assert crud.get_pending_count(session) == 1
        assert crud.get_movie_count(session) == 0

    def test_get_pending_movies_filters_status(self, session):
        first = crud.add_pending_movie(session, heat())
        crud.add_pending_movie(session, heat(tmdb_id=550, title='Fight Club'))
        crud.reject_pending_movie(session, first.id)

        assert [p.title for p in crud.get_pending_movies(session)] == ['Fight Club']
        assert [p.title for p in crud.get_pending_movies(session, 'rejected')] == ['Heat']
        assert len(crud.get_pending_movies(session, None)) == 2

        with pytest.raises(ValidationError):
            crud.get_pending_movies(session, 'archived')

    def test_approve_pending_movie(self, session):
        """Approval copies the content into the collection and keeps the suggestion."""
        pending = crud.add_pending_movie(session, heat(admin_rating=8.5))

        movie = crud.approve_pending_movie(session, pending.id)

        assert movie.id != pending.id
        assert movie.content() == pending.content()
        stored = session.get(PendingMovie, pending.id)
        assert stored.suggestion_status == 'approved'
        assert stored.approved_at is not None
        assert crud.get_movie_count(session) == 1
        assert crud.get_pending_count(session) == 0

    def test_approve_twice(self, session):
        pending = crud.add_pending_movie(session, heat())
        crud.approve_pending_movie(session, pending.id)

        with pytest.raises(InvalidSuggestionError):
            crud.approve_pending_movie(session, pending.id)
        assert crud.get_movie_count(session) == 1

    def test_approve_duplicate(self, session):
        """A suggestion for a movie already in the collection cannot be approved."""
        crud.add_movie(session, heat())
        pending = crud.add_pending_movie(session, heat(status='watchlist'))

        with pytest.raises(DuplicateMovieError):
            crud.approve_pending_movie(session, pending.id)

        assert crud.get_movie_count(session) == 1
        assert crud.get_pending_movie(session, pending.id).suggestion_status == 'pending'

    def test_approve_not_found(self, session):
        with pytest.raises(MovieNotFoundError):
            crud.approve_pending_movie(session, 'missing')

    def test_reject_pending_movie(self, session):
        pending = crud.add_pending_movie(session, heat())

        rejected = crud.reject_pending_movie(session, pending.id)

        assert rejected.suggestion_status == 'rejected'
        assert rejected.rejected_at is not None
        assert crud.get_movie_count(session) == 0
        with pytest.raises(InvalidSuggestionError):
            crud.reject_pending_movie(session, pending.id)

    def test_delete_pending_movie(self, session):
        pending = crud.add_pending_movie(session, heat())

        assert crud.delete_pending_movie(session, pending.id) is True
        assert crud.get_pending_movie(session, pending.id) is None
        assert crud.delete_pending_movie(session, pending.id) is False


class TestAdminConfig:
    """Tests for the stored admin password hash."""

    def test_set_and_get_password_hash(self, session):
        assert crud.get_admin_password_hash(session) is None

        crud.set_admin_password_hash(session, 'a' * 64)
        crud.set_admin_password_hash(session, 'b' * 64)

        assert crud.get_admin_password_hash(session) == 'b' * 64
