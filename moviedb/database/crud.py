"""
CRUD operations for Movie, PendingMovie, and AdminConfig models.

This module is the persistence adapter for the movie library: collection
CRUD, duplicate checks by catalog ID, batch writes, JSON export/import and
the pending-suggestion approval workflow. Batch operations run inside a
single transaction so they either fully apply or not at all.
"""

import logging
from datetime import datetime, timezone
from typing import List, Optional, Dict, Any, Iterable
from sqlalchemy import func
from sqlalchemy.orm import Session

from moviedb.core.errors import (
    DuplicateMovieError,
    InvalidSuggestionError,
    MovieNotFoundError,
    ValidationError,
)
from moviedb.database.models import (
    Movie,
    PendingMovie,
    AdminConfig,
    CONTENT_FIELDS,
    MOVIE_STATUSES,
    SUGGESTION_STATUSES,
)

logger = logging.getLogger(__name__)

TIMESTAMP_FIELDS = ('date_added', 'last_modified')
ADMIN_CONFIG_KEY = 'admin'


def _utcnow() -> datetime:
    """Current UTC time as a naive datetime (the format SQLite stores)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def _parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an exported ISO timestamp back into a naive UTC datetime."""
    if value is None or value == '':
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace('Z', '+00:00'))
        except ValueError as e:
            raise ValidationError(f"Invalid timestamp: {value}") from e
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def _content_only(data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the movie content fields."""
    return {key: value for key, value in data.items() if key in CONTENT_FIELDS}


def validate_movie_fields(fields: Dict[str, Any], partial: bool = False) -> None:
    """
    Validate movie content fields.

    Args:
        fields: Field values to check
        partial: If True, only the fields present are checked (updates)

    Raises:
        ValidationError: If a field is missing or out of range
    """
    if not partial or 'title' in fields:
        title = fields.get('title')
        if not title or not str(title).strip():
            raise ValidationError("Title is required")

    if 'status' in fields or not partial:
        status = fields.get('status', 'watchlist')
        if status not in MOVIE_STATUSES:
            raise ValidationError(f"Status must be one of {', '.join(MOVIE_STATUSES)}")

    rating = fields.get('admin_rating')
    if rating is not None:
        try:
            rating = float(rating)
        except (TypeError, ValueError) as e:
            raise ValidationError("Rating must be a number") from e
        if not (0.0 <= rating <= 10.0):
            raise ValidationError("Rating must be between 0 and 10")
        if (rating * 2) % 1 != 0:
            raise ValidationError("Rating must be in half-point increments")

    genres = fields.get('genres')
    if genres is not None:
        if not isinstance(genres, list) or not all(isinstance(g, str) for g in genres):
            raise ValidationError("Genres must be a list of names")

    for name in ('tmdb_id', 'year', 'runtime'):
        value = fields.get(name)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValidationError(f"{name} must be an integer")


# ==================== MOVIE CRUD OPERATIONS ====================

def create_movie(session: Session, **fields) -> Movie:
    """
    Create a new movie without a duplicate check.

    Args:
        session: Database session
        **fields: Movie content fields (title, status, genres, ...)

    Returns:
        Created Movie object

    Raises:
        ValidationError: If the fields are invalid
    """
    data = _content_only(fields)
    validate_movie_fields(data)

    movie = Movie(**data)
    session.add(movie)
    session.commit()
    session.refresh(movie)
    logger.info(f"Movie added with ID: {movie.id}")
    return movie


def add_movie(session: Session, movie_data: Dict[str, Any]) -> Movie:
    """
    Add a movie to the collection, rejecting catalog duplicates.

    Args:
        session: Database session
        movie_data: Movie content fields

    Returns:
        Created Movie object

    Raises:
        DuplicateMovieError: If a movie with the same tmdb_id already exists
        ValidationError: If the fields are invalid
    """
    tmdb_id = movie_data.get('tmdb_id')
    if tmdb_id is not None and movie_exists(session, tmdb_id):
        raise DuplicateMovieError(
            f"{movie_data.get('title') or 'This movie'} already exists in the collection"
        )
    return create_movie(session, **movie_data)


def get_movie(session: Session, movie_id: str) -> Optional[Movie]:
    """
    Get a movie by ID.

    Args:
        session: Database session
        movie_id: Movie ID

    Returns:
        Movie object or None if not found
    """
    return session.query(Movie).filter(Movie.id == movie_id).first()


def get_movies(session: Session) -> List[Movie]:
    """
    Get every movie in the collection.

    Args:
        session: Database session

    Returns:
        List of Movie objects, newest first
    """
    return session.query(Movie).order_by(Movie.date_added.desc()).all()


def get_movie_count(session: Session, status: Optional[str] = None) -> int:
    """
    Get total count of movies, optionally for one status.

    Args:
        session: Database session
        status: 'watched' or 'watchlist' (default: all)

    Returns:
        Number of movies
    """
    query = session.query(func.count(Movie.id))
    if status:
        query = query.filter(Movie.status == status)
    return query.scalar()


def get_movie_by_tmdb_id(session: Session, tmdb_id: int) -> Optional[Movie]:
    """
    Get a movie by its TMDb catalog ID.

    Args:
        session: Database session
        tmdb_id: TMDb movie ID

    Returns:
        Movie object or None if not in the collection
    """
    return session.query(Movie).filter(Movie.tmdb_id == tmdb_id).first()


def movie_exists(session: Session, tmdb_id: int) -> bool:
    """Check whether a movie with this TMDb ID is already in the collection."""
    return get_movie_by_tmdb_id(session, tmdb_id) is not None


def update_movie(session: Session, movie_id: str, **updates) -> Movie:
    """
    Update movie fields.

    Args:
        session: Database session
        movie_id: Movie ID
        **updates: Content fields to update

    Returns:
        Updated Movie object

    Raises:
        MovieNotFoundError: If the movie does not exist
        ValidationError: If the updates are invalid
    """
    data = _content_only(updates)
    validate_movie_fields(data, partial=True)

    movie = get_movie(session, movie_id)
    if movie is None:
        raise MovieNotFoundError(f"Movie not found: {movie_id}")

    for key, value in data.items():
        setattr(movie, key, value)
    session.commit()
    session.refresh(movie)
    logger.info(f"Movie updated: {movie_id}")
    return movie


def delete_movie(session: Session, movie_id: str) -> bool:
    """
    Delete a movie.

    Args:
        session: Database session
        movie_id: Movie ID

    Returns:
        True if the movie was deleted, False if not found
    """
    movie = get_movie(session, movie_id)
    if movie:
        session.delete(movie)
        session.commit()
        logger.info(f"Movie deleted: {movie_id}")
        return True
    return False


def _get_all_or_raise(session: Session, movie_ids: Iterable[str]) -> List[Movie]:
    ids = list(dict.fromkeys(movie_ids))
    movies = session.query(Movie).filter(Movie.id.in_(ids)).all()
    found = {movie.id for movie in movies}
    missing = [movie_id for movie_id in ids if movie_id not in found]
    if missing:
        raise MovieNotFoundError(f"Movies not found: {', '.join(missing)}")
    return movies


def batch_delete_movies(session: Session, movie_ids: List[str]) -> int:
    """
    Delete several movies in one transaction.

    Args:
        session: Database session
        movie_ids: IDs of the movies to delete

    Returns:
        Number of movies deleted

    Raises:
        MovieNotFoundError: If any ID is unknown (nothing is deleted)
    """
    movies = _get_all_or_raise(session, movie_ids)
    for movie in movies:
        session.delete(movie)
    session.commit()
    logger.info(f"{len(movies)} movies deleted")
    return len(movies)


def batch_update_movies(session: Session, movie_ids: List[str], **updates) -> int:
    """
    Apply the same updates to several movies in one transaction.

    Args:
        session: Database session
        movie_ids: IDs of the movies to update
        **updates: Content fields to set, e.g. status='watched'

    Returns:
        Number of movies updated

    Raises:
        MovieNotFoundError: If any ID is unknown (nothing is updated)
        ValidationError: If the updates are invalid
    """
    data = _content_only(updates)
    validate_movie_fields(data, partial=True)

    movies = _get_all_or_raise(session, movie_ids)
    for movie in movies:
        for key, value in data.items():
            setattr(movie, key, value)
    session.commit()
    logger.info(f"{len(movies)} movies updated")
    return len(movies)


# ==================== EXPORT / IMPORT ====================

def movie_to_dict(movie: Movie) -> Dict[str, Any]:
    """
    Serialize a movie for JSON export.

    Timestamps are converted to ISO strings.
    """
    data = {'id': movie.id}
    data.update(movie.content())
    for field in TIMESTAMP_FIELDS:
        value = getattr(movie, field)
        data[field] = value.isoformat() if value else None
    return data


def export_movies(session: Session) -> List[Dict[str, Any]]:
    """
    Export every movie as JSON-compatible dicts.

    Args:
        session: Database session

    Returns:
        List of movie dicts including id and ISO timestamps
    """
    return [movie_to_dict(movie) for movie in get_movies(session)]


def import_movies(session: Session, records: List[Dict[str, Any]]) -> int:
    """
    Import movies from an export, all-or-nothing.

    Incoming identifiers are discarded and regenerated; ISO timestamps are
    restored as-is.

    Args:
        session: Database session
        records: List of movie dicts as produced by export_movies

    Returns:
        Number of movies imported

    Raises:
        ValidationError: If the payload is malformed (nothing is imported)
    """
    if not isinstance(records, list):
        raise ValidationError("Import data must be a JSON array of movies")

    movies = []
    for record in records:
        if not isinstance(record, dict):
            raise ValidationError("Each imported movie must be a JSON object")
        data = _content_only(record)
        validate_movie_fields(data)
        movie = Movie(**data)
        for field in TIMESTAMP_FIELDS:
            timestamp = _parse_timestamp(record.get(field))
            if timestamp is not None:
                setattr(movie, field, timestamp)
        movies.append(movie)

    session.add_all(movies)
    session.commit()
    logger.info(f"{len(movies)} movies imported")
    return len(movies)


def clear_movies(session: Session) -> int:
    """
    Delete every movie in one transaction.

    WARNING: This cannot be undone.

    Returns:
        Number of movies deleted
    """
    count = session.query(Movie).delete(synchronize_session=False)
    session.commit()
    logger.info("All data cleared")
    return count


# ==================== PENDING SUGGESTION OPERATIONS ====================

def add_pending_movie(session: Session, movie_data: Dict[str, Any]) -> PendingMovie:
    """
    Store a public movie suggestion for admin review.

    Args:
        session: Database session
        movie_data: Movie content fields

    Returns:
        Created PendingMovie object with suggestion_status 'pending'

    Raises:
        ValidationError: If the fields are invalid
    """
    data = _content_only(movie_data)
    validate_movie_fields(data)

    pending = PendingMovie(**data, suggestion_status='pending')
    session.add(pending)
    session.commit()
    session.refresh(pending)
    logger.info(f"Pending movie added with ID: {pending.id}")
    return pending


def get_pending_movie(session: Session, pending_id: str) -> Optional[PendingMovie]:
    """
    Get a suggestion by ID.

    Args:
        session: Database session
        pending_id: PendingMovie ID

    Returns:
        PendingMovie object or None if not found
    """
    return session.query(PendingMovie).filter(PendingMovie.id == pending_id).first()


def get_pending_movies(
    session: Session,
    suggestion_status: Optional[str] = 'pending'
) -> List[PendingMovie]:
    """
    Get suggestions, by default only those still awaiting review.

    Args:
        session: Database session
        suggestion_status: 'pending', 'approved', 'rejected', or None for all

    Returns:
        List of PendingMovie objects, oldest first
    """
    if suggestion_status is not None and suggestion_status not in SUGGESTION_STATUSES:
        raise ValidationError(f"Unknown suggestion status: {suggestion_status}")
    query = session.query(PendingMovie)
    if suggestion_status is not None:
        query = query.filter(PendingMovie.suggestion_status == suggestion_status)
    return query.order_by(PendingMovie.date_suggested.asc()).all()


def _get_reviewable(session: Session, pending_id: str) -> PendingMovie:
    pending = get_pending_movie(session, pending_id)
    if pending is None:
        raise MovieNotFoundError(f"Pending movie not found: {pending_id}")
    if pending.suggestion_status != 'pending':
        raise InvalidSuggestionError(
            f"{pending.title} has already been {pending.suggestion_status}"
        )
    return pending


def approve_pending_movie(session: Session, pending_id: str) -> Movie:
    """
    Approve a suggestion: copy it into the collection and mark it approved.

    The insert and the status change are committed together. The pending
    record is kept for history.

    Args:
        session: Database session
        pending_id: PendingMovie ID

    Returns:
        The newly created Movie

    Raises:
        MovieNotFoundError: If the suggestion does not exist
        InvalidSuggestionError: If it was already approved or rejected
        DuplicateMovieError: If the movie was added to the collection meanwhile
    """
    pending = _get_reviewable(session, pending_id)
    movie_data = pending.content()
    if movie_data['tmdb_id'] is not None and movie_exists(session, movie_data['tmdb_id']):
        raise DuplicateMovieError(f"{pending.title} already exists in the collection")

    movie = Movie(**movie_data)
    session.add(movie)
    pending.suggestion_status = 'approved'
    pending.approved_at = _utcnow()
    try:
        session.commit()
    except Exception:
        session.rollback()
        raise
    session.refresh(movie)
    logger.info(f"Pending movie approved: {pending_id} -> {movie.id}")
    return movie


def reject_pending_movie(session: Session, pending_id: str) -> PendingMovie:
    """
    Reject a suggestion.

    Args:
        session: Database session
        pending_id: PendingMovie ID

    Returns:
        The updated PendingMovie

    Raises:
        MovieNotFoundError: If the suggestion does not exist
        InvalidSuggestionError: If it was already approved or rejected
    """
    pending = _get_reviewable(session, pending_id)
    pending.suggestion_status = 'rejected'
    pending.rejected_at = _utcnow()
    session.commit()
    session.refresh(pending)
    logger.info(f"Pending movie rejected: {pending_id}")
    return pending


def delete_pending_movie(session: Session, pending_id: str) -> bool:
    """
    Delete a suggestion.

    Returns:
        True if deleted, False if not found
    """
    pending = get_pending_movie(session, pending_id)
    if pending:
        session.delete(pending)
        session.commit()
        logger.info(f"Pending movie deleted: {pending_id}")
        return True
    return False


def get_pending_count(session: Session) -> int:
    """Get the number of suggestions awaiting review."""
    return session.query(func.count(PendingMovie.id)).filter(
        PendingMovie.suggestion_status == 'pending'
    ).scalar()


# ==================== ADMIN CONFIG ====================

def get_admin_password_hash(session: Session) -> Optional[str]:
    """
    Get the stored admin password hash.

    Returns:
        Hex digest, or None when no password has been stored
    """
    config = session.get(AdminConfig, ADMIN_CONFIG_KEY)
    return config.password_hash if config else None


def set_admin_password_hash(session: Session, password_hash: str) -> AdminConfig:
    """
    Store the admin password hash, replacing any previous one.

    Args:
        session: Database session
        password_hash: SHA-256 hex digest

    Returns:
        The AdminConfig row
    """
    config = session.get(AdminConfig, ADMIN_CONFIG_KEY)
    if config is None:
        config = AdminConfig(key=ADMIN_CONFIG_KEY, password_hash=password_hash)
        session.add(config)
    else:
        config.password_hash = password_hash
    session.commit()
    session.refresh(config)
    logger.info("Admin password hash updated")
    return config
