"""
SQLAlchemy ORM models for the movie library database.

This module defines the Movie, PendingMovie and AdminConfig tables. Movie and
PendingMovie share the same content columns; a pending suggestion is copied
field-for-field into the movies table when the admin approves it.
"""

import uuid
from datetime import datetime
from typing import List, Optional
from sqlalchemy import (
    Integer, String, Float, Text, JSON,
    CheckConstraint, Index, TIMESTAMP
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


MOVIE_STATUSES = ('watchlist', 'watched')
SUGGESTION_STATUSES = ('pending', 'approved', 'rejected')

# Columns copied verbatim from a suggestion into the collection
CONTENT_FIELDS = (
    'tmdb_id',
    'title',
    'year',
    'poster_path',
    'genres',
    'country',
    'imdb_rating',
    'plot',
    'runtime',
    'admin_rating',
    'letterboxd_rating',
    'notes',
    'date_watched',
    'status',
)


def generate_id() -> str:
    """Generate a document identifier."""
    return uuid.uuid4().hex


class Base(DeclarativeBase):
    """Base class for all ORM models."""
    pass


class MovieContentMixin:
    """
    Content columns shared by movies and pending suggestions.

    Attributes:
        tmdb_id: External catalog ID (TMDb), used for de-duplication
        title: Movie title (required)
        year: Release year
        poster_path: Full poster URL
        genres: JSON array of genre names
        country: First production country ('Unknown' if none)
        imdb_rating: IMDb rating as returned by OMDb, e.g. '7.8'
        plot: Plot summary
        runtime: Runtime in minutes
        admin_rating: Admin rating, 0-10 in half-point steps
        letterboxd_rating: Letterboxd rating string
        notes: Free-text notes
        date_watched: ISO date the movie was watched
        status: 'watchlist' or 'watched'
    """

    tmdb_id: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    year: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    poster_path: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    genres: Mapped[List[str]] = mapped_column(JSON, nullable=False, default=list)
    country: Mapped[str] = mapped_column(String(100), nullable=False, default='Unknown')
    imdb_rating: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    plot: Mapped[str] = mapped_column(Text, nullable=False, default='')
    runtime: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    admin_rating: Mapped[Optional[float]] = mapped_column(Float, nullable=True)
    letterboxd_rating: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default='')
    date_watched: Mapped[Optional[str]] = mapped_column(String(10), nullable=True)
    status: Mapped[str] = mapped_column(String(10), nullable=False, default='watchlist')

    def content(self) -> dict:
        """Return the content fields as a plain dict."""
        data = {field: getattr(self, field) for field in CONTENT_FIELDS}
        data['genres'] = list(data['genres'] or [])
        return data


class Movie(MovieContentMixin, Base):
    """
    Movie in the admin's collection.

    Attributes:
        id: Primary key, generated hex identifier
        date_added: Timestamp when the record was created
        last_modified: Timestamp when the record was last updated
    """
    __tablename__ = 'movies'

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    date_added: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    last_modified: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    __table_args__ = (
        CheckConstraint("status IN ('watchlist', 'watched')", name='check_movie_status'),
        CheckConstraint(
            "admin_rating IS NULL OR (admin_rating >= 0 AND admin_rating <= 10)",
            name='check_admin_rating_range'
        ),
        Index('idx_movies_tmdb_id', 'tmdb_id'),
        Index('idx_movies_status', 'status'),
    )

    def __repr__(self) -> str:
        return f"<Movie(id='{self.id}', title='{self.title}', year={self.year}, status='{self.status}')>"


class PendingMovie(MovieContentMixin, Base):
    """
    Movie suggested by a public user, waiting for admin review.

    Attributes:
        id: Primary key, generated hex identifier
        suggestion_status: 'pending', 'approved' or 'rejected'
        date_suggested: Timestamp when the suggestion was made
        approved_at: Timestamp of approval
        rejected_at: Timestamp of rejection
    """
    __tablename__ = 'pending_movies'

    id: Mapped[str] = mapped_column(String(32), primary_key=True, default=generate_id)
    suggestion_status: Mapped[str] = mapped_column(String(10), nullable=False, default='pending')
    date_suggested: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp()
    )
    approved_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP, nullable=True)
    rejected_at: Mapped[Optional[datetime]] = mapped_column(TIMESTAMP, nullable=True)

    __table_args__ = (
        CheckConstraint(
            "suggestion_status IN ('pending', 'approved', 'rejected')",
            name='check_suggestion_status'
        ),
        CheckConstraint("status IN ('watchlist', 'watched')", name='check_pending_movie_status'),
        Index('idx_pending_suggestion_status', 'suggestion_status'),
    )

    def __repr__(self) -> str:
        return f"<PendingMovie(id='{self.id}', title='{self.title}', suggestion_status='{self.suggestion_status}')>"


class AdminConfig(Base):
    """
    Stored admin settings (single row keyed 'admin').

    Attributes:
        key: Primary key
        password_hash: SHA-256 hex digest of the admin password
        last_updated: Timestamp of the last change
    """
    __tablename__ = 'admin_config'

    key: Mapped[str] = mapped_column(String(20), primary_key=True)
    password_hash: Mapped[str] = mapped_column(String(64), nullable=False)
    last_updated: Mapped[datetime] = mapped_column(
        TIMESTAMP,
        nullable=False,
        server_default=func.current_timestamp(),
        onupdate=func.current_timestamp()
    )

    def __repr__(self) -> str:
        return f"<AdminConfig(key='{self.key}')>"
