"""
Database module for the movie library.

This module provides database models, connection management, and CRUD operations
for the movie collection and the pending-suggestion queue using SQLAlchemy ORM.
"""

from moviedb.database.models import Base, Movie, PendingMovie, AdminConfig
from moviedb.database.connection import DatabaseManager, get_db_manager, get_session
from moviedb.database.init_db import init_database, verify_schema
from moviedb.database import crud

__all__ = [
    # Models
    'Base',
    'Movie',
    'PendingMovie',
    'AdminConfig',
    # Connection
    'DatabaseManager',
    'get_db_manager',
    'get_session',
    # Initialization
    'init_database',
    'verify_schema',
    # CRUD module
    'crud',
]
