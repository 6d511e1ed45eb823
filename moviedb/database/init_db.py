"""
Database initialization and schema creation.

This module provides functions to initialize the database schema.
"""

import logging

from sqlalchemy import inspect

from moviedb.database.connection import DatabaseManager, get_db_manager, DEFAULT_DB_PATH

logger = logging.getLogger(__name__)

EXPECTED_TABLES = {'movies', 'pending_movies', 'admin_config'}


def init_database(db_path: str = DEFAULT_DB_PATH, reset: bool = False) -> DatabaseManager:
    """
    Initialize the database and create all tables.

    Args:
        db_path: Path to SQLite database file
        reset: If True, drop existing tables before creating new ones

    Returns:
        DatabaseManager instance
    """
    db_manager = get_db_manager(db_path=db_path)

    if reset:
        logger.info("Resetting database (dropping all tables)...")
        db_manager.reset_database()
        logger.info("Database reset complete.")
    else:
        logger.info("Creating database tables...")
        db_manager.create_tables()
        logger.info("Database tables created.")

    return db_manager


def verify_schema(db_manager: DatabaseManager) -> bool:
    """
    Verify that all tables exist in the database.

    Args:
        db_manager: DatabaseManager instance

    Returns:
        True if all tables exist, False otherwise
    """
    inspector = inspect(db_manager.engine)
    existing_tables = set(inspector.get_table_names())

    missing_tables = EXPECTED_TABLES - existing_tables

    if missing_tables:
        logger.error(f"Missing tables: {missing_tables}")
        return False

    logger.info(f"All tables exist: {existing_tables}")
    return True


if __name__ == "__main__":
    from moviedb.utils.logging_config import setup_logging

    setup_logging(level="INFO")
    db_manager = init_database(reset=False)

    if verify_schema(db_manager):
        print("\n✅ Database initialization successful!")
    else:
        print("\n❌ Database initialization failed!")
