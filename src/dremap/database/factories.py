"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

from dremap.database.sqlalchemy_db import SQLAlchemyDatabase


def create_database(database_url: str) -> SQLAlchemyDatabase:
    """Create a database instance for any SQLAlchemy URL.

    Args:
        database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')

    Returns:
        SQLAlchemyDatabase instance
    """
    return SQLAlchemyDatabase(database_url)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite database instance.

    Args:
        database_path: Path to SQLite database file. If None, checks DREMAP_DB_PATH
            environment variable, then defaults to ~/.dremap/dremap.db

    Returns:
        SQLAlchemyDatabase instance configured for SQLite
    """
    if database_path is None:
        # Check environment variable
        database_path = os.environ.get("DREMAP_DB_PATH")

    if database_path is None:
        # Default to ~/.dremap/dremap.db
        home = Path.home()
        db_dir = home / ".dremap"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "dremap.db")

    return create_database(f"sqlite:///{database_path}")
