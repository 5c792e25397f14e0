"""Database layer for dremap application."""

from dremap.database.base import Database
from dremap.database.factories import create_database, create_sqlite_database

__all__ = ["Database", "create_database", "create_sqlite_database"]
