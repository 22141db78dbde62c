"""Database layer for tokobook application."""

from tokobook.database.base import Database
from tokobook.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
