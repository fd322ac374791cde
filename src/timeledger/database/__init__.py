"""Database layer for timeledger application."""

from timeledger.database.base import Database
from timeledger.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
