"""Database layer for bikeflip application."""

from bikeflip.database.base import Database
from bikeflip.database.factories import create_sqlite_database

__all__ = ["Database", "create_sqlite_database"]
