"""Database module."""

from db.session import Database, close_db, get_database, init_db

__all__ = ["Database", "get_database", "init_db", "close_db"]
