# src/safesync_server/db/__init__.py
"""Database configuration and utilities."""

from .session import Base, Database, get_db, unit_of_work

__all__ = ["Base", "Database", "get_db", "unit_of_work"]
