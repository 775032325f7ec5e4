"""
Persistence module backing the browsing collaborators.
"""

from .database import DatabaseManager, SQLiteDatabase, DatabaseFactory, SCHEMA
from .repositories import SQLCourseRegistry
from .file_storage import SQLFileStorage

__all__ = [
    "DatabaseManager",
    "SQLiteDatabase",
    "DatabaseFactory",
    "SCHEMA",
    "SQLCourseRegistry",
    "SQLFileStorage",
]
