"""
SQLite schema and row access for the course files tables.
"""

import sqlite3
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.exceptions import PersistenceError, ConfigurationError


SCHEMA: Dict[str, str] = {
    "contexts": """
        CREATE TABLE IF NOT EXISTS contexts (
            id INTEGER PRIMARY KEY,
            contextlevel INTEGER NOT NULL,
            instanceid INTEGER NOT NULL,
            parentid INTEGER,
            path TEXT NOT NULL DEFAULT '',
            UNIQUE (contextlevel, instanceid)
        )
    """,
    "courses": """
        CREATE TABLE IF NOT EXISTS courses (
            id INTEGER PRIMARY KEY,
            fullname TEXT NOT NULL,
            shortname TEXT NOT NULL,
            visible INTEGER NOT NULL DEFAULT 1,
            legacyfiles INTEGER NOT NULL DEFAULT 0
        )
    """,
    "course_sections": """
        CREATE TABLE IF NOT EXISTS course_sections (
            id INTEGER PRIMARY KEY,
            course INTEGER NOT NULL,
            section INTEGER NOT NULL,
            name TEXT
        )
    """,
    "course_modules": """
        CREATE TABLE IF NOT EXISTS course_modules (
            id INTEGER PRIMARY KEY,
            course INTEGER NOT NULL,
            modname TEXT NOT NULL,
            name TEXT NOT NULL,
            visible INTEGER NOT NULL DEFAULT 1
        )
    """,
    "files": """
        CREATE TABLE IF NOT EXISTS files (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            contextid INTEGER NOT NULL,
            component TEXT NOT NULL,
            filearea TEXT NOT NULL,
            itemid INTEGER NOT NULL,
            filepath TEXT NOT NULL,
            filename TEXT NOT NULL,
            filesize INTEGER NOT NULL DEFAULT 0,
            mimetype TEXT,
            timemodified INTEGER,
            UNIQUE (contextid, component, filearea, itemid, filepath, filename)
        )
    """,
    "capability_grants": """
        CREATE TABLE IF NOT EXISTS capability_grants (
            userid INTEGER NOT NULL,
            contextid INTEGER NOT NULL,
            capability TEXT NOT NULL,
            PRIMARY KEY (userid, contextid, capability)
        )
    """,
    "enrolments": """
        CREATE TABLE IF NOT EXISTS enrolments (
            userid INTEGER NOT NULL,
            courseid INTEGER NOT NULL,
            PRIMARY KEY (userid, courseid)
        )
    """,
    "site_admins": """
        CREATE TABLE IF NOT EXISTS site_admins (
            userid INTEGER PRIMARY KEY
        )
    """,
}


class DatabaseManager(ABC):
    """Row level access to the tables in ``SCHEMA``."""

    @abstractmethod
    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a SELECT and return every row as a dict keyed by column name."""
        pass

    @abstractmethod
    def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        """Run one write statement; returns the number of affected rows."""
        pass

    @abstractmethod
    def execute_many(self, statements: Iterable[Tuple[str, Sequence[Any]]]) -> None:
        """Run several write statements in one transaction."""
        pass

    def fetch_one(self, query: str, params: Sequence[Any] = ()) -> Optional[Dict[str, Any]]:
        """First row of a SELECT, or None."""
        rows = self.fetch_all(query, params)
        return rows[0] if rows else None

    def table_exists(self, table_name: str) -> bool:
        return self.fetch_one(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name = ?", (table_name,)) is not None


class SQLiteDatabase(DatabaseManager):
    """
    SQLite file database.

    Every call opens its own connection, so one instance can be shared by the
    request threads of the REST server. The schema is created on first use.
    """

    def __init__(self, database_path: str = "coursefiles.db"):
        self._database_path = database_path
        self._lock = threading.RLock()
        self.execute_many((table_schema, ()) for table_schema in SCHEMA.values())

    @property
    def database_path(self) -> str:
        return self._database_path

    @contextmanager
    def _transaction(self):
        """Connection committed on success and rolled back on error."""
        with self._lock:
            conn = None
            try:
                conn = sqlite3.connect(self._database_path)
                conn.row_factory = sqlite3.Row
                with conn:
                    yield conn
            except sqlite3.Error as e:
                raise PersistenceError(f"Database error: {e}", error_code="db_error",
                                       details={'database_path': self._database_path}) from e
            finally:
                if conn is not None:
                    conn.close()

    def fetch_all(self, query: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        with self._transaction() as conn:
            return [dict(row) for row in conn.execute(query, tuple(params))]

    def execute(self, query: str, params: Sequence[Any] = ()) -> int:
        with self._transaction() as conn:
            return conn.execute(query, tuple(params)).rowcount

    def execute_many(self, statements: Iterable[Tuple[str, Sequence[Any]]]) -> None:
        with self._transaction() as conn:
            for query, params in statements:
                conn.execute(query, tuple(params))


class DatabaseFactory:
    """Factory for creating database instances."""

    @staticmethod
    def create_database(database_type: str, **kwargs) -> DatabaseManager:
        """Create a database instance based on type."""
        if database_type.lower() == "sqlite":
            return SQLiteDatabase(**kwargs)
        raise ConfigurationError(f"Unsupported database type: {database_type}",
                                 error_code="unsupported_database", details={'database_type': database_type})
