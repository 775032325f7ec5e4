"""
File record storage backed by the ``files`` table.

Only metadata lives here; file contents are served by the host through the
download URLs built by the presentation service.
"""

import threading
from typing import Any, Dict, List, Optional

from ..core.entities import FileRecord
from ..core.exceptions import ValidationError
from ..core.interfaces import FileStorage
from .database import DatabaseManager

# Accepted sort specifications mapped to their ORDER BY clause.
SORT_CLAUSES: Dict[str, str] = {
    "filepath, filename": "filepath ASC, filename ASC",
    "filepath ASC, filename ASC": "filepath ASC, filename ASC",
    "filename": "filename ASC",
    "timemodified": "timemodified ASC, filepath ASC, filename ASC",
    "": "id ASC",
}


class SQLFileStorage(FileStorage):
    """File storage reading and writing file records in a database."""

    def __init__(self, database: DatabaseManager):
        self._database = database
        self._lock = threading.RLock()

    def get_file(self, context_id: int, component: str, filearea: str, itemid: int,
                 filepath: str, filename: str) -> Optional[FileRecord]:
        row = self._database.fetch_one(
            """
            SELECT * FROM files
             WHERE contextid = ? AND component = ? AND filearea = ? AND itemid = ?
               AND filepath = ? AND filename = ?
            """,
            (context_id, component, filearea, itemid, filepath, filename))
        return self._record_from_row(row) if row else None

    def get_directory_files(self, context_id: int, component: str, filearea: str, itemid: int,
                            filepath: str, recursive: bool = False, include_dirs: bool = True,
                            sort: str = "filepath, filename") -> List[FileRecord]:
        if sort not in SORT_CLAUSES:
            raise ValidationError(f"Unsupported sort: {sort}", error_code="invalid_sort")

        rows = self._database.fetch_all(
            f"""
            SELECT * FROM files
             WHERE contextid = ? AND component = ? AND filearea = ? AND itemid = ?
               AND substr(filepath, 1, ?) = ?
          ORDER BY {SORT_CLAUSES[sort]}
            """,
            (context_id, component, filearea, itemid, len(filepath), filepath))

        entries = []
        for row in rows:
            record = self._record_from_row(row)
            if record.filepath == filepath and record.is_directory:
                continue
            if record.is_directory and not include_dirs:
                continue
            if not recursive:
                depth = record.filepath[len(filepath):].count("/")
                if record.is_directory and depth != 1:
                    continue
                if not record.is_directory and depth != 0:
                    continue
            entries.append(record)
        return entries

    def is_area_empty(self, context_id: int, component: str, filearea: str,
                      itemid: Optional[int] = None) -> bool:
        query = """
            SELECT id FROM files
             WHERE contextid = ? AND component = ? AND filearea = ? AND filename <> '.'
        """
        params: List[Any] = [context_id, component, filearea]
        if itemid is not None:
            query += " AND itemid = ?"
            params.append(itemid)
        query += " LIMIT 1"
        return self._database.fetch_one(query, params) is None

    def add_record(self, record: FileRecord) -> FileRecord:
        """Store a record, creating any missing parent directory records."""
        with self._lock:
            queries = []
            for directory in self._parent_directories(record):
                queries.append((
                    """
                    INSERT OR IGNORE INTO files (contextid, component, filearea, itemid, filepath, filename, filesize)
                    VALUES (?, ?, ?, ?, ?, '.', 0)
                    """,
                    (record.context_id, record.component, record.filearea, record.itemid, directory)))
            queries.append((
                """
                INSERT OR REPLACE INTO files
                    (contextid, component, filearea, itemid, filepath, filename, filesize, mimetype, timemodified)
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (record.context_id, record.component, record.filearea, record.itemid, record.filepath,
                 record.filename, record.filesize, record.mimetype, record.timemodified)))
            self._database.execute_many(queries)
            return record

    @staticmethod
    def _parent_directories(record: FileRecord) -> List[str]:
        parts = [part for part in record.filepath.split("/") if part]
        if record.is_directory:
            parts = parts[:-1]
        directories = ["/"]
        for i in range(len(parts)):
            directories.append("/" + "/".join(parts[:i + 1]) + "/")
        return directories

    @staticmethod
    def _record_from_row(row: Dict[str, Any]) -> FileRecord:
        return FileRecord(
            context_id=row["contextid"],
            component=row["component"],
            filearea=row["filearea"],
            itemid=row["itemid"],
            filepath=row["filepath"],
            filename=row["filename"],
            filesize=row["filesize"],
            mimetype=row["mimetype"],
            timemodified=row["timemodified"],
        )
