"""
Registry of courses, sections, modules and contexts backed by the database.
"""

import threading
from typing import Any, Dict, List, Optional

from ..core.entities import Context, Course, Section, ModuleRef
from ..core.enums import ContextLevel
from ..core.interfaces import CourseRegistry
from .database import DatabaseManager

_MODULE_SELECT = """
    SELECT cm.*, ctx.id AS contextid
      FROM course_modules cm
 LEFT JOIN contexts ctx ON ctx.contextlevel = ? AND ctx.instanceid = cm.id
"""


def _parse_path(path: str) -> List[int]:
    return [int(part) for part in path.split("/") if part]


class SQLCourseRegistry(CourseRegistry):
    """Course registry reading the ``courses``, ``course_sections``, ``course_modules`` and ``contexts`` tables."""

    def __init__(self, database: DatabaseManager):
        self._database = database
        self._lock = threading.RLock()

    # Contexts

    def get_context(self, context_id: int) -> Optional[Context]:
        row = self._database.fetch_one("SELECT * FROM contexts WHERE id = ?", (context_id,))
        return self._context_from_row(row) if row else None

    def get_context_for(self, level: ContextLevel, instance_id: int) -> Optional[Context]:
        row = self._database.fetch_one(
            "SELECT * FROM contexts WHERE contextlevel = ? AND instanceid = ?", (level.value, instance_id))
        return self._context_from_row(row) if row else None

    def save_context(self, context_id: int, level: ContextLevel, instance_id: int,
                     parent_id: Optional[int] = None) -> Context:
        """Insert or replace a context; its path is derived from the parent."""
        with self._lock:
            path = [context_id]
            if parent_id is not None:
                parent = self.get_context(parent_id)
                if parent is not None:
                    path = list(parent.path) + [context_id]
            self._database.execute(
                "INSERT OR REPLACE INTO contexts (id, contextlevel, instanceid, parentid, path) VALUES (?, ?, ?, ?, ?)",
                (context_id, level.value, instance_id, parent_id, "/" + "/".join(str(i) for i in path)))
            return Context(context_id, level, instance_id, parent_id, path)

    @staticmethod
    def _context_from_row(row: Dict[str, Any]) -> Context:
        return Context(
            id=row["id"],
            level=ContextLevel(row["contextlevel"]),
            instance_id=row["instanceid"],
            parent_id=row["parentid"],
            path=_parse_path(row["path"]),
        )

    # Courses

    def get_course(self, course_id: int) -> Optional[Course]:
        row = self._database.fetch_one("SELECT * FROM courses WHERE id = ?", (course_id,))
        if row is None:
            return None
        return Course(row["id"], row["fullname"], row["shortname"],
                      visible=bool(row["visible"]), legacy_files=row["legacyfiles"])

    def save_course(self, course: Course) -> Course:
        self._database.execute(
            "INSERT OR REPLACE INTO courses (id, fullname, shortname, visible, legacyfiles) VALUES (?, ?, ?, ?, ?)",
            (course.id, course.fullname, course.shortname, int(course.visible), course.legacy_files))
        return course

    # Sections

    def get_sections(self, course_id: int) -> List[Section]:
        rows = self._database.fetch_all(
            "SELECT * FROM course_sections WHERE course = ? ORDER BY section", (course_id,))
        return [self._section_from_row(row) for row in rows]

    def get_section(self, course_id: int, section_id: int) -> Optional[Section]:
        row = self._database.fetch_one(
            "SELECT * FROM course_sections WHERE course = ? AND id = ?", (course_id, section_id))
        return self._section_from_row(row) if row else None

    def save_section(self, section: Section) -> Section:
        self._database.execute(
            "INSERT OR REPLACE INTO course_sections (id, course, section, name) VALUES (?, ?, ?, ?)",
            (section.id, section.course_id, section.section, section.name))
        return section

    @staticmethod
    def _section_from_row(row: Dict[str, Any]) -> Section:
        return Section(row["id"], row["course"], row["section"], row["name"])

    # Modules

    def get_modules(self, course: Course) -> List[ModuleRef]:
        rows = self._database.fetch_all(
            _MODULE_SELECT + " WHERE cm.course = ? ORDER BY cm.id", (ContextLevel.MODULE.value, course.id))
        return [self._module_from_row(row) for row in rows]

    def get_module(self, cm_id: int) -> Optional[ModuleRef]:
        row = self._database.fetch_one(_MODULE_SELECT + " WHERE cm.id = ?", (ContextLevel.MODULE.value, cm_id))
        return self._module_from_row(row) if row else None

    def save_module(self, module: ModuleRef) -> ModuleRef:
        self._database.execute(
            "INSERT OR REPLACE INTO course_modules (id, course, modname, name, visible) VALUES (?, ?, ?, ?, ?)",
            (module.id, module.course_id, module.modname, module.name, int(module.visible)))
        return module

    @staticmethod
    def _module_from_row(row: Dict[str, Any]) -> ModuleRef:
        return ModuleRef(id=row["id"], course_id=row["course"], modname=row["modname"], name=row["name"],
                         visible=bool(row["visible"]), context_id=row["contextid"])
