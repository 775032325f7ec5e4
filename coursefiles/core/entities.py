"""
Core entities read by the browsing tree.

All of these are read-only views over records owned by the host registry and
the file storage; the tree never mutates them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .enums import ContextLevel


@dataclass(frozen=True)
class Context:
    """A scope in the context tree (system, category, course, module)."""
    id: int
    level: ContextLevel
    instance_id: int
    parent_id: Optional[int] = None
    path: List[int] = field(default_factory=list, compare=False, hash=False)

    def ancestor_ids(self) -> List[int]:
        """Context ids from this context up to the root, nearest first."""
        ids = list(reversed(self.path)) if self.path else [self.id]
        if ids[0] != self.id:
            ids.insert(0, self.id)
        return ids


class Course:
    """A course as seen by the file browser."""

    LEGACY_FILES_ENABLED = 2

    def __init__(self, course_id: int, fullname: str, shortname: str = "",
                 visible: bool = True, legacy_files: int = 0):
        self._id = course_id
        self._fullname = fullname
        self._shortname = shortname or fullname
        self._visible = visible
        self._legacy_files = legacy_files

    @property
    def id(self) -> int:
        return self._id

    @property
    def fullname(self) -> str:
        return self._fullname

    @property
    def shortname(self) -> str:
        return self._shortname

    @property
    def visible(self) -> bool:
        return self._visible

    @property
    def legacy_files(self) -> int:
        return self._legacy_files

    @property
    def legacy_files_enabled(self) -> bool:
        return self._legacy_files == self.LEGACY_FILES_ENABLED

    def is_site(self, site_id: int) -> bool:
        """Whether this is the front page course."""
        return self._id == site_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self._id,
            'fullname': self._fullname,
            'shortname': self._shortname,
            'visible': self._visible,
            'legacy_files': self._legacy_files,
        }

    def __repr__(self) -> str:
        return f"Course(id={self._id!r}, fullname={self._fullname!r})"


class Section:
    """A course section; ``section`` is its position in the course."""

    def __init__(self, section_id: int, course_id: int, section: int, name: Optional[str] = None):
        self._id = section_id
        self._course_id = course_id
        self._section = section
        self._name = name

    @property
    def id(self) -> int:
        return self._id

    @property
    def course_id(self) -> int:
        return self._course_id

    @property
    def section(self) -> int:
        return self._section

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def label(self) -> str:
        """Display label: the section name, or its number when unnamed."""
        return self._name if self._name else str(self._section)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self._id,
            'course_id': self._course_id,
            'section': self._section,
            'name': self._name,
        }

    def __repr__(self) -> str:
        return f"Section(id={self._id!r}, course_id={self._course_id!r}, section={self._section!r})"


@dataclass(frozen=True)
class ModuleRef:
    """A course module; ``visible`` is the visibility for the current caller."""
    id: int
    course_id: int
    modname: str
    name: str
    visible: bool = True
    context_id: Optional[int] = None


@dataclass(frozen=True)
class FileRecord:
    """Metadata of a stored file or directory (directories use filename ".")."""
    context_id: int
    component: str
    filearea: str
    itemid: int
    filepath: str
    filename: str
    filesize: int = 0
    mimetype: Optional[str] = None
    timemodified: Optional[int] = None

    @property
    def is_directory(self) -> bool:
        return self.filename == "."


@dataclass(frozen=True)
class NodeParams:
    """Position of a node in the tree; aggregate nodes leave fields as None."""
    context_id: int
    component: Optional[str] = None
    filearea: Optional[str] = None
    itemid: Optional[int] = None
    filepath: Optional[str] = None
    filename: Optional[str] = None

    def as_tuple(self) -> tuple:
        return (self.context_id, self.component, self.filearea,
                self.itemid, self.filepath, self.filename)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'contextid': self.context_id,
            'component': self.component,
            'filearea': self.filearea,
            'itemid': self.itemid,
            'filepath': self.filepath,
            'filename': self.filename,
        }
