"""
Collaborator interfaces consumed by the browsing tree.

The tree calls into these and never implements them itself; the
persistence and services packages ship the default implementations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from .entities import Context, Course, Section, ModuleRef, FileRecord
from .enums import ContextLevel


class FileStorage(ABC):
    """Read access to stored file metadata."""

    @abstractmethod
    def get_file(self, context_id: int, component: str, filearea: str, itemid: int,
                 filepath: str, filename: str) -> Optional[FileRecord]:
        """Fetch one file or directory record."""
        pass

    @abstractmethod
    def get_directory_files(self, context_id: int, component: str, filearea: str, itemid: int,
                            filepath: str, recursive: bool = False, include_dirs: bool = True,
                            sort: str = "filepath, filename") -> List[FileRecord]:
        """List the entries below a directory."""
        pass

    @abstractmethod
    def is_area_empty(self, context_id: int, component: str, filearea: str,
                      itemid: Optional[int] = None) -> bool:
        """Check whether an area holds no files (directories do not count)."""
        pass


class AccessControl(ABC):
    """Access checks for the caller of the current request."""

    @abstractmethod
    def is_logged_in(self) -> bool:
        """Whether the caller is authenticated."""
        pass

    @abstractmethod
    def has_capability(self, capability: str, context: Context) -> bool:
        """Whether the caller holds a capability in a context."""
        pass

    @abstractmethod
    def is_enrolled(self, context: Context) -> bool:
        """Whether the caller is enrolled in the course owning the context."""
        pass

    @abstractmethod
    def is_viewing(self, context: Context) -> bool:
        """Whether the caller may inspect the course without enrolment."""
        pass


class CourseRegistry(ABC):
    """Courses, sections, modules and contexts of the host."""

    @abstractmethod
    def get_course(self, course_id: int) -> Optional[Course]:
        """Find a course by id."""
        pass

    @abstractmethod
    def get_sections(self, course_id: int) -> List[Section]:
        """All sections of a course ordered by section number."""
        pass

    @abstractmethod
    def get_section(self, course_id: int, section_id: int) -> Optional[Section]:
        """Find a section that belongs to the given course."""
        pass

    @abstractmethod
    def get_modules(self, course: Course) -> List[ModuleRef]:
        """Modules of a course with their visibility."""
        pass

    @abstractmethod
    def get_module(self, cm_id: int) -> Optional[ModuleRef]:
        """Find a course module by id."""
        pass

    @abstractmethod
    def get_context(self, context_id: int) -> Optional[Context]:
        """Find a context by id."""
        pass

    @abstractmethod
    def get_context_for(self, level: ContextLevel, instance_id: int) -> Optional[Context]:
        """Find the context of an instance at a level."""
        pass

    def get_system_context(self) -> Optional[Context]:
        """The root context."""
        return self.get_context_for(ContextLevel.SYSTEM, 0)


class Presentation(ABC):
    """Localized strings and download URLs."""

    @abstractmethod
    def get_string(self, key: str) -> str:
        """Localized string for a key."""
        pass

    @abstractmethod
    def file_url(self, script: str, path: str, forcedownload: bool = False) -> str:
        """Download URL for a file path served by a script."""
        pass


class TreeBrowser(ABC):
    """Dispatcher mapping contexts to tree nodes."""

    @abstractmethod
    def get_file_info(self, context: Optional[Context] = None, component: Optional[str] = None,
                      filearea: Optional[str] = None, itemid: Optional[int] = None,
                      filepath: Optional[str] = None, filename: Optional[str] = None):
        """Resolve a node, or None when absent or not permitted."""
        pass

    def get_node_for_context(self, context: Optional[Context]):
        """Root node of a context."""
        return self.get_file_info(context)
