"""
Aggregate "all sections" directories of a course.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional

from ..core.entities import Context, Course, NodeParams
from ..core.enums import SectionListKind
from .node import FileNode
from .request import BrowseRequest


@dataclass(frozen=True)
class SectionListSpec:
    """What distinguishes the course and backup section lists."""
    component: str
    filearea: str
    label_key: str
    reresolve_parent: bool


SECTION_LIST_SPECS: Dict[SectionListKind, SectionListSpec] = {
    SectionListKind.COURSE: SectionListSpec("course", "section", "coursesectionsummaries", False),
    SectionListKind.BACKUP: SectionListSpec("backup", "section", "sectionbackup", True),
}


class SectionListNode(FileNode):
    """
    Directory holding one entry per course section.

    It has no stored record of its own. Each child is resolved through the
    owning course node, so a section entry goes through the same access
    check and virtual root handling as a directly addressed section.
    """

    def __init__(self, request: BrowseRequest, context: Context, course: Course,
                 course_node, kind: SectionListKind):
        super().__init__(request, context)
        self._course = course
        self._course_node = course_node
        self._kind = kind
        self._spec = SECTION_LIST_SPECS[kind]

    @property
    def kind(self) -> SectionListKind:
        return self._kind

    def identify(self) -> NodeParams:
        return NodeParams(self._context.id, self._spec.component, self._spec.filearea)

    def get_visible_name(self) -> str:
        return self._request.presentation.get_string(self._spec.label_key)

    def is_directory(self) -> bool:
        return True

    def is_empty_area(self) -> bool:
        return self._request.storage.is_area_empty(self._context.id, self._spec.component, self._spec.filearea)

    def get_children(self) -> List[FileNode]:
        children = []
        for section in self._request.registry.get_sections(self._course.id):
            child = self._course_node.resolve(self._spec.component, self._spec.filearea, section.id, "/", ".")
            if child is not None:
                children.append(child)
        return children

    def get_parent(self) -> Optional[FileNode]:
        if self._spec.reresolve_parent:
            return self.browser.get_file_info(self._context)
        return self._course_node
