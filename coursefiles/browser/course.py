"""
Course level node of the browsing tree.
"""

import logging
from typing import List, Optional

from ..core.entities import Context, Course, NodeParams
from ..core.enums import Capability, ContextLevel, FileAreaKind
from .areas import get_area_handler
from .node import FileNode
from .request import BrowseRequest

logger = logging.getLogger(__name__)

# Order in which the course areas are listed as children.
CHILD_AREAS = (
    (FileAreaKind.COURSE_SUMMARY, 0, "/", "."),
    (FileAreaKind.COURSE_SECTION, None, None, None),
    (FileAreaKind.BACKUP_SECTION, None, None, None),
    (FileAreaKind.BACKUP_COURSE, 0, "/", "."),
    (FileAreaKind.BACKUP_AUTOMATED, 0, "/", "."),
    (FileAreaKind.COURSE_LEGACY, 0, "/", "."),
)


class CourseNode(FileNode):
    """Root node of one course: its file areas plus the subtrees of its modules."""

    def __init__(self, request: BrowseRequest, context: Context, course: Course):
        super().__init__(request, context)
        self._course = course

    @property
    def course(self) -> Course:
        return self._course

    def _can_browse(self) -> bool:
        """Course level checks shared by resolve() and get_children()."""
        access = self._request.access

        if not access.is_logged_in():
            logger.debug("Anonymous caller denied course %s", self._course.id)
            return False

        if not self._course.visible and not access.has_capability(Capability.VIEW_HIDDEN_COURSES, self._context):
            logger.debug("Hidden course %s denied for user %s", self._course.id, self._request.user_id)
            return False

        if not access.is_viewing(self._context) and not access.is_enrolled(self._context):
            logger.debug("User %s neither enrolled in nor viewing course %s",
                         self._request.user_id, self._course.id)
            return False

        return True

    def resolve(self, component: Optional[str], filearea: Optional[str] = None, itemid: Optional[int] = None,
                filepath: Optional[str] = None, filename: Optional[str] = None) -> Optional[FileNode]:
        """
        Resolve a node inside this course.

        Returns None when the caller may not browse the course, when the
        (component, filearea) pair is unknown, or when nothing exists at the
        path. Denial and absence are deliberately indistinguishable.
        """
        if not self._can_browse():
            return None

        if not component:
            return self

        handler = get_area_handler(component, filearea)
        if handler is None:
            return None
        return handler.resolve(self, itemid, filepath, filename)

    def identify(self) -> NodeParams:
        return NodeParams(self._context.id)

    def get_visible_name(self) -> str:
        if self._course.is_site(self._request.site_id):
            return self._request.presentation.get_string("frontpage")
        return self._course.fullname

    def is_directory(self) -> bool:
        return True

    def get_children(self) -> List[FileNode]:
        if not self._can_browse():
            return []

        children = []

        for kind, itemid, filepath, filename in CHILD_AREAS:
            child = get_area_handler(kind.component, kind.filearea).resolve(self, itemid, filepath, filename)
            if child is not None:
                children.append(child)

        if not self._request.access.has_capability(Capability.MANAGE_FILES, self._context):
            # Module browsing needs managefiles too; skip computing module visibility.
            return children

        registry = self._request.registry
        for module in registry.get_modules(self._course):
            if not module.visible:
                continue
            if module.context_id is not None:
                module_context = registry.get_context(module.context_id)
            else:
                module_context = registry.get_context_for(ContextLevel.MODULE, module.id)
            if module_context is None:
                continue
            child = self.browser.get_file_info(module_context)
            if child is not None:
                children.append(child)

        return children

    def get_parent(self) -> Optional[FileNode]:
        if self._context.parent_id is None:
            return None
        parent_context = self._request.registry.get_context(self._context.parent_id)
        if parent_context is None:
            return None
        return self.browser.get_file_info(parent_context)
