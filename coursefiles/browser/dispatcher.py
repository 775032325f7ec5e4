"""
Dispatcher mapping contexts to browsing tree nodes.
"""

import logging
from typing import Callable, Dict, Optional

from ..core.entities import Context, ModuleRef
from ..core.enums import ContextLevel
from ..core.interfaces import TreeBrowser
from .course import CourseNode
from .node import FileNode
from .request import BrowseRequest

logger = logging.getLogger(__name__)

# factory(request, context, module) -> node or None
ModuleHandler = Callable[[BrowseRequest, Context, ModuleRef], Optional[FileNode]]


class FileBrowser(TreeBrowser):
    """
    Builds nodes for contexts on behalf of one request.

    Course contexts are served by ``CourseNode``. Module contexts are
    delegated to handlers registered per module name; contexts at other
    levels belong to browsing subsystems that are not part of this package
    and resolve to None.
    """

    def __init__(self, request: BrowseRequest, module_handlers: Optional[Dict[str, ModuleHandler]] = None):
        self._request = request
        self._module_handlers: Dict[str, ModuleHandler] = dict(module_handlers or {})
        request.browser = self

    @property
    def request(self) -> BrowseRequest:
        return self._request

    def register_module_handler(self, modname: str, handler: ModuleHandler) -> None:
        """Register the subtree builder for a module type."""
        self._module_handlers[modname] = handler

    def get_file_info(self, context: Optional[Context] = None, component: Optional[str] = None,
                      filearea: Optional[str] = None, itemid: Optional[int] = None,
                      filepath: Optional[str] = None, filename: Optional[str] = None) -> Optional[FileNode]:
        if context is None:
            context = self._request.registry.get_system_context()
            if context is None:
                return None

        logger.debug("Dispatching context %s (%s) %s/%s item=%s path=%s%s",
                     context.id, context.level.name, component, filearea, itemid, filepath, filename)

        if context.level == ContextLevel.COURSE:
            return self._get_course_info(context, component, filearea, itemid, filepath, filename)
        if context.level == ContextLevel.MODULE:
            return self._get_module_info(context)
        return None

    def _get_course_info(self, context: Context, component, filearea, itemid, filepath, filename) -> Optional[FileNode]:
        course = self._request.registry.get_course(context.instance_id)
        if course is None:
            return None
        node = CourseNode(self._request, context, course)
        return node.resolve(component, filearea, itemid, filepath, filename)

    def _get_module_info(self, context: Context) -> Optional[FileNode]:
        registry = self._request.registry
        if context.parent_id is None:
            return None
        course_context = registry.get_context(context.parent_id)
        if course_context is None or course_context.level != ContextLevel.COURSE:
            return None
        course = registry.get_course(course_context.instance_id)
        if course is None:
            return None

        module = registry.get_module(context.instance_id)
        if module is None or module.course_id != course.id or not module.visible:
            return None

        handler = self._module_handlers.get(module.modname)
        if handler is None:
            logger.debug("No browsing handler for module type %s", module.modname)
            return None
        return handler(self._request, context, module)
