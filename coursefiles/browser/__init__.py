"""
Browsing tree over course file areas.
"""

from .request import BrowseRequest
from .node import FileNode
from .areas import AreaSpec, AreaHandler, FileAreaNode, VirtualRoot, AREA_SPECS, get_area_handler
from .sections import SectionListNode
from .course import CourseNode
from .dispatcher import FileBrowser

__all__ = [
    "BrowseRequest",
    "FileNode",
    "AreaSpec",
    "AreaHandler",
    "FileAreaNode",
    "VirtualRoot",
    "AREA_SPECS",
    "get_area_handler",
    "SectionListNode",
    "CourseNode",
    "FileBrowser",
]
