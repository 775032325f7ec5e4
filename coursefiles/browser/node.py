"""
The node contract shared by every entry of the browsing tree.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from ..core.entities import Context, NodeParams
from .request import BrowseRequest


class FileNode(ABC):
    """
    A container or file in the browsing tree.

    Nodes are cheap views built per request. Children are computed on every
    call and never cached.
    """

    def __init__(self, request: BrowseRequest, context: Context):
        self._request = request
        self._context = context

    @property
    def request(self) -> BrowseRequest:
        return self._request

    @property
    def context(self) -> Context:
        return self._context

    @property
    def browser(self):
        return self._request.browser

    @abstractmethod
    def identify(self) -> NodeParams:
        """Position of this node in the tree."""
        pass

    @abstractmethod
    def get_visible_name(self) -> str:
        """Localized display label."""
        pass

    @abstractmethod
    def is_directory(self) -> bool:
        """Whether this node can have children."""
        pass

    @abstractmethod
    def get_children(self) -> List['FileNode']:
        """Immediate children, recomputed on each call."""
        pass

    @abstractmethod
    def get_parent(self) -> Optional['FileNode']:
        """Logical parent, or None at the root."""
        pass

    def is_writable(self) -> bool:
        # The browsing tree is read-only navigation.
        return False

    def is_readable(self) -> bool:
        return True

    def is_empty_area(self) -> bool:
        return False

    def get_url(self, forcedownload: bool = False) -> Optional[str]:
        return None

    def get_filesize(self) -> Optional[int]:
        return None

    def get_mimetype(self) -> Optional[str]:
        return None

    def get_timemodified(self) -> Optional[int]:
        return None

    def get_non_empty_children(self) -> List['FileNode']:
        """Children that are not known to be empty areas."""
        return [child for child in self.get_children() if not child.is_empty_area()]

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node's display attributes."""
        return {
            'params': self.identify().to_dict(),
            'visible_name': self.get_visible_name(),
            'is_directory': self.is_directory(),
            'is_readable': self.is_readable(),
            'is_writable': self.is_writable(),
            'url': self.get_url(),
            'filesize': self.get_filesize(),
            'mimetype': self.get_mimetype(),
            'timemodified': self.get_timemodified(),
        }

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.identify().as_tuple()!r})"
