"""
Request-scoped browsing state.
"""

from dataclasses import dataclass
from typing import Optional

from ..core.interfaces import FileStorage, AccessControl, CourseRegistry, Presentation, TreeBrowser


@dataclass
class BrowseRequest:
    """Caller identity and collaborator handles for one browse operation."""
    user_id: Optional[int]
    storage: FileStorage
    access: AccessControl
    registry: CourseRegistry
    presentation: Presentation
    site_id: int = 1
    browser: Optional[TreeBrowser] = None
