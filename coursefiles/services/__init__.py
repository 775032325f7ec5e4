"""
Services providing access control and presentation to the browsing tree.
"""

from .access_control import CapabilityGrants, DatabaseAccessControl
from .presentation import StringManager, PresentationService, DEFAULT_STRINGS

__all__ = [
    "CapabilityGrants",
    "DatabaseAccessControl",
    "StringManager",
    "PresentationService",
    "DEFAULT_STRINGS",
]
