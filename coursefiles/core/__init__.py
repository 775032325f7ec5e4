"""
Core module containing the object model and collaborator interfaces.
"""

from .entities import *
from .interfaces import *
from .exceptions import *
from .enums import *

__all__ = [
    # Entities
    "Context",
    "Course",
    "Section",
    "ModuleRef",
    "FileRecord",
    "NodeParams",

    # Interfaces
    "FileStorage",
    "AccessControl",
    "CourseRegistry",
    "Presentation",
    "TreeBrowser",

    # Enums
    "ContextLevel",
    "Capability",
    "FileAreaKind",
    "SectionListKind",

    # Exceptions
    "CourseFilesException",
    "ValidationError",
    "PersistenceError",
    "ConfigurationError",
]
