"""
API module for the REST interface.
"""

from .rest_api import CourseFilesRestAPI, caller_user_id

__all__ = [
    "CourseFilesRestAPI",
    "caller_user_id",
]
