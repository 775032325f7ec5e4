"""
Custom exceptions for the course files platform.

The browsing tree itself never raises for missing or forbidden entries; it
answers ``None`` instead. These exceptions belong to the collaborators and
the outer layers (configuration, persistence, API input).
"""

from typing import Optional, Any, Dict


class CourseFilesException(Exception):
    """Base exception for all course files errors."""

    def __init__(self, message: str, error_code: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}


class ValidationError(CourseFilesException):
    """Raised when data validation fails."""
    pass


class PersistenceError(CourseFilesException):
    """Raised when persistence operations fail."""
    pass


class ConfigurationError(CourseFilesException):
    """Raised when configuration is invalid."""
    pass
