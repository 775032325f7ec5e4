"""
Localized strings and download URLs.
"""

from typing import Dict, Optional
from urllib.parse import quote

from ..core.interfaces import Presentation

DEFAULT_STRINGS: Dict[str, str] = {
    "areacourseintro": "Course intro",
    "coursefiles": "Legacy course files",
    "coursebackup": "Course backup",
    "automatedbackup": "Automated backups",
    "sectionbackup": "Section backups",
    "coursesectionsummaries": "Course section summaries",
    "frontpage": "Front page",
}


class StringManager:
    """English strings with optional per-key overrides."""

    def __init__(self, overrides: Optional[Dict[str, str]] = None):
        self._strings = dict(DEFAULT_STRINGS)
        self._strings.update(overrides or {})

    def get_string(self, key: str) -> str:
        return self._strings.get(key, f"[[{key}]]")


class PresentationService(Presentation):
    """Builds display strings and file URLs below ``wwwroot``."""

    def __init__(self, wwwroot: str, strings: Optional[StringManager] = None):
        self._wwwroot = wwwroot.rstrip("/")
        self._strings = strings or StringManager()

    def get_string(self, key: str) -> str:
        return self._strings.get_string(key)

    def file_url(self, script: str, path: str, forcedownload: bool = False) -> str:
        url = f"{self._wwwroot}/{script}{quote(path, safe='/')}"
        if forcedownload:
            url += "?forcedownload=1"
        return url
