"""
Enumerations and constants for the course files platform.
"""

from enum import Enum


class ContextLevel(Enum):
    """Levels of the context tree."""
    SYSTEM = 10
    COURSECAT = 40
    COURSE = 50
    MODULE = 70


class Capability:
    """Capability names checked while browsing."""
    VIEW_HIDDEN_COURSES = "moodle/course:viewhiddencourses"
    COURSE_VIEW = "moodle/course:view"
    COURSE_UPDATE = "moodle/course:update"
    MANAGE_FILES = "moodle/course:managefiles"
    BACKUP_COURSE = "moodle/backup:backupcourse"
    BACKUP_DOWNLOAD = "moodle/backup:downloadfile"
    RESTORE_COURSE = "moodle/restore:restorecourse"
    RESTORE_UPLOAD = "moodle/restore:uploadfile"
    VIEW_AUTOMATED = "moodle/restore:viewautomatedfilearea"
    SITE_CONFIG = "moodle/site:config"


class FileAreaKind(Enum):
    """File areas owned by a course context, as (component, filearea)."""
    COURSE_SUMMARY = ("course", "summary")
    COURSE_SECTION = ("course", "section")
    COURSE_LEGACY = ("course", "legacy")
    BACKUP_COURSE = ("backup", "course")
    BACKUP_AUTOMATED = ("backup", "automated")
    BACKUP_SECTION = ("backup", "section")

    @property
    def component(self) -> str:
        return self.value[0]

    @property
    def filearea(self) -> str:
        return self.value[1]


class SectionListKind(Enum):
    """Aggregate "all sections" directories."""
    COURSE = "course"
    BACKUP = "backup"
