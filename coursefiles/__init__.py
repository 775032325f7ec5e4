"""
Course files: a permission-gated virtual file tree over course file areas.

Courses are browsed as directories holding their summary files, section
files, legacy course files and backups, plus the subtrees of their modules.
Every step re-checks the caller's access; nodes the caller may not see are
simply absent.
"""

__version__ = "1.0.0"
__author__ = "Course Files Development Team"
__description__ = "Permission-gated virtual file tree over course file areas"
