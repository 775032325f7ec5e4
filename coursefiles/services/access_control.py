"""
Capability based access control for a single caller.
"""

import logging
from typing import Optional

from ..core.entities import Context
from ..core.enums import Capability, ContextLevel
from ..core.interfaces import AccessControl, CourseRegistry
from ..persistence.database import DatabaseManager

logger = logging.getLogger(__name__)

GUEST_USER_ID = 0


class CapabilityGrants:
    """Reads and writes capability grants, enrolments and site admins."""

    def __init__(self, database: DatabaseManager):
        self._database = database

    def grant(self, user_id: int, context_id: int, capability: str) -> None:
        self._database.execute(
            "INSERT OR IGNORE INTO capability_grants (userid, contextid, capability) VALUES (?, ?, ?)",
            (user_id, context_id, capability))

    def revoke(self, user_id: int, context_id: int, capability: str) -> None:
        self._database.execute(
            "DELETE FROM capability_grants WHERE userid = ? AND contextid = ? AND capability = ?",
            (user_id, context_id, capability))

    def enrol(self, user_id: int, course_id: int) -> None:
        self._database.execute(
            "INSERT OR IGNORE INTO enrolments (userid, courseid) VALUES (?, ?)", (user_id, course_id))

    def add_site_admin(self, user_id: int) -> None:
        self._database.execute(
            "INSERT OR IGNORE INTO site_admins (userid) VALUES (?)", (user_id,))

    def is_site_admin(self, user_id: int) -> bool:
        return bool(self._database.fetch_all(
            "SELECT userid FROM site_admins WHERE userid = ?", (user_id,)))

    def has_grant(self, user_id: int, context_ids, capability: str) -> bool:
        context_ids = list(context_ids)
        if not context_ids:
            return False
        placeholders = ", ".join("?" for _ in context_ids)
        return bool(self._database.fetch_all(
            f"""
            SELECT contextid FROM capability_grants
             WHERE userid = ? AND capability = ? AND contextid IN ({placeholders})
             LIMIT 1
            """,
            tuple([user_id, capability] + context_ids)))

    def is_enrolled(self, user_id: int, course_id: int) -> bool:
        return bool(self._database.fetch_all(
            "SELECT userid FROM enrolments WHERE userid = ? AND courseid = ?", (user_id, course_id)))


class DatabaseAccessControl(AccessControl):
    """
    Access checks for one caller.

    A capability granted in a context applies to every context below it.
    Site admins hold every capability.
    """

    def __init__(self, grants: CapabilityGrants, registry: CourseRegistry, user_id: Optional[int]):
        self._grants = grants
        self._registry = registry
        self._user_id = user_id

    @property
    def user_id(self) -> Optional[int]:
        return self._user_id

    def is_logged_in(self) -> bool:
        return self._user_id is not None and self._user_id != GUEST_USER_ID

    def has_capability(self, capability: str, context: Context) -> bool:
        if not self.is_logged_in():
            return False
        if self._grants.is_site_admin(self._user_id):
            return True
        return self._grants.has_grant(self._user_id, context.ancestor_ids(), capability)

    def is_enrolled(self, context: Context) -> bool:
        if not self.is_logged_in():
            return False
        course_context = self._course_context(context)
        if course_context is None:
            return False
        return self._grants.is_enrolled(self._user_id, course_context.instance_id)

    def is_viewing(self, context: Context) -> bool:
        return self.has_capability(Capability.COURSE_VIEW, context)

    def _course_context(self, context: Context) -> Optional[Context]:
        current: Optional[Context] = context
        while current is not None and current.level != ContextLevel.COURSE:
            if current.parent_id is None:
                return None
            current = self._registry.get_context(current.parent_id)
        return current
