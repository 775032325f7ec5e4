"""
Shared fixtures and in-memory collaborators for the browsing tree tests.
"""

import os
import sys
from typing import Dict, List, Optional, Set

import pytest

# Make the project root importable when the package is not installed.
_ROOT_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if _ROOT_PATH not in sys.path:
    sys.path.insert(0, _ROOT_PATH)

from coursefiles.browser import BrowseRequest, CourseNode, FileBrowser
from coursefiles.core.entities import Context, Course, FileRecord, ModuleRef, Section
from coursefiles.core.enums import ContextLevel
from coursefiles.core.interfaces import AccessControl, CourseRegistry, FileStorage
from coursefiles.services.presentation import PresentationService

WWWROOT = "https://lms.test"


class FakeStorage(FileStorage):
    """File records held in a list; no implicit parent directories."""

    def __init__(self):
        self.records: List[FileRecord] = []

    def add(self, context_id, component, filearea, itemid, filepath, filename, filesize=0, mimetype=None):
        record = FileRecord(context_id, component, filearea, itemid, filepath, filename, filesize, mimetype)
        self.records.append(record)
        return record

    def get_file(self, context_id, component, filearea, itemid, filepath, filename):
        for r in self.records:
            if (r.context_id, r.component, r.filearea, r.itemid, r.filepath, r.filename) == \
                    (context_id, component, filearea, itemid, filepath, filename):
                return r
        return None

    def get_directory_files(self, context_id, component, filearea, itemid, filepath,
                            recursive=False, include_dirs=True, sort="filepath, filename"):
        result = []
        for r in self.records:
            if (r.context_id, r.component, r.filearea, r.itemid) != (context_id, component, filearea, itemid):
                continue
            if not r.filepath.startswith(filepath):
                continue
            if r.filepath == filepath and r.is_directory:
                continue
            if r.is_directory and not include_dirs:
                continue
            depth = r.filepath[len(filepath):].count("/")
            if not recursive and depth != (1 if r.is_directory else 0):
                continue
            result.append(r)
        return sorted(result, key=lambda r: (r.filepath, r.filename))

    def is_area_empty(self, context_id, component, filearea, itemid=None):
        for r in self.records:
            if (r.context_id, r.component, r.filearea) != (context_id, component, filearea):
                continue
            if itemid is not None and r.itemid != itemid:
                continue
            if not r.is_directory:
                return False
        return True


class FakeAccess(AccessControl):
    """Access answers configured per test."""

    def __init__(self, logged_in=True, enrolled=True, viewing=False, capabilities: Optional[Set[str]] = None):
        self.logged_in = logged_in
        self.enrolled = enrolled
        self.viewing = viewing
        self.capabilities: Set[str] = set(capabilities or ())
        self.checked: List[str] = []

    def is_logged_in(self):
        return self.logged_in

    def has_capability(self, capability, context):
        self.checked.append(capability)
        return capability in self.capabilities

    def is_enrolled(self, context):
        return self.enrolled

    def is_viewing(self, context):
        return self.viewing


class FakeRegistry(CourseRegistry):
    """Courses, sections, modules and contexts held in memory."""

    def __init__(self):
        self.courses: Dict[int, Course] = {}
        self.sections: List[Section] = []
        self.modules: List[ModuleRef] = []
        self.contexts: Dict[int, Context] = {}
        self.module_calls = 0

    def add_context(self, context: Context) -> Context:
        self.contexts[context.id] = context
        return context

    def get_course(self, course_id):
        return self.courses.get(course_id)

    def get_sections(self, course_id):
        return sorted((s for s in self.sections if s.course_id == course_id), key=lambda s: s.section)

    def get_section(self, course_id, section_id):
        for s in self.sections:
            if s.course_id == course_id and s.id == section_id:
                return s
        return None

    def get_modules(self, course):
        self.module_calls += 1
        return [m for m in self.modules if m.course_id == course.id]

    def get_module(self, cm_id):
        for m in self.modules:
            if m.id == cm_id:
                return m
        return None

    def get_context(self, context_id):
        return self.contexts.get(context_id)

    def get_context_for(self, level, instance_id):
        for context in self.contexts.values():
            if context.level == level and context.instance_id == instance_id:
                return context
        return None


class BrowseEnv:
    """A course (id 5) in context 20 below the system context 1."""

    def __init__(self):
        self.storage = FakeStorage()
        self.access = FakeAccess()
        self.registry = FakeRegistry()
        self.presentation = PresentationService(WWWROOT)
        self.module_handlers = {}

        self.system_context = self.registry.add_context(Context(1, ContextLevel.SYSTEM, 0, None, [1]))
        self.course_context = self.registry.add_context(Context(20, ContextLevel.COURSE, 5, 1, [1, 20]))
        self.course = Course(5, "Physics 101", "PHY101")
        self.registry.courses[5] = self.course

    def set_course(self, **kwargs) -> Course:
        values = {'course_id': 5, 'fullname': "Physics 101", 'shortname': "PHY101"}
        values.update(kwargs)
        self.course = Course(**values)
        self.registry.courses[self.course.id] = self.course
        return self.course

    def add_section(self, section_id, number, name=None, course_id=5) -> Section:
        section = Section(section_id, course_id, number, name)
        self.registry.sections.append(section)
        return section

    def add_module(self, cm_id, modname="resource", visible=True, context_id=None) -> ModuleRef:
        context_id = context_id if context_id is not None else 100 + cm_id
        self.registry.add_context(Context(context_id, ContextLevel.MODULE, cm_id, 20, [1, 20, context_id]))
        module = ModuleRef(cm_id, 5, modname, f"{modname} {cm_id}", visible, context_id)
        self.registry.modules.append(module)
        return module

    def browser(self, user_id=7) -> FileBrowser:
        request = BrowseRequest(user_id=user_id, storage=self.storage, access=self.access,
                                registry=self.registry, presentation=self.presentation, site_id=1)
        return FileBrowser(request, self.module_handlers)

    def course_node(self) -> CourseNode:
        browser = self.browser()
        return CourseNode(browser.request, self.course_context, self.course)


@pytest.fixture
def env() -> BrowseEnv:
    """Fresh browsing environment with a visible course and an enrolled caller."""
    return BrowseEnv()


def ids(nodes):
    """identify() tuples of a list of nodes."""
    return [node.identify().as_tuple() for node in nodes]
