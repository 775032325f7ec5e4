"""
Tests for the aggregate section list directories.
"""

from coursefiles.browser import CourseNode, FileAreaNode, SectionListNode
from coursefiles.core.enums import Capability, SectionListKind
from conftest import ids


def test_section_list_identifies_without_item(env):
    env.access.capabilities = {Capability.COURSE_UPDATE, Capability.BACKUP_COURSE}
    node = env.course_node()

    course_list = node.resolve("course", "section", None, None, None)
    backup_list = node.resolve("backup", "section", None, None, None)

    assert course_list.identify().as_tuple() == (20, "course", "section", None, None, None)
    assert backup_list.identify().as_tuple() == (20, "backup", "section", None, None, None)
    assert course_list.kind == SectionListKind.COURSE
    assert backup_list.kind == SectionListKind.BACKUP
    assert course_list.is_directory() and backup_list.is_directory()
    assert course_list.is_writable() is False


def test_section_list_names(env):
    env.access.capabilities = {Capability.COURSE_UPDATE, Capability.BACKUP_COURSE}
    node = env.course_node()

    assert node.resolve("course", "section").get_visible_name() == "Course section summaries"
    assert node.resolve("backup", "section").get_visible_name() == "Section backups"


def test_children_follow_section_sequence(env):
    env.access.capabilities = {Capability.COURSE_UPDATE}
    env.add_section(30, 2, "Week 2")
    env.add_section(10, 0, "General")
    env.add_section(20, 1, "Week 1")
    env.add_section(99, 0, "Elsewhere", course_id=6)

    children = env.course_node().resolve("course", "section").get_children()

    assert [c.identify().itemid for c in children] == [10, 20, 30]
    assert [c.get_visible_name() for c in children] == ["General", "Week 1", "Week 2"]
    assert all(isinstance(c, FileAreaNode) and c.is_virtual for c in children)


def test_children_use_stored_section_roots(env):
    env.access.capabilities = {Capability.BACKUP_COURSE}
    env.add_section(10, 0)
    env.storage.add(20, "backup", "section", 10, "/", ".")

    children = env.course_node().resolve("backup", "section").get_children()

    assert ids(children) == [(20, "backup", "section", 10, "/", ".")]
    assert not children[0].is_virtual


def test_children_recheck_course_access(env):
    env.access.capabilities = {Capability.COURSE_UPDATE}
    env.add_section(10, 0)
    section_list = env.course_node().resolve("course", "section")

    env.access.enrolled = False

    assert section_list.get_children() == []


def test_children_are_recomputed_identically(env):
    env.access.capabilities = {Capability.COURSE_UPDATE}
    env.add_section(11, 1)
    env.add_section(10, 0)
    section_list = env.course_node().resolve("course", "section")

    assert ids(section_list.get_children()) == ids(section_list.get_children())


def test_is_empty_area_checks_whole_area(env):
    env.access.capabilities = {Capability.COURSE_UPDATE}
    env.add_section(10, 0)
    section_list = env.course_node().resolve("course", "section")

    assert section_list.is_empty_area() is True

    env.storage.add(20, "course", "section", 77, "/", ".")
    assert section_list.is_empty_area() is True

    env.storage.add(20, "course", "section", 77, "/", "orphan.pdf")
    assert section_list.is_empty_area() is False


def test_course_section_list_parent_is_owning_course_node(env):
    env.access.capabilities = {Capability.COURSE_UPDATE}
    course_node = env.course_node()

    section_list = course_node.resolve("course", "section")

    assert section_list.get_parent() is course_node


def test_backup_section_list_parent_is_resolved_again(env):
    env.access.capabilities = {Capability.BACKUP_COURSE}
    course_node = env.course_node()

    parent = course_node.resolve("backup", "section").get_parent()

    assert isinstance(parent, CourseNode)
    assert parent is not course_node
    assert parent.identify() == course_node.identify()
    assert ids(parent.get_children()) == ids(course_node.get_children())


def test_course_with_one_section_and_no_files(env):
    env.access.capabilities = {Capability.COURSE_UPDATE}
    env.add_section(10, 1)
    course_node = env.course_node()

    summary = course_node.resolve("course", "summary", 0, "/", ".")
    assert isinstance(summary, FileAreaNode)
    assert summary.is_virtual
    assert summary.is_directory()
    assert summary.get_visible_name() == "Course intro"

    section_list = course_node.resolve("course", "section", None, None, None)
    assert isinstance(section_list, SectionListNode)
    children = section_list.get_children()
    assert len(children) == 1
    assert children[0].identify().itemid == 10
