"""
Tests for the context dispatcher.
"""

from unittest.mock import MagicMock

from coursefiles.browser import CourseNode, FileAreaNode
from coursefiles.core.entities import Context, ModuleRef
from coursefiles.core.enums import Capability, ContextLevel


def test_course_context_gives_course_node(env):
    node = env.browser().get_file_info(env.course_context)

    assert isinstance(node, CourseNode)
    assert node.course is env.course


def test_course_context_passes_path_to_course(env):
    env.access.capabilities = {Capability.COURSE_UPDATE}

    node = env.browser().get_file_info(env.course_context, "course", "summary", 0, "/", ".")

    assert isinstance(node, FileAreaNode)


def test_course_context_without_course_is_absent(env):
    orphan = env.registry.add_context(Context(21, ContextLevel.COURSE, 404, 1, [1, 21]))
    assert env.browser().get_file_info(orphan) is None


def test_other_levels_are_absent(env):
    browser = env.browser()
    category = env.registry.add_context(Context(3, ContextLevel.COURSECAT, 1, 1, [1, 3]))

    assert browser.get_file_info(env.system_context) is None
    assert browser.get_file_info(category) is None
    assert browser.get_file_info() is None


def test_module_context_delegates_to_registered_handler(env):
    module = env.add_module(7, "folder")
    handler = MagicMock(return_value="folder node")
    browser = env.browser()
    browser.register_module_handler("folder", handler)

    node = browser.get_node_for_context(env.registry.get_context(107))

    assert node == "folder node"
    handler.assert_called_once_with(browser.request, env.registry.get_context(107), module)


def test_module_without_handler_is_absent(env):
    env.add_module(7, "quiz")
    assert env.browser().get_file_info(env.registry.get_context(107)) is None


def test_hidden_module_is_absent(env):
    env.add_module(7, "folder", visible=False)
    handler = MagicMock()
    env.module_handlers["folder"] = handler

    assert env.browser().get_file_info(env.registry.get_context(107)) is None
    handler.assert_not_called()


def test_module_context_outside_course_is_absent(env):
    stray = env.registry.add_context(Context(300, ContextLevel.MODULE, 9, 1, [1, 300]))
    env.module_handlers["folder"] = MagicMock()

    assert env.browser().get_file_info(stray) is None


def test_browser_attaches_itself_to_request(env):
    browser = env.browser(user_id=12)

    assert browser.request.browser is browser
    assert browser.request.user_id == 12


def test_module_dispatch_looks_up_one_module(env):
    env.add_module(7, "folder")
    env.module_handlers["folder"] = MagicMock(return_value="folder node")

    assert env.browser().get_file_info(env.registry.get_context(107)) == "folder node"
    assert env.registry.module_calls == 0


def test_module_of_another_course_is_absent(env):
    module = env.add_module(7, "folder")
    env.registry.modules[0] = ModuleRef(module.id, 6, "folder", module.name, True, module.context_id)
    env.module_handlers["folder"] = MagicMock()

    assert env.browser().get_file_info(env.registry.get_context(107)) is None
    env.module_handlers["folder"].assert_not_called()
