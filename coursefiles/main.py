"""
Main entry point for the course files platform.
"""

import logging
from typing import Any, Dict, List, Optional

from .browser import BrowseRequest, FileBrowser, FileNode
from .browser.dispatcher import ModuleHandler
from .config import load_config, merge_config
from .core.entities import Course, FileRecord, ModuleRef, Section
from .core.enums import Capability, ContextLevel
from .logging_config import LoggingConfig, setup_logging
from .persistence import DatabaseFactory, SQLCourseRegistry, SQLFileStorage
from .services import CapabilityGrants, DatabaseAccessControl, PresentationService, StringManager

logger = logging.getLogger(__name__)


class CourseFilesPlatform:
    """Wires the collaborators together and hands out per-request browsers."""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        self._config = merge_config(config)
        self._database = None
        self._registry = None
        self._storage = None
        self._grants = None
        self._presentation = None
        self._module_handlers: Dict[str, ModuleHandler] = {}

        self._initialize_platform()

    def _initialize_platform(self):
        """Initialize the database and the collaborator services."""
        db_type = self._config['database_type']
        self._database = DatabaseFactory.create_database(db_type, **self._config['database_config'])
        logger.info("Database initialized: %s", db_type)

        self._registry = SQLCourseRegistry(self._database)
        self._storage = SQLFileStorage(self._database)
        self._grants = CapabilityGrants(self._database)
        self._presentation = PresentationService(self._config['wwwroot'],
                                                 StringManager(self._config['strings']))
        logger.info("Course files platform initialized (wwwroot=%s)", self._config['wwwroot'])

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @property
    def registry(self) -> SQLCourseRegistry:
        return self._registry

    @property
    def storage(self) -> SQLFileStorage:
        return self._storage

    @property
    def grants(self) -> CapabilityGrants:
        return self._grants

    def register_module_handler(self, modname: str, handler: ModuleHandler) -> None:
        """Register the subtree builder used for modules of a type."""
        self._module_handlers[modname] = handler

    def create_request(self, user_id: Optional[int]) -> BrowseRequest:
        """Build the request-scoped state for a caller."""
        return BrowseRequest(
            user_id=user_id,
            storage=self._storage,
            access=DatabaseAccessControl(self._grants, self._registry, user_id),
            registry=self._registry,
            presentation=self._presentation,
            site_id=self._config['site_id'],
        )

    def create_browser(self, user_id: Optional[int]) -> FileBrowser:
        return FileBrowser(self.create_request(user_id), self._module_handlers)

    def browse(self, user_id: Optional[int], context_id: int, component: Optional[str] = None,
               filearea: Optional[str] = None, itemid: Optional[int] = None,
               filepath: Optional[str] = None, filename: Optional[str] = None) -> Optional[FileNode]:
        """Resolve a node for a caller; None when absent or not permitted."""
        context = self._registry.get_context(context_id)
        if context is None:
            return None
        return self.create_browser(user_id).get_file_info(context, component, filearea, itemid, filepath, filename)

    def create_sample_data(self) -> None:
        """Create a sample course with sections, files and users."""
        registry = self._registry
        registry.save_context(1, ContextLevel.SYSTEM, 0)

        course = registry.save_course(Course(2, "Introduction to Computer Science", "CS101",
                                             visible=True, legacy_files=2))
        course_context = registry.save_context(2, ContextLevel.COURSE, course.id, parent_id=1)
        registry.save_section(Section(10, course.id, 0, "General"))
        registry.save_section(Section(11, course.id, 1, "Week 1"))
        registry.save_module(ModuleRef(5, course.id, "forum", "Announcements"))
        registry.save_context(3, ContextLevel.MODULE, 5, parent_id=course_context.id)

        files = [
            FileRecord(course_context.id, "course", "summary", 0, "/", "banner.png", 2048, "image/png"),
            FileRecord(course_context.id, "course", "section", 11, "/", "slides.pdf", 10240, "application/pdf"),
            FileRecord(course_context.id, "course", "legacy", 0, "/", "syllabus.pdf", 4096, "application/pdf"),
            FileRecord(course_context.id, "course", "legacy", 0, "/docs/", "readme.txt", 120, "text/plain"),
            FileRecord(course_context.id, "backup", "course", 0, "/", "backup-cs101.mbz", 65536,
                       "application/vnd.moodle.backup"),
        ]
        for record in files:
            self._storage.add_record(record)

        # 1: site admin, 2: course manager, 3: student
        self._grants.add_site_admin(1)
        for capability in (Capability.COURSE_UPDATE, Capability.MANAGE_FILES,
                           Capability.BACKUP_COURSE, Capability.BACKUP_DOWNLOAD):
            self._grants.grant(2, course_context.id, capability)
        self._grants.enrol(2, course.id)
        self._grants.enrol(3, course.id)
        logger.info("Sample data created")

    def render_tree(self, node: FileNode, max_depth: int = 6) -> List[str]:
        """Indented listing of a node and its descendants."""
        lines: List[str] = []

        def walk(current: FileNode, depth: int) -> None:
            suffix = "/" if current.is_directory() else ""
            lines.append(f"{'  ' * depth}{current.get_visible_name()}{suffix}")
            if current.is_directory() and depth < max_depth:
                for child in current.get_children():
                    walk(child, depth + 1)

        walk(node, 0)
        return lines

    def run_demo(self, user_id: int = 2, context_id: int = 2) -> None:
        """Seed sample data and print the tree a caller can see."""
        self.create_sample_data()
        node = self.browse(user_id, context_id)
        if node is None:
            print(f"Nothing visible in context {context_id} for user {user_id}")
            return
        print(f"Tree of context {context_id} as seen by user {user_id}:")
        for line in self.render_tree(node):
            print(line)

    def start_rest_server(self, host: str = "127.0.0.1", port: int = 8000) -> None:
        """Serve the REST API; blocks until interrupted."""
        import uvicorn
        from .api.rest_api import CourseFilesRestAPI

        api = CourseFilesRestAPI(self)
        logger.info("REST server starting on %s:%s", host, port)
        uvicorn.run(api.app, host=host, port=port, log_level="info")


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    import argparse

    parser = argparse.ArgumentParser(description="Course files browser")
    parser.add_argument("--config", type=str, help="Configuration file path")
    parser.add_argument("--demo", action="store_true", help="Seed sample data and print a tree")
    parser.add_argument("--user", type=int, default=2, help="Caller user id for --demo")
    parser.add_argument("--context", type=int, default=2, help="Context id to print for --demo")
    parser.add_argument("--host", type=str, default="127.0.0.1", help="REST server host")
    parser.add_argument("--port", type=int, default=8000, help="REST server port")

    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(LoggingConfig(level=config['log_level'], log_file=config['log_file']))

    platform = CourseFilesPlatform(config)

    try:
        if args.demo:
            platform.run_demo(args.user, args.context)
        else:
            platform.start_rest_server(args.host, args.port)
    except KeyboardInterrupt:
        print("\nShutting down...")


if __name__ == "__main__":
    main()
