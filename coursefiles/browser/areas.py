"""
File areas of a course context.

Each area is described by an ``AreaSpec``; the differences between areas are
data (capabilities, labels, URL form), so a single ``AreaHandler`` and a
single ``FileAreaNode`` serve all of them.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple, Union

from ..core.entities import Context, FileRecord, NodeParams, Section
from ..core.enums import Capability, FileAreaKind, SectionListKind
from .node import FileNode
from .request import BrowseRequest
from .sections import SectionListNode

logger = logging.getLogger(__name__)

ROOT_PATH = "/"
DIRECTORY_NAME = "."

LABEL_STRING = "string"
LABEL_SECTION = "section"
LABEL_SECTION_ID = "section_id"


@dataclass(frozen=True)
class AreaSpec:
    """Static description of one file area."""
    kind: FileAreaKind
    access: Tuple[str, ...]
    label_source: str = LABEL_STRING
    label_key: Optional[str] = None
    itemid_used: bool = False
    section_list: Optional[SectionListKind] = None
    download_capability: Optional[str] = None
    upload_capability: Optional[str] = None
    uploadable: bool = False
    script: str = "pluginfile.php"
    legacy: bool = False

    @property
    def component(self) -> str:
        return self.kind.component

    @property
    def filearea(self) -> str:
        return self.kind.filearea


@dataclass(frozen=True)
class VirtualRoot:
    """Placeholder for the root directory of an area with no stored records."""
    context_id: int
    component: str
    filearea: str
    itemid: int
    filepath: str = ROOT_PATH
    filename: str = DIRECTORY_NAME
    filesize: int = 0
    mimetype: Optional[str] = None
    timemodified: Optional[int] = None

    @property
    def is_directory(self) -> bool:
        return True


Backing = Union[FileRecord, VirtualRoot]


AREA_SPECS: Dict[FileAreaKind, AreaSpec] = {
    FileAreaKind.COURSE_SUMMARY: AreaSpec(
        kind=FileAreaKind.COURSE_SUMMARY,
        access=(Capability.COURSE_UPDATE,),
        label_key="areacourseintro",
        uploadable=False,
    ),
    FileAreaKind.COURSE_SECTION: AreaSpec(
        kind=FileAreaKind.COURSE_SECTION,
        access=(Capability.COURSE_UPDATE,),
        label_source=LABEL_SECTION,
        itemid_used=True,
        section_list=SectionListKind.COURSE,
        uploadable=True,
    ),
    FileAreaKind.COURSE_LEGACY: AreaSpec(
        kind=FileAreaKind.COURSE_LEGACY,
        access=(Capability.MANAGE_FILES,),
        label_key="coursefiles",
        uploadable=True,
        script="file.php",
        legacy=True,
    ),
    FileAreaKind.BACKUP_COURSE: AreaSpec(
        kind=FileAreaKind.BACKUP_COURSE,
        access=(Capability.BACKUP_COURSE, Capability.RESTORE_COURSE),
        label_key="coursebackup",
        download_capability=Capability.BACKUP_DOWNLOAD,
        upload_capability=Capability.RESTORE_UPLOAD,
    ),
    FileAreaKind.BACKUP_AUTOMATED: AreaSpec(
        kind=FileAreaKind.BACKUP_AUTOMATED,
        access=(Capability.VIEW_AUTOMATED,),
        label_key="automatedbackup",
        itemid_used=True,
        download_capability=Capability.SITE_CONFIG,
        uploadable=False,
    ),
    FileAreaKind.BACKUP_SECTION: AreaSpec(
        kind=FileAreaKind.BACKUP_SECTION,
        access=(Capability.BACKUP_COURSE, Capability.RESTORE_COURSE),
        label_source=LABEL_SECTION_ID,
        itemid_used=True,
        section_list=SectionListKind.BACKUP,
        download_capability=Capability.BACKUP_DOWNLOAD,
        upload_capability=Capability.RESTORE_UPLOAD,
    ),
}


class FileAreaNode(FileNode):
    """A stored file or directory (or a virtual area root) inside one area."""

    def __init__(self, request: BrowseRequest, context: Context, spec: AreaSpec, backing: Backing,
                 label: str, downloadable: bool, uploadable: bool):
        super().__init__(request, context)
        self._spec = spec
        self._backing = backing
        self._label = label
        self._downloadable = downloadable
        self._uploadable = uploadable

    @property
    def spec(self) -> AreaSpec:
        return self._spec

    @property
    def backing(self) -> Backing:
        return self._backing

    @property
    def is_virtual(self) -> bool:
        return isinstance(self._backing, VirtualRoot)

    @property
    def label(self) -> str:
        return self._label

    def is_uploadable(self) -> bool:
        """Whether the caller could add files here through the upload tools."""
        return self._uploadable

    def is_area_root(self) -> bool:
        return self._backing.filepath == ROOT_PATH and self._backing.filename == DIRECTORY_NAME

    def identify(self) -> NodeParams:
        b = self._backing
        return NodeParams(self._context.id, b.component, b.filearea, b.itemid, b.filepath, b.filename)

    def get_visible_name(self) -> str:
        if not self.is_directory():
            return self._backing.filename
        directory = self._backing.filepath.strip("/")
        if directory == "":
            return self._label
        return directory.split("/")[-1]

    def is_directory(self) -> bool:
        return self._backing.is_directory

    def is_readable(self) -> bool:
        return self._downloadable

    def is_empty_area(self) -> bool:
        if not self.is_area_root():
            return False
        b = self._backing
        return self._request.storage.is_area_empty(b.context_id, b.component, b.filearea, b.itemid)

    def get_filesize(self) -> Optional[int]:
        if self.is_virtual or self.is_directory():
            return None
        return self._backing.filesize

    def get_mimetype(self) -> Optional[str]:
        return self._backing.mimetype

    def get_timemodified(self) -> Optional[int]:
        return self._backing.timemodified

    def get_url(self, forcedownload: bool = False) -> Optional[str]:
        if not self._downloadable or self.is_directory():
            return None
        b = self._backing
        if self._spec.legacy:
            path = f"/{self._context.instance_id}{b.filepath}{b.filename}"
        else:
            path = f"/{self._context.id}/{b.component}/{b.filearea}"
            if self._spec.itemid_used:
                path += f"/{b.itemid}"
            path += f"{b.filepath}{b.filename}"
        return self._request.presentation.file_url(self._spec.script, path, forcedownload)

    def get_children(self) -> List[FileNode]:
        if not self.is_directory():
            return []
        b = self._backing
        records = self._request.storage.get_directory_files(
            b.context_id, b.component, b.filearea, b.itemid, b.filepath,
            recursive=False, include_dirs=True, sort="filepath, filename")
        return [self._child(record) for record in records]

    def _child(self, record: FileRecord) -> 'FileAreaNode':
        return FileAreaNode(self._request, self._context, self._spec, record,
                            self._label, self._downloadable, self._uploadable)

    def get_parent(self) -> Optional[FileNode]:
        b = self._backing
        if self.is_area_root():
            if self._spec.itemid_used:
                return self.browser.get_file_info(self._context, b.component, b.filearea)
            return self.browser.get_file_info(self._context)

        if b.filename != DIRECTORY_NAME:
            parent_path = b.filepath
        else:
            parent_path = b.filepath.rstrip("/").rsplit("/", 1)[0] + "/"
        return self.browser.get_file_info(self._context, b.component, b.filearea, b.itemid,
                                          parent_path, DIRECTORY_NAME)


class AreaHandler:
    """Resolves paths inside one area for a course node."""

    def __init__(self, spec: AreaSpec):
        self._spec = spec

    @property
    def spec(self) -> AreaSpec:
        return self._spec

    def resolve(self, course_node, itemid: Optional[int], filepath: Optional[str],
                filename: Optional[str]) -> Optional[FileNode]:
        spec = self._spec
        request = course_node.request
        context = course_node.context
        access = request.access

        if not any(access.has_capability(capability, context) for capability in spec.access):
            logger.debug("Area %s/%s hidden in context %s for user %s",
                         spec.component, spec.filearea, context.id, request.user_id)
            return None

        section = None
        if spec.section_list is not None:
            if not itemid:
                return SectionListNode(request, context, course_node.course, course_node, spec.section_list)
            section = request.registry.get_section(course_node.course.id, itemid)
            if section is None:
                return None
            stored_itemid = itemid
        else:
            if itemid is None:
                return course_node
            stored_itemid = 0

        filepath = ROOT_PATH if filepath is None else filepath
        filename = DIRECTORY_NAME if filename is None else filename

        backing = request.storage.get_file(context.id, spec.component, spec.filearea,
                                           stored_itemid, filepath, filename)
        if backing is None:
            if filepath == ROOT_PATH and filename == DIRECTORY_NAME:
                backing = VirtualRoot(context.id, spec.component, spec.filearea, stored_itemid)
            else:
                return None

        return FileAreaNode(request, context, spec, backing,
                            label=self._label(request, section),
                            downloadable=self._flag(access, context, spec.download_capability, True),
                            uploadable=self._flag(access, context, spec.upload_capability, spec.uploadable))

    def _label(self, request: BrowseRequest, section: Optional[Section]) -> str:
        if self._spec.label_source == LABEL_SECTION:
            return section.label
        if self._spec.label_source == LABEL_SECTION_ID:
            return str(section.id)
        return request.presentation.get_string(self._spec.label_key)

    @staticmethod
    def _flag(access, context: Context, capability: Optional[str], default: bool) -> bool:
        if capability is None:
            return default
        return access.has_capability(capability, context)


AREA_HANDLERS: Dict[Tuple[str, str], AreaHandler] = {
    kind.value: AreaHandler(spec) for kind, spec in AREA_SPECS.items()
}


def get_area_handler(component: str, filearea: Optional[str]) -> Optional[AreaHandler]:
    """Handler for a (component, filearea) pair, or None when unknown."""
    return AREA_HANDLERS.get((component, filearea))
