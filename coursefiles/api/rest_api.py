"""
Read-only REST API over the browsing tree using FastAPI.

The caller is identified by ``caller_user_id``. Out of the box it trusts the
``X-User-Id`` request header, which is only suitable for development and
tests: any client can claim any user. Deployments must replace it through
``app.dependency_overrides[caller_user_id]`` with a dependency that reads an
authenticated session or token.
"""

import logging
from datetime import datetime, timezone
from typing import Optional, Dict, Any, List
from pydantic import BaseModel

from fastapi import Depends, FastAPI, HTTPException, Header, Query
from fastapi.middleware.cors import CORSMiddleware

from ..browser import FileNode
from ..core.exceptions import PersistenceError, ValidationError

logger = logging.getLogger(__name__)


def caller_user_id(x_user_id: Optional[int] = Header(None)) -> Optional[int]:
    """Development identity: the unauthenticated X-User-Id header."""
    return x_user_id


# Pydantic models for API
class NodeParamsResponse(BaseModel):
    contextid: int
    component: Optional[str] = None
    filearea: Optional[str] = None
    itemid: Optional[int] = None
    filepath: Optional[str] = None
    filename: Optional[str] = None


class NodeSummary(BaseModel):
    params: NodeParamsResponse
    visible_name: str
    is_directory: bool
    is_readable: bool
    is_writable: bool
    url: Optional[str] = None
    filesize: Optional[int] = None
    mimetype: Optional[str] = None
    timemodified: Optional[int] = None


class NodeResponse(NodeSummary):
    parent: Optional[NodeParamsResponse] = None
    children: List[NodeSummary] = []


class CourseFilesRestAPI:
    """REST API exposing the browsing tree of a platform."""

    def __init__(self, platform):
        self._platform = platform

        self.app = FastAPI(
            title="Course Files Browser API",
            description="Permission-gated browsing of course file areas",
            version="1.0.0",
            docs_url="/docs",
            redoc_url="/redoc"
        )

        self.app.add_middleware(
            CORSMiddleware,
            allow_origins=["*"],
            allow_credentials=True,
            allow_methods=["GET"],
            allow_headers=["*"],
        )

        self._setup_routes()

    def _setup_routes(self):
        """Setup API routes."""

        @self.app.get("/", response_model=Dict[str, str])
        async def root():
            """Root endpoint."""
            return {
                "message": "Course Files Browser API",
                "version": "1.0.0",
                "docs": "/docs"
            }

        @self.app.get("/health", response_model=Dict[str, str])
        async def health_check():
            """Health check endpoint."""
            return {"status": "healthy", "timestamp": datetime.now(timezone.utc).isoformat()}

        @self.app.get("/browse/{context_id}", response_model=NodeResponse)
        def browse(context_id: int,
                   component: Optional[str] = Query(None),
                   filearea: Optional[str] = Query(None),
                   itemid: Optional[int] = Query(None),
                   filepath: Optional[str] = Query(None),
                   filename: Optional[str] = Query(None),
                   user_id: Optional[int] = Depends(caller_user_id)):
            """Resolve a node and list its children for the calling user."""
            try:
                node = self._platform.browse(user_id, context_id, component, filearea,
                                             itemid, filepath, filename)
                if node is None:
                    raise HTTPException(status_code=404, detail="Not found")
                return self._node_to_response(node)

            except HTTPException:
                raise
            except ValidationError as e:
                raise HTTPException(status_code=400, detail=str(e))
            except PersistenceError as e:
                logger.error("Browse failed for context %s: %s", context_id, e)
                raise HTTPException(status_code=500, detail=f"Internal error: {str(e)}")

    @staticmethod
    def _summary(node: FileNode) -> Dict[str, Any]:
        return node.to_dict()

    def _node_to_response(self, node: FileNode) -> NodeResponse:
        """Convert a node to its API response."""
        data = self._summary(node)
        parent = node.get_parent()
        data['parent'] = parent.identify().to_dict() if parent is not None else None
        data['children'] = [self._summary(child) for child in node.get_children()] if node.is_directory() else []
        return NodeResponse(**data)
