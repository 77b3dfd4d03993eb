"""API routers for conveyord daemon.

This module contains FastAPI routers for all API endpoints.
"""

from .pipeline_pointers import router as pipeline_pointers_router
from .project_groups import router as project_groups_router
from .projects import router as projects_router
from .status import router as status_router

__all__ = [
    "pipeline_pointers_router",
    "project_groups_router",
    "projects_router",
    "status_router",
]
