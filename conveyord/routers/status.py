"""Status router for conveyord API.

Provides health check and status information.
"""

import logging
import time
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends

from conveyor_library.projects import ProjectManager

from .. import __version__
from ..dependencies import get_project_manager
from ..models import StatusResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["status"])

# Track daemon start time for uptime calculation
_start_time = time.time()


@router.get("/status", response_model=StatusResponse)
def get_status(
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> StatusResponse:
    """Get daemon status.

    Returns:
        Daemon status information including version, uptime, and registry location
    """
    uptime = time.time() - _start_time

    return StatusResponse(
        status="running",
        version=__version__,
        uptime_seconds=uptime,
        projects_file=str(manager.store.projects_file_path),
    )


@router.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint.

    Returns:
        Simple health status
    """
    return {"status": "healthy"}
