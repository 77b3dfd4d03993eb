"""Project API endpoints.

- Read the whole registry or a single project
- Rename, retag and redescribe projects

Projects are created and deleted through their group
(see project_groups.py).
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends

from conveyor_library.models.projects import Project
from conveyor_library.models.projects import ProjectsFile
from conveyor_library.projects import ProjectManager
from conveyor_library.projects import RegistryError

from ..dependencies import get_project_manager
from ..dependencies import registry_http_error
from ..models import DescriptionChangeRequest
from ..models import ProjectDomainStatus
from ..models import ProjectResponse
from ..models import RenameRequest
from ..models import TagChangeRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects", tags=["projects"])


@router.get("/", response_model=ProjectsFile)
def get_registry(
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectsFile:
    """Get the whole registry as persisted."""
    return manager.get_projects_file()


@router.get("/{project_id}", response_model=Project)
def get_project(
    project_id: int,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> Project:
    """Get a project with its pipeline pointers.

    Raises:
        HTTPException: 404 if the project does not exist
    """
    try:
        return manager.get_project(project_id)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc


@router.patch("/{project_id}/name", response_model=ProjectResponse)
def rename_project(
    project_id: int,
    request: RenameRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectResponse:
    """Rename a project.

    Raises:
        HTTPException:
            - 404 if the project does not exist
            - 409 if another project in the same group has that name
    """
    try:
        project = manager.rename_project(project_id, request.name)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectResponse.of(ProjectDomainStatus.PROJECT_MODIFIED, project)


@router.patch("/{project_id}/tag", response_model=ProjectResponse)
def change_project_tag(
    project_id: int,
    request: TagChangeRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectResponse:
    """Change the tag of a project."""
    try:
        project = manager.change_project_tag(project_id, request.tag)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectResponse.of(ProjectDomainStatus.PROJECT_MODIFIED, project)


@router.patch("/{project_id}/description", response_model=ProjectResponse)
def change_project_description(
    project_id: int,
    request: DescriptionChangeRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectResponse:
    """Change the description of a project."""
    try:
        project = manager.change_project_description(project_id, request.description)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectResponse.of(ProjectDomainStatus.PROJECT_MODIFIED, project)
