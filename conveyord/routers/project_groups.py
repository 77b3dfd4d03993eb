"""Project group API endpoints.

Manages project groups and the projects they own:
- List, get, create and delete project groups (hard or soft)
- Rename, retag and redescribe project groups
- Create and delete projects inside a group (hard or soft)
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends
from fastapi import Query

from conveyor_library.models.projects import ProjectGroup
from conveyor_library.projects import ProjectManager
from conveyor_library.projects import RegistryError

from ..dependencies import get_project_manager
from ..dependencies import registry_http_error
from ..models import AddProjectGroupRequest
from ..models import AddProjectRequest
from ..models import DescriptionChangeRequest
from ..models import ProjectDomainStatus
from ..models import ProjectGroupResponse
from ..models import ProjectResponse
from ..models import RenameRequest
from ..models import TagChangeRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/project-groups", tags=["project-groups"])


@router.get("/", response_model=list[ProjectGroup])
def list_project_groups(
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> list[ProjectGroup]:
    """List project groups with their projects and pipeline pointers."""
    return manager.list_project_groups()


@router.get("/{project_group_id}", response_model=ProjectGroup)
def get_project_group(
    project_group_id: int,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectGroup:
    """Get a project group.

    Raises:
        HTTPException: 404 if the group does not exist
    """
    try:
        return manager.get_project_group(project_group_id)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc


@router.post("/", status_code=201, response_model=ProjectGroupResponse)
def create_project_group(
    request: AddProjectGroupRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectGroupResponse:
    """Create a project group.

    Args:
        request: Group attributes
        manager: Project manager dependency

    Returns:
        Created group

    Raises:
        HTTPException:
            - 409 if a group with that name exists
            - 422 if validation fails
    """
    try:
        group = manager.create_project_group(request.name, tag=request.tag, description=request.description)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectGroupResponse.of(ProjectDomainStatus.PROJECT_GROUP_CREATED, group)


@router.delete("/{project_group_id}", response_model=ProjectGroupResponse)
def delete_project_group(
    project_group_id: int,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
    hard: bool = Query(False, description="Discard projects and pipeline pointers instead of moving them"),
) -> ProjectGroupResponse:
    """Delete a project group.

    Soft removal moves the group's projects into the default group.

    Raises:
        HTTPException:
            - 404 if the group does not exist
            - 409 for the default group or a project name clash
    """
    try:
        group = manager.delete_project_group(project_group_id, hard)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectGroupResponse.of(ProjectDomainStatus.PROJECT_GROUP_REMOVED, group)


@router.patch("/{project_group_id}/name", response_model=ProjectGroupResponse)
def rename_project_group(
    project_group_id: int,
    request: RenameRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectGroupResponse:
    """Rename a project group."""
    try:
        group = manager.rename_project_group(project_group_id, request.name)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectGroupResponse.of(ProjectDomainStatus.PROJECT_GROUP_MODIFIED, group)


@router.patch("/{project_group_id}/tag", response_model=ProjectGroupResponse)
def change_project_group_tag(
    project_group_id: int,
    request: TagChangeRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectGroupResponse:
    """Change the tag of a project group."""
    try:
        group = manager.change_project_group_tag(project_group_id, request.tag)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectGroupResponse.of(ProjectDomainStatus.PROJECT_GROUP_MODIFIED, group)


@router.patch("/{project_group_id}/description", response_model=ProjectGroupResponse)
def change_project_group_description(
    project_group_id: int,
    request: DescriptionChangeRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectGroupResponse:
    """Change the description of a project group."""
    try:
        group = manager.change_project_group_description(project_group_id, request.description)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectGroupResponse.of(ProjectDomainStatus.PROJECT_GROUP_MODIFIED, group)


# --- Projects inside a group ---


@router.post("/{project_group_id}/projects", status_code=201, response_model=ProjectResponse)
def create_project(
    project_group_id: int,
    request: AddProjectRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> ProjectResponse:
    """Create a project inside a project group.

    Raises:
        HTTPException:
            - 404 if the group does not exist
            - 409 if the group already has a project with that name
    """
    try:
        project = manager.create_project(
            project_group_id,
            request.name,
            tag=request.tag,
            description=request.description,
        )
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return ProjectResponse.of(ProjectDomainStatus.PROJECT_CREATED, project)


@router.delete("/{project_group_id}/projects/{project_id}", response_model=ProjectResponse)
def delete_project(
    project_group_id: int,
    project_id: int,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
    hard: bool = Query(False, description="Discard pipeline pointers instead of moving them"),
) -> ProjectResponse:
    """Delete a project.

    Soft removal moves the project's pipeline pointers into the default project.
    Targeting the default project changes nothing and reports a denied removal.

    Raises:
        HTTPException:
            - 404 if the group or project does not exist
            - 409 if a moved pipeline pointer name clashes
    """
    try:
        project = manager.delete_project(project_group_id, project_id, hard)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc

    if project is None:
        logger.info(f"Refused to delete default project {project_id}")
        return ProjectResponse.of(ProjectDomainStatus.PROJECT_REMOVAL_DENIED, None)
    return ProjectResponse.of(ProjectDomainStatus.PROJECT_REMOVED, project)
