"""Pipeline pointer API endpoints.

Registers parsed pipelines under a project and manages the resulting pointers.
"""

import logging
from typing import Annotated

from fastapi import APIRouter
from fastapi import Depends

from conveyor_library.models.projects import PipelineMetadata
from conveyor_library.models.projects import PipelinePointer
from conveyor_library.projects import ProjectManager
from conveyor_library.projects import RegistryError

from ..dependencies import get_project_manager
from ..dependencies import registry_http_error
from ..models import AddPipelinePointerRequest
from ..models import DescriptionChangeRequest
from ..models import PipelinePointerResponse
from ..models import ProjectDomainStatus
from ..models import RenameRequest
from ..models import TagChangeRequest

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/projects/{project_id}/pipelines", tags=["pipelines"])


@router.post("/", status_code=201, response_model=PipelinePointerResponse)
def create_pipeline_pointer(
    project_id: int,
    request: AddPipelinePointerRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> PipelinePointerResponse:
    """Register a parsed pipeline under a project.

    Raises:
        HTTPException:
            - 404 if the project does not exist
            - 409 if the pipeline id is already registered or the name is taken
    """
    metadata = PipelineMetadata(project_id=project_id, **request.model_dump())
    try:
        pointer = manager.create_pipeline_pointer(metadata)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return PipelinePointerResponse.of(ProjectDomainStatus.PIPELINE_POINTER_CREATED, pointer)


@router.get("/{pipeline_pointer_id}", response_model=PipelinePointer)
def get_pipeline_pointer(
    project_id: int,
    pipeline_pointer_id: int,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> PipelinePointer:
    """Get a pipeline pointer.

    Raises:
        HTTPException: 404 if the project or pointer does not exist
    """
    try:
        return manager.get_pipeline_pointer(project_id, pipeline_pointer_id)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc


@router.delete("/{pipeline_pointer_id}", response_model=PipelinePointerResponse)
def delete_pipeline_pointer(
    project_id: int,
    pipeline_pointer_id: int,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> PipelinePointerResponse:
    """Delete a pipeline pointer.

    Raises:
        HTTPException: 404 if the project or pointer does not exist
    """
    try:
        pointer = manager.delete_pipeline_pointer(project_id, pipeline_pointer_id)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return PipelinePointerResponse.of(ProjectDomainStatus.PIPELINE_POINTER_REMOVED, pointer)


@router.patch("/{pipeline_pointer_id}/name", response_model=PipelinePointerResponse)
def rename_pipeline_pointer(
    project_id: int,
    pipeline_pointer_id: int,
    request: RenameRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> PipelinePointerResponse:
    """Rename a pipeline pointer."""
    try:
        pointer = manager.rename_pipeline_pointer(project_id, pipeline_pointer_id, request.name)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return PipelinePointerResponse.of(ProjectDomainStatus.PIPELINE_POINTER_MODIFIED, pointer)


@router.patch("/{pipeline_pointer_id}/tag", response_model=PipelinePointerResponse)
def change_pipeline_pointer_tag(
    project_id: int,
    pipeline_pointer_id: int,
    request: TagChangeRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> PipelinePointerResponse:
    """Change the tag of a pipeline pointer."""
    try:
        pointer = manager.change_pipeline_pointer_tag(project_id, pipeline_pointer_id, request.tag)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return PipelinePointerResponse.of(ProjectDomainStatus.PIPELINE_POINTER_MODIFIED, pointer)


@router.patch("/{pipeline_pointer_id}/description", response_model=PipelinePointerResponse)
def change_pipeline_pointer_description(
    project_id: int,
    pipeline_pointer_id: int,
    request: DescriptionChangeRequest,
    manager: Annotated[ProjectManager, Depends(get_project_manager)],
) -> PipelinePointerResponse:
    """Change the description of a pipeline pointer."""
    try:
        pointer = manager.change_pipeline_pointer_description(project_id, pipeline_pointer_id, request.description)
    except RegistryError as exc:
        raise registry_http_error(exc) from exc
    return PipelinePointerResponse.of(ProjectDomainStatus.PIPELINE_POINTER_MODIFIED, pointer)
