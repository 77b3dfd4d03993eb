"""Response models for conveyord API."""

from enum import Enum

from pydantic import Field

from conveyor_library.models.base import CamelCaseModel
from conveyor_library.models.projects import PipelinePointer
from conveyor_library.models.projects import Project
from conveyor_library.models.projects import ProjectGroup


class ProjectDomainStatus(str, Enum):
    """Outcome reported with every registry mutation."""

    PROJECT_GROUP_CREATED = "PROJECT_GROUP_CREATED"
    PROJECT_GROUP_REMOVED = "PROJECT_GROUP_REMOVED"
    PROJECT_GROUP_MODIFIED = "PROJECT_GROUP_MODIFIED"
    PROJECT_CREATED = "PROJECT_CREATED"
    PROJECT_REMOVED = "PROJECT_REMOVED"
    PROJECT_REMOVAL_DENIED = "PROJECT_REMOVAL_DENIED"
    PROJECT_MODIFIED = "PROJECT_MODIFIED"
    PIPELINE_POINTER_CREATED = "PIPELINE_POINTER_CREATED"
    PIPELINE_POINTER_REMOVED = "PIPELINE_POINTER_REMOVED"
    PIPELINE_POINTER_MODIFIED = "PIPELINE_POINTER_MODIFIED"

    def message(self) -> str:
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES = {
    ProjectDomainStatus.PROJECT_GROUP_CREATED: "Project group created with success",
    ProjectDomainStatus.PROJECT_GROUP_REMOVED: "Project group removed with success",
    ProjectDomainStatus.PROJECT_GROUP_MODIFIED: "Project group modified with success",
    ProjectDomainStatus.PROJECT_CREATED: "Project created with success",
    ProjectDomainStatus.PROJECT_REMOVED: "Project removed with success",
    ProjectDomainStatus.PROJECT_REMOVAL_DENIED: "Default project cannot be removed",
    ProjectDomainStatus.PROJECT_MODIFIED: "Project modified with success",
    ProjectDomainStatus.PIPELINE_POINTER_CREATED: "Pipeline pointer created with success",
    ProjectDomainStatus.PIPELINE_POINTER_REMOVED: "Pipeline pointer removed with success",
    ProjectDomainStatus.PIPELINE_POINTER_MODIFIED: "Pipeline pointer modified with success",
}


class ProjectGroupResponse(CamelCaseModel):
    """Project group affected by a request."""

    status: ProjectDomainStatus
    message: str
    project_group: ProjectGroup

    @classmethod
    def of(cls, status: ProjectDomainStatus, project_group: ProjectGroup) -> "ProjectGroupResponse":
        return cls(status=status, message=status.message(), project_group=project_group)


class ProjectResponse(CamelCaseModel):
    """Project affected by a request; null when a removal was denied."""

    status: ProjectDomainStatus
    message: str
    project: Project | None = None

    @classmethod
    def of(cls, status: ProjectDomainStatus, project: Project | None) -> "ProjectResponse":
        return cls(status=status, message=status.message(), project=project)


class PipelinePointerResponse(CamelCaseModel):
    """Pipeline pointer affected by a request."""

    status: ProjectDomainStatus
    message: str
    pipeline_pointer: PipelinePointer

    @classmethod
    def of(cls, status: ProjectDomainStatus, pipeline_pointer: PipelinePointer) -> "PipelinePointerResponse":
        return cls(status=status, message=status.message(), pipeline_pointer=pipeline_pointer)


class StatusResponse(CamelCaseModel):
    """Response for daemon status.

    Attributes:
        status: Status string (e.g., 'running')
        version: Daemon version
        uptime_seconds: Uptime in seconds
        projects_file: Registry document path
    """

    status: str = Field(..., description="Daemon status")
    version: str = Field(..., description="Daemon version")
    uptime_seconds: float = Field(..., description="Uptime in seconds")
    projects_file: str = Field(..., description="Registry document path")
