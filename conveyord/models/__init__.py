"""API models for conveyord."""

from .requests import AddPipelinePointerRequest
from .requests import AddProjectGroupRequest
from .requests import AddProjectRequest
from .requests import DescriptionChangeRequest
from .requests import RenameRequest
from .requests import TagChangeRequest
from .responses import PipelinePointerResponse
from .responses import ProjectDomainStatus
from .responses import ProjectGroupResponse
from .responses import ProjectResponse
from .responses import StatusResponse

__all__ = [
    "AddPipelinePointerRequest",
    "AddProjectGroupRequest",
    "AddProjectRequest",
    "DescriptionChangeRequest",
    "PipelinePointerResponse",
    "ProjectDomainStatus",
    "ProjectGroupResponse",
    "ProjectResponse",
    "RenameRequest",
    "StatusResponse",
    "TagChangeRequest",
]
