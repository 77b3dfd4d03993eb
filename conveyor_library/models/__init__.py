"""Models for conveyor library."""

from .projects import DEFAULT_NAME
from .projects import DEFAULT_PROJECT_GROUP_ID
from .projects import DEFAULT_PROJECT_ID
from .projects import PipelineMetadata
from .projects import PipelinePointer
from .projects import Project
from .projects import ProjectGroup
from .projects import ProjectsFile

__all__ = [
    "DEFAULT_NAME",
    "DEFAULT_PROJECT_GROUP_ID",
    "DEFAULT_PROJECT_ID",
    "PipelineMetadata",
    "PipelinePointer",
    "Project",
    "ProjectGroup",
    "ProjectsFile",
]
