"""Request models for conveyord API.

Pydantic models for validating incoming API requests. The registry trusts these
limits and only re-checks uniqueness and existence.
"""

from datetime import UTC
from datetime import datetime

from pydantic import Field

from conveyor_library.models.base import CamelCaseModel

NAME_MIN_LENGTH = 3
NAME_MAX_LENGTH = 50
TAG_MIN_LENGTH = 3
TAG_MAX_LENGTH = 15
DESCRIPTION_MAX_LENGTH = 500


class AddProjectGroupRequest(CamelCaseModel):
    """Request to create a project group.

    Attributes:
        name: Group name, unique among groups
        tag: Optional tag
        description: Optional description
    """

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH, description="Group name")
    tag: str | None = Field(default=None, min_length=TAG_MIN_LENGTH, max_length=TAG_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class AddProjectRequest(CamelCaseModel):
    """Request to create a project inside the group named in the path.

    Attributes:
        name: Project name, unique within the group
        tag: Optional tag
        description: Optional description
    """

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH, description="Project name")
    tag: str | None = Field(default=None, min_length=TAG_MIN_LENGTH, max_length=TAG_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)


class AddPipelinePointerRequest(CamelCaseModel):
    """Request to register a parsed pipeline under the project named in the path.

    Mirrors PipelineMetadata without the project id.
    """

    pipeline_id: str = Field(..., min_length=1, description="Pipeline identifier assigned by the parser")
    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)
    tag: str | None = Field(default=None, min_length=TAG_MIN_LENGTH, max_length=TAG_MAX_LENGTH)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    created_date: datetime = Field(default_factory=lambda: datetime.now(UTC))
    easefile_path: str | None = None
    pipeline_file_path: str | None = None


class RenameRequest(CamelCaseModel):
    """Request to rename a project group, project or pipeline pointer."""

    name: str = Field(..., min_length=NAME_MIN_LENGTH, max_length=NAME_MAX_LENGTH)


class TagChangeRequest(CamelCaseModel):
    """Request to change or clear a tag."""

    tag: str | None = Field(..., min_length=TAG_MIN_LENGTH, max_length=TAG_MAX_LENGTH)


class DescriptionChangeRequest(CamelCaseModel):
    """Request to change or clear a description."""

    description: str | None = Field(..., max_length=DESCRIPTION_MAX_LENGTH)
