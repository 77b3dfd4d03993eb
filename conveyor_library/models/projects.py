"""Project registry models.

The registry is a three level tree persisted as a single document:

    ProjectsFile
        ProjectGroup (id 0 "other" is secured)
            Project (id 0 "other" inside group 0 is secured)
                PipelinePointer

Contract:
- Inputs: Raw data for model construction (including persisted JSON)
- Outputs: Validated model instances
- Side Effects: None (pure data structures)
"""

from collections.abc import Iterator
from datetime import UTC
from datetime import datetime

from pydantic import Field
from pydantic import model_validator

from conveyor_library.models.base import CamelCaseModel

DEFAULT_PROJECT_GROUP_ID = 0
DEFAULT_PROJECT_ID = 0
DEFAULT_NAME = "other"
DEFAULT_PROJECT_GROUP_DESCRIPTION = "Unassigned projects"


def _now() -> datetime:
    return datetime.now(UTC)


class PipelineMetadata(CamelCaseModel):
    """Metadata of a parsed pipeline definition.

    Produced by the pipeline definition parser and consumed when a pipeline
    pointer is registered. File paths are opaque and copied verbatim.
    """

    pipeline_id: str = Field(description="Externally assigned pipeline identifier")
    project_id: int = Field(description="Project the pipeline is assigned to")
    name: str = Field(description="Pipeline name")
    tag: str | None = Field(default=None, description="Pipeline tag")
    description: str | None = Field(default=None, description="Pipeline description")
    created_date: datetime = Field(default_factory=_now, description="Pipeline creation timestamp")
    easefile_path: str | None = Field(default=None, description="Location of the pipeline definition source")
    pipeline_file_path: str | None = Field(default=None, description="Location of the serialized pipeline")


class PipelinePointer(CamelCaseModel):
    """Registry record linking a project to an already parsed pipeline."""

    project_id: int = Field(description="Owning project")
    pipeline_pointer_id: int = Field(description="Pointer id, unique within the owning project")
    pipeline_id: str = Field(description="Pipeline identifier, unique registry-wide")
    name: str = Field(description="Pointer name, unique within the owning project")
    easefile_path: str | None = None
    pipeline_file_path: str | None = None
    tag: str | None = None
    description: str | None = None
    created_date: datetime = Field(default_factory=_now)


class Project(CamelCaseModel):
    """Project holding an ordered list of pipeline pointers."""

    id: int = Field(description="Project id, unique registry-wide")
    name: str
    tag: str | None = None
    description: str | None = None
    created_date: datetime = Field(default_factory=_now)
    last_modified_date: datetime | None = None
    pipelines: list[PipelinePointer] = Field(default_factory=list)
    next_pipeline_pointer_id: int | None = Field(
        default=None, description="Next pointer id to hand out; pointer ids are never reused"
    )

    @model_validator(mode="after")
    def derive_pointer_counter(self) -> "Project":
        """Fill the pointer counter for documents written without one."""
        if self.next_pipeline_pointer_id is None:
            self.next_pipeline_pointer_id = max((p.pipeline_pointer_id for p in self.pipelines), default=-1) + 1
        return self


class ProjectGroup(CamelCaseModel):
    """Named group of projects."""

    id: int = Field(description="Project group id")
    name: str = Field(description="Project group name, unique among groups")
    tag: str | None = None
    description: str | None = None
    created_date: datetime = Field(default_factory=_now)
    last_modified_date: datetime | None = None
    projects: list[Project] = Field(default_factory=list)


class ProjectsFile(CamelCaseModel):
    """Root aggregate of the registry, persisted as one document."""

    project_groups: list[ProjectGroup] = Field(default_factory=list)
    next_project_group_id: int | None = Field(default=None, description="Next project group id to hand out")
    next_project_id: int | None = Field(default=None, description="Next project id to hand out")

    @model_validator(mode="after")
    def derive_counters(self) -> "ProjectsFile":
        """Fill id counters for documents written without them."""
        if self.next_project_group_id is None:
            self.next_project_group_id = max((g.id for g in self.project_groups), default=-1) + 1
        if self.next_project_id is None:
            self.next_project_id = max((project.id for _, project in self.iter_projects()), default=-1) + 1
        return self

    @classmethod
    def empty(cls) -> "ProjectsFile":
        """Create a registry without any groups."""
        return cls(project_groups=[])

    @classmethod
    def initial_state(cls) -> "ProjectsFile":
        """Create the seeded registry: secured group holding the secured project."""
        now = _now()
        secured_project = Project(
            id=DEFAULT_PROJECT_ID,
            name=DEFAULT_NAME,
            created_date=now,
            pipelines=[],
        )
        secured_group = ProjectGroup(
            id=DEFAULT_PROJECT_GROUP_ID,
            name=DEFAULT_NAME,
            description=DEFAULT_PROJECT_GROUP_DESCRIPTION,
            created_date=now,
            projects=[secured_project],
        )
        return cls(project_groups=[secured_group])

    def iter_projects(self) -> Iterator[tuple[ProjectGroup, Project]]:
        """Yield every (group, project) pair in listing order."""
        for group in self.project_groups:
            for project in group.projects:
                yield group, project

    def has_secured_entities(self) -> bool:
        """Check that the secured group leads the registry and holds the secured project."""
        if not self.project_groups:
            return False
        group = self.project_groups[0]
        if group.id != DEFAULT_PROJECT_GROUP_ID or not group.projects:
            return False
        return group.projects[0].id == DEFAULT_PROJECT_ID
