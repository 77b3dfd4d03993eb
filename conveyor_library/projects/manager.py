"""Project registry operations.

ProjectManager is the single entry point to the registry: project groups,
projects and pipeline pointers. Every operation validates first, then mutates
the aggregate inside the store's exclusive section, which persists the result
before the lock is released.
"""

import logging
from datetime import UTC
from datetime import datetime
from pathlib import Path
from typing import TypeVar

from conveyor_library.models.projects import DEFAULT_PROJECT_GROUP_ID
from conveyor_library.models.projects import DEFAULT_PROJECT_ID
from conveyor_library.models.projects import PipelineMetadata
from conveyor_library.models.projects import PipelinePointer
from conveyor_library.models.projects import Project
from conveyor_library.models.projects import ProjectGroup
from conveyor_library.models.projects import ProjectsFile

from .errors import RegistryError
from .errors import RegistryErrorCode
from .store import ProjectsStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _remove_by_identity(items: list[T], item: T) -> None:
    for position, candidate in enumerate(items):
        if candidate is item:
            del items[position]
            return


class ProjectManager:
    """Manages project groups, projects and pipeline pointers.

    Construct one instance per registry document and share it between callers;
    the underlying store serializes access. Returned entities are copies, so
    callers can keep them without holding the lock.

    Secured entities:
        Project group 0 ("other") and project 0 ("other") inside it always exist.
        Soft removals move children into them.
    """

    def __init__(self, store: ProjectsStore) -> None:
        """Initialize with a store and load the registry.

        Args:
            store: Registry store owning the document

        Raises:
            StorageCorruptionError: If the existing document is unusable
        """
        self.store = store
        self.store.load()

    @classmethod
    def from_path(cls, projects_file_path: Path) -> "ProjectManager":
        """Create a manager backed by the document at projects_file_path."""
        return cls(ProjectsStore(projects_file_path))

    def reset(self) -> None:
        """Discard the in-memory registry and reload it from disk."""
        self.store.reset()
        self.store.load()
        logger.info(f"Registry reloaded from {self.store.projects_file_path}")

    # --- Reads ---

    def get_projects_file(self) -> ProjectsFile:
        """Get a consistent copy of the whole registry."""
        return self.store.snapshot()

    def list_project_groups(self) -> list[ProjectGroup]:
        """List project groups in registry order."""
        return self.store.snapshot().project_groups

    def get_project_group(self, project_group_id: int) -> ProjectGroup:
        """Get project group by id.

        Raises:
            RegistryError: NOT_FOUND if the group does not exist
        """
        with self.store.read_access():
            return self._require_group(project_group_id).model_copy(deep=True)

    def get_project(self, project_id: int) -> Project:
        """Get project by id.

        Raises:
            RegistryError: NOT_FOUND if the project does not exist
        """
        with self.store.read_access():
            return self._require_project(project_id).model_copy(deep=True)

    def get_pipeline_pointer(self, project_id: int, pipeline_pointer_id: int) -> PipelinePointer:
        """Get pipeline pointer by project id and pointer id.

        Raises:
            RegistryError: NOT_FOUND if the project or pointer does not exist
        """
        with self.store.read_access():
            return self._require_pointer(project_id, pipeline_pointer_id).model_copy(deep=True)

    # --- Project Groups ---

    def create_project_group(self, name: str, tag: str | None = None, description: str | None = None) -> ProjectGroup:
        """Create an empty project group.

        Args:
            name: Group name, unique among groups (case-sensitive)
            tag: Optional tag
            description: Optional description

        Returns:
            Created ProjectGroup

        Raises:
            RegistryError: NAME_CONFLICT if a group with that name exists
        """
        with self.store.exclusive_access() as projects_file:
            if any(group.name == name for group in projects_file.project_groups):
                raise RegistryError(RegistryErrorCode.NAME_CONFLICT, f"Project group '{name}' already exists")

            group = ProjectGroup(
                id=projects_file.next_project_group_id,
                name=name,
                tag=tag,
                description=description,
                created_date=datetime.now(UTC),
                projects=[],
            )
            projects_file.project_groups.append(group)
            projects_file.next_project_group_id += 1
            created = group.model_copy(deep=True)

        logger.info(f"Created project group {created.id} ('{name}')")
        return created

    def delete_project_group(self, project_group_id: int, hard: bool) -> ProjectGroup:
        """Remove a project group.

        Hard removal discards the group with all its projects and pipeline
        pointers. Soft removal first appends every project, pipelines included,
        to the secured group. Moved projects keep their names, even when the
        secured group already holds a project with the same name.

        Args:
            project_group_id: Group to remove
            hard: Choose between hard and soft removal

        Returns:
            The group as it was before removal

        Raises:
            RegistryError: NOT_FOUND if the group does not exist
            RegistryError: SECURED_ENTITY for the secured group
        """
        with self.store.exclusive_access() as projects_file:
            group = self._require_group(project_group_id)
            if project_group_id == DEFAULT_PROJECT_GROUP_ID:
                raise RegistryError(
                    RegistryErrorCode.SECURED_ENTITY,
                    f"Project group {project_group_id} is secured and cannot be removed",
                )

            removed = group.model_copy(deep=True)
            if not hard:
                self._require_group(DEFAULT_PROJECT_GROUP_ID).projects.extend(group.projects)

            _remove_by_identity(projects_file.project_groups, group)

        mode = "hard" if hard else "soft"
        logger.info(f"Removed project group {project_group_id} ({mode}, {len(removed.projects)} projects)")
        return removed

    def rename_project_group(self, project_group_id: int, name: str) -> ProjectGroup:
        """Rename a project group.

        Raises:
            RegistryError: NOT_FOUND if the group does not exist
            RegistryError: NAME_CONFLICT if another group has that name
        """
        return self._update_project_group(project_group_id, "name", name)

    def change_project_group_tag(self, project_group_id: int, tag: str | None) -> ProjectGroup:
        """Change the tag of a project group."""
        return self._update_project_group(project_group_id, "tag", tag)

    def change_project_group_description(self, project_group_id: int, description: str | None) -> ProjectGroup:
        """Change the description of a project group."""
        return self._update_project_group(project_group_id, "description", description)

    # --- Projects ---

    def create_project(
        self,
        project_group_id: int,
        name: str,
        tag: str | None = None,
        description: str | None = None,
    ) -> Project:
        """Create an empty project inside a project group.

        Project names are unique within their group only.

        Args:
            project_group_id: Group the project is appended to
            name: Project name
            tag: Optional tag
            description: Optional description

        Returns:
            Created Project

        Raises:
            RegistryError: NOT_FOUND if the group does not exist
            RegistryError: NAME_CONFLICT if the group already has a project with that name
        """
        with self.store.exclusive_access() as projects_file:
            group = self._require_group(project_group_id)
            if any(project.name == name for project in group.projects):
                raise RegistryError(
                    RegistryErrorCode.NAME_CONFLICT,
                    f"Project '{name}' already exists in project group {project_group_id}",
                )

            project = Project(
                id=projects_file.next_project_id,
                name=name,
                tag=tag,
                description=description,
                created_date=datetime.now(UTC),
                pipelines=[],
            )
            group.projects.append(project)
            projects_file.next_project_id += 1
            created = project.model_copy(deep=True)

        logger.info(f"Created project {created.id} ('{name}') in project group {project_group_id}")
        return created

    def delete_project(self, project_group_id: int, project_id: int, hard: bool) -> Project | None:
        """Remove a project from its group.

        Hard removal discards the project and its pipeline pointers. Soft
        removal first moves the pointers to the secured project, rewriting
        their project id and handing out fresh pointer ids there.

        Args:
            project_group_id: Group holding the project
            project_id: Project to remove
            hard: Choose between hard and soft removal

        Returns:
            The project as it was before removal, or None when the secured
            project was targeted (nothing is changed in that case)

        Raises:
            RegistryError: NOT_FOUND if the group or project does not exist
        """
        with self.store.read_access():
            group, project = self._require_project_in_group(project_group_id, project_id)

            # Unlike delete_project_group, which raises SECURED_ENTITY, the
            # secured project is refused silently. Both policies are kept as
            # they are until they are reconciled on purpose.
            if project_id == DEFAULT_PROJECT_ID:
                logger.warning(f"Removal of secured project {project_id} denied")
                return None

            with self.store.exclusive_access():
                removed = project.model_copy(deep=True)
                if not hard:
                    self._move_pointers(project, self._require_project(DEFAULT_PROJECT_ID))
                _remove_by_identity(group.projects, project)

        mode = "hard" if hard else "soft"
        logger.info(f"Removed project {project_id} from project group {project_group_id} ({mode})")
        return removed

    def rename_project(self, project_id: int, name: str) -> Project:
        """Rename a project.

        Raises:
            RegistryError: NOT_FOUND if the project does not exist
            RegistryError: NAME_CONFLICT if another project in the same group has that name
        """
        return self._update_project(project_id, "name", name)

    def change_project_tag(self, project_id: int, tag: str | None) -> Project:
        """Change the tag of a project."""
        return self._update_project(project_id, "tag", tag)

    def change_project_description(self, project_id: int, description: str | None) -> Project:
        """Change the description of a project."""
        return self._update_project(project_id, "description", description)

    # --- Pipeline Pointers ---

    def create_pipeline_pointer(self, metadata: PipelineMetadata) -> PipelinePointer:
        """Register a parsed pipeline under the project named in its metadata.

        Args:
            metadata: Pipeline metadata from the pipeline definition parser

        Returns:
            Created PipelinePointer

        Raises:
            RegistryError: NOT_FOUND if the project does not exist
            RegistryError: DUPLICATE_ID if the pipeline id is already registered anywhere
            RegistryError: NAME_CONFLICT if the project already has a pointer with that name
        """
        with self.store.exclusive_access():
            project = self._require_project(metadata.project_id)
            if metadata.pipeline_id in self.store.index.pipeline_ids:
                raise RegistryError(
                    RegistryErrorCode.DUPLICATE_ID,
                    f"Pipeline {metadata.pipeline_id} is already registered",
                )
            if any(pointer.name == metadata.name for pointer in project.pipelines):
                raise RegistryError(
                    RegistryErrorCode.NAME_CONFLICT,
                    f"Pipeline pointer '{metadata.name}' already exists in project {project.id}",
                )

            pointer = PipelinePointer(
                project_id=project.id,
                pipeline_pointer_id=project.next_pipeline_pointer_id,
                pipeline_id=metadata.pipeline_id,
                name=metadata.name,
                easefile_path=metadata.easefile_path,
                pipeline_file_path=metadata.pipeline_file_path,
                tag=metadata.tag,
                description=metadata.description,
                created_date=metadata.created_date,
            )
            project.pipelines.append(pointer)
            project.next_pipeline_pointer_id += 1
            created = pointer.model_copy(deep=True)

        logger.info(
            f"Created pipeline pointer {created.pipeline_pointer_id} for pipeline {created.pipeline_id} "
            f"in project {created.project_id}"
        )
        return created

    def delete_pipeline_pointer(self, project_id: int, pipeline_pointer_id: int) -> PipelinePointer:
        """Remove a pipeline pointer from its project.

        Returns:
            The removed PipelinePointer

        Raises:
            RegistryError: NOT_FOUND if the project or pointer does not exist
        """
        with self.store.exclusive_access():
            project = self._require_project(project_id)
            pointer = self._require_pointer(project_id, pipeline_pointer_id)
            removed = pointer.model_copy(deep=True)
            _remove_by_identity(project.pipelines, pointer)

        logger.info(f"Removed pipeline pointer {pipeline_pointer_id} from project {project_id}")
        return removed

    def rename_pipeline_pointer(self, project_id: int, pipeline_pointer_id: int, name: str) -> PipelinePointer:
        """Rename a pipeline pointer.

        Raises:
            RegistryError: NOT_FOUND if the project or pointer does not exist
            RegistryError: NAME_CONFLICT if another pointer in the project has that name
        """
        return self._update_pipeline_pointer(project_id, pipeline_pointer_id, "name", name)

    def change_pipeline_pointer_tag(self, project_id: int, pipeline_pointer_id: int, tag: str | None) -> PipelinePointer:
        """Change the tag of a pipeline pointer."""
        return self._update_pipeline_pointer(project_id, pipeline_pointer_id, "tag", tag)

    def change_pipeline_pointer_description(
        self, project_id: int, pipeline_pointer_id: int, description: str | None
    ) -> PipelinePointer:
        """Change the description of a pipeline pointer."""
        return self._update_pipeline_pointer(project_id, pipeline_pointer_id, "description", description)

    # --- Helpers (callers hold the store lock) ---

    def _require_group(self, project_group_id: int) -> ProjectGroup:
        group = self.store.index.groups.get(project_group_id)
        if group is None:
            raise RegistryError(RegistryErrorCode.NOT_FOUND, f"Project group not found: {project_group_id}")
        return group

    def _require_project(self, project_id: int) -> Project:
        project = self.store.index.projects.get(project_id)
        if project is None:
            raise RegistryError(RegistryErrorCode.NOT_FOUND, f"Project not found: {project_id}")
        return project

    def _require_project_in_group(self, project_group_id: int, project_id: int) -> tuple[ProjectGroup, Project]:
        group = self._require_group(project_group_id)
        owner = self.store.index.project_owners.get(project_id)
        if owner is not group:
            raise RegistryError(
                RegistryErrorCode.NOT_FOUND,
                f"Project {project_id} not found in project group {project_group_id}",
            )
        return group, self.store.index.projects[project_id]

    def _require_pointer(self, project_id: int, pipeline_pointer_id: int) -> PipelinePointer:
        self._require_project(project_id)
        pointer = self.store.index.pointers.get((project_id, pipeline_pointer_id))
        if pointer is None:
            raise RegistryError(
                RegistryErrorCode.NOT_FOUND,
                f"Pipeline pointer {pipeline_pointer_id} not found in project {project_id}",
            )
        return pointer

    def _move_pointers(self, source: Project, target: Project) -> None:
        # Moved names are kept even when the target already uses them.
        for pointer in source.pipelines:
            pointer.project_id = target.id
            pointer.pipeline_pointer_id = target.next_pipeline_pointer_id
            target.next_pipeline_pointer_id += 1
            target.pipelines.append(pointer)
        source.pipelines.clear()

    def _update_project_group(self, project_group_id: int, field_name: str, value: str | None) -> ProjectGroup:
        with self.store.exclusive_access() as projects_file:
            group = self._require_group(project_group_id)
            if field_name == "name" and any(
                other is not group and other.name == value for other in projects_file.project_groups
            ):
                raise RegistryError(RegistryErrorCode.NAME_CONFLICT, f"Project group '{value}' already exists")

            setattr(group, field_name, value)
            group.last_modified_date = datetime.now(UTC)
            updated = group.model_copy(deep=True)

        logger.info(f"Changed {field_name} of project group {project_group_id}")
        return updated

    def _update_project(self, project_id: int, field_name: str, value: str | None) -> Project:
        with self.store.exclusive_access():
            project = self._require_project(project_id)
            group = self.store.index.project_owners[project_id]
            if field_name == "name" and any(
                other is not project and other.name == value for other in group.projects
            ):
                raise RegistryError(
                    RegistryErrorCode.NAME_CONFLICT,
                    f"Project '{value}' already exists in project group {group.id}",
                )

            setattr(project, field_name, value)
            project.last_modified_date = datetime.now(UTC)
            updated = project.model_copy(deep=True)

        logger.info(f"Changed {field_name} of project {project_id}")
        return updated

    def _update_pipeline_pointer(
        self, project_id: int, pipeline_pointer_id: int, field_name: str, value: str | None
    ) -> PipelinePointer:
        with self.store.exclusive_access():
            project = self._require_project(project_id)
            pointer = self._require_pointer(project_id, pipeline_pointer_id)
            if field_name == "name" and any(
                other is not pointer and other.name == value for other in project.pipelines
            ):
                raise RegistryError(
                    RegistryErrorCode.NAME_CONFLICT,
                    f"Pipeline pointer '{value}' already exists in project {project_id}",
                )

            setattr(pointer, field_name, value)
            updated = pointer.model_copy(deep=True)

        logger.info(f"Changed {field_name} of pipeline pointer {pipeline_pointer_id} in project {project_id}")
        return updated
