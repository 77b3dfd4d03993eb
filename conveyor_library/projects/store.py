"""Persistence and exclusive access for the project registry."""

import logging
import threading
from collections.abc import Callable
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from dataclasses import field
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from conveyor_library.models.projects import PipelinePointer
from conveyor_library.models.projects import Project
from conveyor_library.models.projects import ProjectGroup
from conveyor_library.models.projects import ProjectsFile

from .errors import StorageCorruptionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass
class ProjectsIndex:
    """Id lookups over a ProjectsFile.

    The lists inside the ProjectsFile stay the source of truth and define
    listing order. The index is rebuilt whenever the aggregate is replaced or a
    mutation is committed.
    """

    groups: dict[int, ProjectGroup] = field(default_factory=dict)
    projects: dict[int, Project] = field(default_factory=dict)
    project_owners: dict[int, ProjectGroup] = field(default_factory=dict)
    pointers: dict[tuple[int, int], PipelinePointer] = field(default_factory=dict)
    pipeline_ids: set[str] = field(default_factory=set)

    @classmethod
    def build(cls, projects_file: ProjectsFile) -> "ProjectsIndex":
        index = cls()
        for group in projects_file.project_groups:
            index.groups[group.id] = group
            for project in group.projects:
                index.projects[project.id] = project
                index.project_owners[project.id] = group
                for pointer in project.pipelines:
                    index.pointers[(project.id, pointer.pipeline_pointer_id)] = pointer
                    index.pipeline_ids.add(pointer.pipeline_id)
        return index


class ProjectsStore:
    """Owns the single in-memory ProjectsFile and its JSON document.

    Every mutation runs inside ``exclusive_access()``: one process-wide lock
    guards the change and the write that follows it, so readers never observe a
    half-applied mutation and the document always matches memory after a
    successful operation.

    Storage structure:
        <state_dir>/
            projects-structure.json     # Whole registry, camelCase keys
    """

    def __init__(self, projects_file_path: Path) -> None:
        """Initialize with the registry document location.

        Args:
            projects_file_path: Path of the JSON document (created on first load)
        """
        self.projects_file_path = Path(projects_file_path)
        self._lock = threading.RLock()
        self._projects_file: ProjectsFile | None = None
        self._index: ProjectsIndex | None = None

    def load(self) -> ProjectsFile:
        """Load the registry, seeding and persisting the initial state if absent.

        Returns:
            The live in-memory ProjectsFile

        Raises:
            StorageCorruptionError: If the document exists but is unusable
        """
        with self._lock:
            if self._projects_file is None:
                projects_file = self._read()
                self._projects_file = projects_file
                self._index = ProjectsIndex.build(projects_file)
            return self._projects_file

    @property
    def index(self) -> ProjectsIndex:
        """Id lookups for the live aggregate; hold the lock while using them."""
        with self._lock:
            self.load()
            assert self._index is not None
            return self._index

    @contextmanager
    def read_access(self) -> Iterator[ProjectsFile]:
        """Yield the live aggregate under the registry lock without persisting it.

        Callers must not mutate what they are given; copy anything that leaves
        the block.
        """
        with self._lock:
            yield self.load()

    @contextmanager
    def exclusive_access(self) -> Iterator[ProjectsFile]:
        """Yield the live aggregate under the registry lock.

        On normal exit the aggregate is persisted before the lock is released.
        If the body raises, or the write fails, the aggregate is restored to its
        state on entry and nothing is written.
        """
        with self._lock:
            projects_file = self.load()
            backup = projects_file.model_copy(deep=True)
            try:
                yield projects_file
                self._write(projects_file)
            except Exception:
                self._projects_file = backup
                self._index = ProjectsIndex.build(backup)
                raise
            self._index = ProjectsIndex.build(projects_file)

    def with_exclusive_access(self, fn: Callable[[ProjectsFile], T]) -> T:
        """Run fn against the live aggregate and persist the result.

        Args:
            fn: Callable mutating the aggregate in place

        Returns:
            Whatever fn returns
        """
        with self.exclusive_access() as projects_file:
            return fn(projects_file)

    def snapshot(self) -> ProjectsFile:
        """Return a deep copy of the aggregate, consistent with the document."""
        with self._lock:
            return self.load().model_copy(deep=True)

    def reset(self) -> None:
        """Drop the in-memory aggregate so the next load re-reads the document."""
        with self._lock:
            self._projects_file = None
            self._index = None
            logger.debug(f"Discarded in-memory registry for {self.projects_file_path}")

    def _read(self) -> ProjectsFile:
        path = self.projects_file_path
        if not path.exists():
            logger.info(f"No registry found at {path}, creating initial state")
            projects_file = ProjectsFile.initial_state()
            self._write(projects_file)
            return projects_file

        try:
            projects_file = ProjectsFile.model_validate_json(path.read_text(encoding="utf-8"))
        except (ValidationError, UnicodeDecodeError) as e:
            logger.error(f"Failed to parse registry {path}: {e}")
            raise StorageCorruptionError(f"Registry document {path} cannot be parsed: {e}") from e

        if not projects_file.has_secured_entities():
            logger.error(f"Registry {path} lacks the secured project group or project")
            raise StorageCorruptionError(f"Registry document {path} lacks the secured project group or project")

        logger.debug(f"Loaded registry from {path} ({len(projects_file.project_groups)} project groups)")
        return projects_file

    def _write(self, projects_file: ProjectsFile) -> None:
        path = self.projects_file_path
        path.parent.mkdir(parents=True, exist_ok=True)

        tmp_path = path.with_suffix(".tmp")
        tmp_path.write_text(projects_file.model_dump_json(indent=2, by_alias=True), encoding="utf-8")
        tmp_path.replace(path)
