"""
Shared pytest fixtures for the conveyor test suite.

Provides fixtures for:
- Temporary storage directories
- Project managers with isolated registry documents
- Sample pipeline metadata
"""

import tempfile
from collections.abc import Generator
from pathlib import Path

import pytest

from conveyor_library.models.projects import PipelineMetadata
from conveyor_library.projects import ProjectManager


@pytest.fixture
def temp_storage_dir() -> Generator[Path, None, None]:
    """Create temporary storage directory for tests.

    Automatically cleaned up after test completes.
    """
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def mock_storage_env(temp_storage_dir: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point CONVEYORD_HOME at a temp directory.

    Clears the directory overrides and every CONVEYORD_ setting so tests never
    touch real data or pick up the developer's environment.

    Returns:
        Path to temporary storage directory
    """
    for key in (
        "CONVEYORD_CONFIG_DIR",
        "CONVEYORD_STATE_DIR",
        "CONVEYORD_HOST",
        "CONVEYORD_PORT",
        "CONVEYORD_LOG_LEVEL",
        "CONVEYORD_WORKERS",
        "CONVEYORD_PROJECTS_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CONVEYORD_HOME", str(temp_storage_dir))
    return temp_storage_dir


@pytest.fixture
def projects_file_path(mock_storage_env: Path) -> Path:
    """Registry document location inside the isolated state directory."""
    return mock_storage_env / "state" / "projects-structure.json"


@pytest.fixture
def manager(projects_file_path: Path) -> ProjectManager:
    """Create ProjectManager backed by a freshly seeded registry.

    Example:
        >>> def test_group_creation(manager):
        ...     group = manager.create_project_group("backend")
        ...     assert group.id == 1
    """
    return ProjectManager.from_path(projects_file_path)


@pytest.fixture
def make_metadata():
    """Factory for pipeline metadata as produced by the definition parser.

    Example:
        >>> def test_pointer(manager, make_metadata):
        ...     pointer = manager.create_pipeline_pointer(make_metadata("p-1", 0, "build"))
        ...     assert pointer.pipeline_pointer_id == 0
    """

    def _make(pipeline_id: str, project_id: int, name: str, **kwargs) -> PipelineMetadata:
        kwargs.setdefault("easefile_path", f"/pipelines/{name}.ease")
        kwargs.setdefault("pipeline_file_path", f"/pipelines/{name}.json")
        return PipelineMetadata(pipeline_id=pipeline_id, project_id=project_id, name=name, **kwargs)

    return _make
