"""Tests for registry models."""

import pytest

from conveyor_library.models.projects import DEFAULT_NAME
from conveyor_library.models.projects import ProjectsFile


@pytest.mark.unit
class TestProjectsFile:
    """Test the registry aggregate and its id counters."""

    def test_initial_state(self) -> None:
        """Test the seeded registry holds the secured group and project."""
        projects_file = ProjectsFile.initial_state()

        assert projects_file.has_secured_entities()
        assert projects_file.project_groups[0].name == DEFAULT_NAME
        assert projects_file.project_groups[0].projects[0].name == DEFAULT_NAME
        assert projects_file.next_project_group_id == 1
        assert projects_file.next_project_id == 1
        assert projects_file.project_groups[0].projects[0].next_pipeline_pointer_id == 0

    def test_empty(self) -> None:
        """Test the empty registry starts every counter at 0."""
        projects_file = ProjectsFile.empty()

        assert projects_file.project_groups == []
        assert not projects_file.has_secured_entities()
        assert projects_file.next_project_group_id == 0
        assert projects_file.next_project_id == 0

    def test_counters_derived_from_projects_in_several_groups(self) -> None:
        """Test a document without counters takes the highest project id across groups."""
        projects_file = ProjectsFile.model_validate(
            {
                "projectGroups": [
                    {"id": 0, "name": "other", "projects": [{"id": 0, "name": "other"}, {"id": 2, "name": "api"}]},
                    {"id": 5, "name": "team-a", "projects": [{"id": 7, "name": "svc"}]},
                ]
            }
        )

        assert projects_file.next_project_group_id == 6
        assert projects_file.next_project_id == 8

    def test_persisted_counters_win(self) -> None:
        """Test counters present in the document are kept as is."""
        projects_file = ProjectsFile.model_validate(
            {
                "projectGroups": [{"id": 0, "name": "other", "projects": [{"id": 0, "name": "other"}]}],
                "nextProjectGroupId": 4,
                "nextProjectId": 9,
            }
        )

        assert projects_file.next_project_group_id == 4
        assert projects_file.next_project_id == 9

    def test_iter_projects_yields_owner_and_project(self) -> None:
        """Test every project is paired with the group that holds it."""
        projects_file = ProjectsFile.model_validate(
            {
                "projectGroups": [
                    {"id": 0, "name": "other", "projects": [{"id": 0, "name": "other"}]},
                    {"id": 1, "name": "team-a", "projects": [{"id": 1, "name": "svc"}]},
                ]
            }
        )

        pairs = [(group.id, project.id) for group, project in projects_file.iter_projects()]

        assert pairs == [(0, 0), (1, 1)]
