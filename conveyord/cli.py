"""Conveyor CLI for running the daemon and inspecting the project registry."""

import sys

import click

from conveyor_library.config.loader import create_default_config
from conveyor_library.config.loader import get_config_path
from conveyor_library.config.loader import load_config
from conveyor_library.models.projects import ProjectsFile
from conveyor_library.projects import ProjectManager
from conveyor_library.projects import StorageCorruptionError

from .__main__ import main as run_daemon


def render_tree(projects_file: ProjectsFile) -> list[str]:
    """Render the registry as indented lines.

    Args:
        projects_file: Registry to render

    Returns:
        One line per project group, project and pipeline pointer
    """
    lines = []
    for group in projects_file.project_groups:
        lines.append(f"[{group.id}] {group.name}" + (f" ({group.tag})" if group.tag else ""))
        for project in group.projects:
            lines.append(f"  [{project.id}] {project.name}" + (f" ({project.tag})" if project.tag else ""))
            for pointer in project.pipelines:
                lines.append(f"    [{pointer.pipeline_pointer_id}] {pointer.name} -> {pointer.pipeline_id}")
    return lines


@click.group()
def cli():
    """Conveyor - CI/CD project and pipeline registry."""
    pass


@cli.command()
def serve():
    """Run the conveyord daemon in the foreground."""
    run_daemon()


@cli.command()
def init():
    """Create the default config and seed the registry document."""
    create_default_config()
    click.echo(f"Config:   {get_config_path()}")

    config = load_config()
    try:
        manager = ProjectManager.from_path(config.resolve_projects_file())
    except StorageCorruptionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    click.echo(f"Registry: {manager.store.projects_file_path}")


@cli.command()
@click.option("--json", "as_json", is_flag=True, help="Print the registry document instead of a tree")
def show(as_json: bool):
    """Print the project registry."""
    config = load_config()
    try:
        manager = ProjectManager.from_path(config.resolve_projects_file())
    except StorageCorruptionError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    projects_file = manager.get_projects_file()
    if as_json:
        click.echo(projects_file.model_dump_json(indent=2, by_alias=True))
        return
    for line in render_tree(projects_file):
        click.echo(line)


def main():
    """Entry point for conveyord CLI."""
    try:
        cli()
    except KeyboardInterrupt:
        click.echo("\nInterrupted")
        sys.exit(0)


if __name__ == "__main__":
    main()
