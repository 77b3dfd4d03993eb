"""Conveyor library layer.

This is the business logic layer that sits behind conveyord (transport):
the project/pipeline registry of the CI/CD server.

Public Interface:
    Modules:
    - models: Registry entities (project groups, projects, pipeline pointers)
    - projects: Registry store and operations
    - storage: Storage locations
    - config: Configuration loading
"""

from .projects import ProjectManager
from .projects import RegistryError
from .projects import RegistryErrorCode

__all__ = [
    "ProjectManager",
    "RegistryError",
    "RegistryErrorCode",
]
