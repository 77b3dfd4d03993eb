"""Project registry module.

Tracks project groups, the projects they own and the pipeline pointers
registered under each project, persisted as one JSON document.

Public Interface:
    - ProjectManager: Registry operations (groups, projects, pipeline pointers)
    - ProjectsStore: Exclusive access and persistence of the registry document
    - RegistryError / RegistryErrorCode: Rejected operations
    - StorageCorruptionError: Unusable registry document
"""

from .errors import RegistryError
from .errors import RegistryErrorCode
from .errors import StorageCorruptionError
from .manager import ProjectManager
from .store import ProjectsStore

__all__ = [
    "ProjectManager",
    "ProjectsStore",
    "RegistryError",
    "RegistryErrorCode",
    "StorageCorruptionError",
]
