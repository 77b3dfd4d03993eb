"""Storage module for conveyor_library.

Public Interface:
    - get_home_dir: Get CONVEYORD_HOME
    - get_config_dir: Get config directory
    - get_state_dir: Get state directory
    - get_projects_file_path: Get the registry document path
"""

from .paths import get_config_dir
from .paths import get_home_dir
from .paths import get_projects_file_path
from .paths import get_state_dir

__all__ = [
    "get_home_dir",
    "get_config_dir",
    "get_state_dir",
    "get_projects_file_path",
]
