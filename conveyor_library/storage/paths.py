"""Path resolution for conveyord storage locations.

This module provides path resolution based on CONVEYORD_HOME environment variable,
following XDG-like directory structure within that root.

Contract:
- Inputs: Environment variables (CONVEYORD_HOME)
- Outputs: Resolved Path objects
- Side Effects: Creates directories if they don't exist
"""

import os
from pathlib import Path

PROJECTS_FILE_NAME = "projects-structure.json"


def get_home_dir() -> Path:
    """Get CONVEYORD_HOME from environment.

    Returns:
        Path to root directory (default: .conveyord)
    """
    root = os.environ.get("CONVEYORD_HOME", ".conveyord")
    return Path(root).resolve()


def get_config_dir() -> Path:
    """Get configuration directory.

    Returns:
        Path to config directory ($CONVEYORD_HOME/config)

    Environment Variables:
        CONVEYORD_CONFIG_DIR: Override config directory location
    """
    config_dir: Path = get_home_dir() / "config"

    env_override: str | None = os.environ.get("CONVEYORD_CONFIG_DIR")
    if env_override is not None:
        config_dir = Path(env_override).resolve()

    config_dir.mkdir(parents=True, exist_ok=True)
    return config_dir


def get_state_dir() -> Path:
    """Get state directory.

    Returns:
        Path to state directory ($CONVEYORD_HOME/state)

    Environment Variables:
        CONVEYORD_STATE_DIR: Override state directory location
        (falls back to $CONVEYORD_HOME/state if not set)
    """
    state_dir: Path = get_home_dir() / "state"

    env_override: str | None = os.environ.get("CONVEYORD_STATE_DIR")
    if env_override is not None:
        state_dir = Path(env_override).resolve()

    state_dir.mkdir(parents=True, exist_ok=True)
    return state_dir


def get_projects_file_path() -> Path:
    """Get the registry document location.

    Returns:
        Path to $CONVEYORD_HOME/state/projects-structure.json (may not exist yet)
    """
    return get_state_dir() / PROJECTS_FILE_NAME
