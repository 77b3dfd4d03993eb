"""Configuration loading for conveyord.

Settings are resolved from three layers, lowest first: DaemonSettings
defaults, the daemon.yaml file in the config directory, and CONVEYORD_
environment variables.
"""

import logging
import os
from pathlib import Path
from typing import Any

import yaml

from ..storage.paths import get_config_dir
from .settings import ENV_PREFIX
from .settings import DaemonSettings

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "daemon.yaml"

DEFAULT_CONFIG = """# conveyord configuration
# Every key can also be set as CONVEYORD_<KEY>, which takes precedence.

host: "127.0.0.1"
port: 8430
log_level: "info"
workers: 1

# Registry document, defaults to $CONVEYORD_HOME/state/projects-structure.json
# projects_file: "~/conveyor/projects-structure.json"
"""


def get_config_path() -> Path:
    """Get the daemon.yaml location in the config directory."""
    return get_config_dir() / CONFIG_FILE_NAME


def create_default_config() -> None:
    """Write DEFAULT_CONFIG unless a config file is already present."""
    config_path = get_config_path()
    if config_path.exists():
        return

    config_path.write_text(DEFAULT_CONFIG, encoding="utf-8")
    logger.info(f"Wrote default config to {config_path}")


def _read_yaml(config_path: Path) -> dict[str, Any]:
    """Read a YAML mapping, or an empty one when the file is unusable."""
    try:
        values = yaml.safe_load(config_path.read_text(encoding="utf-8"))
    except (OSError, yaml.YAMLError) as e:
        logger.warning(f"Ignoring unreadable config {config_path}: {e}")
        return {}

    if values is None:
        return {}
    if not isinstance(values, dict):
        logger.warning(f"Ignoring config {config_path}: expected a mapping, got {type(values).__name__}")
        return {}
    return values


def load_config(config_path: Path | None = None) -> DaemonSettings:
    """Load daemon settings.

    Args:
        config_path: YAML file to read. When omitted, daemon.yaml in the config
            directory is used and created with defaults if missing.

    Returns:
        Validated daemon settings
    """
    if config_path is None:
        create_default_config()
        config_path = get_config_path()

    file_values = _read_yaml(config_path) if config_path.exists() else {}

    # A key set in the environment must not be shadowed by the file
    overridden = {key for key in file_values if f"{ENV_PREFIX}{key.upper()}" in os.environ}
    settings = DaemonSettings(**{key: value for key, value in file_values.items() if key not in overridden})

    logger.debug(f"Settings from {config_path}, env overrides: {sorted(overridden) or 'none'}")
    return settings
