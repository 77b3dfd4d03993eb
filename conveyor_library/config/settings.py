"""Settings models for conveyord daemon.

Contract:
- Inputs: Environment variables, YAML files
- Outputs: Validated settings objects
- Side Effects: None (read-only)
"""

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict

from ..storage.paths import get_projects_file_path

ENV_PREFIX = "CONVEYORD_"


class DaemonSettings(BaseSettings):
    """Configuration for conveyord daemon.

    Attributes:
        host: Listen address (default: 127.0.0.1)
        port: Listen port (default: 8430)
        log_level: Logging level (default: info)
        workers: Number of workers (default: 1)
        projects_file: Registry document path (default: state dir)

    Example:
        >>> settings = DaemonSettings()
        >>> assert settings.host == "127.0.0.1"
        >>> assert settings.port == 8430
    """

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        case_sensitive=False,
        extra="ignore",
    )

    host: str = "127.0.0.1"
    port: int = 8430
    log_level: str = "info"
    workers: int = 1

    projects_file: str | None = None

    @field_validator("projects_file")
    @classmethod
    def expand_and_resolve_path(cls, v: str | None) -> str | None:
        """Expand ~ and resolve to absolute path."""
        if v is None:
            return None
        return str(Path(v).expanduser().resolve())

    def resolve_projects_file(self) -> Path:
        """Get the registry document path, falling back to the state directory."""
        if self.projects_file is not None:
            return Path(self.projects_file)
        return get_projects_file_path()
