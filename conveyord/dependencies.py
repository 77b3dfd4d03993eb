"""Shared dependency factories for FastAPI endpoints."""

from fastapi import HTTPException
from fastapi import Request

from conveyor_library.projects import ProjectManager
from conveyor_library.projects import RegistryError
from conveyor_library.projects import RegistryErrorCode

_STATUS_CODES = {
    RegistryErrorCode.NOT_FOUND: 404,
    RegistryErrorCode.NAME_CONFLICT: 409,
    RegistryErrorCode.DUPLICATE_ID: 409,
    RegistryErrorCode.SECURED_ENTITY: 409,
}


def get_project_manager(request: Request) -> ProjectManager:
    """Get the project manager created at startup.

    Args:
        request: FastAPI request object

    Returns:
        ProjectManager stored in app state
    """
    return request.app.state.project_manager


def registry_http_error(exc: RegistryError) -> HTTPException:
    """Translate a rejected registry operation into an HTTP error."""
    return HTTPException(status_code=_STATUS_CODES[exc.code], detail=f"{exc.code.value}: {exc.message}")
