"""Main FastAPI application for conveyord daemon.

This module creates and configures the FastAPI application that exposes
the conveyor_library project registry via REST API.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from conveyor_library.config.loader import load_config
from conveyor_library.projects import ProjectManager
from conveyor_library.projects import StorageCorruptionError

from . import __version__
from .routers import pipeline_pointers_router
from .routers import project_groups_router
from .routers import projects_router
from .routers import status_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager.

    Builds the one ProjectManager shared by all request handlers.

    Args:
        app: FastAPI application instance
    """
    # Startup
    config = load_config()
    logging.getLogger().setLevel(config.log_level.upper())
    logger.info(f"Starting conveyord daemon on {config.host}:{config.port}")

    projects_file = config.resolve_projects_file()
    try:
        app.state.project_manager = ProjectManager.from_path(projects_file)
    except StorageCorruptionError as e:
        logger.error(f"Refusing to start, registry is unusable: {e}")
        raise
    logger.info(f"Project registry: {projects_file}")

    yield

    # Shutdown
    logger.info("Shutting down conveyord daemon")


# Create FastAPI application
app = FastAPI(
    title="conveyord",
    description="REST API daemon for the CI/CD project and pipeline registry",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(project_groups_router)
app.include_router(projects_router)
app.include_router(pipeline_pointers_router)
app.include_router(status_router)


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint.

    Returns:
        Welcome message with API information
    """
    return {
        "name": "conveyord",
        "version": __version__,
        "description": "REST API daemon for the CI/CD project and pipeline registry",
        "docs": "/docs",
        "openapi": "/openapi.json",
    }
