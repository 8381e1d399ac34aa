"""Dependency injection providers for the FastAPI application.

This module defines dependencies that can be injected into route handlers,
providing access to shared resources like the ProjectSession and the
project store.
"""

import logging
import os
from typing import Annotated, Optional

from fastapi import Depends

from models.history import DEFAULT_HISTORY_LIMIT
from models.file_system import VirtualFileSystem
from models.project import InMemoryProjectStore, ProjectStore
from models.session import ProjectSession

logger = logging.getLogger(__name__)


# Global state
# One process-wide session and store, created when the app starts
_project_session: ProjectSession | None = None
_project_store: ProjectStore | None = None
_default_project_name: Optional[str] = None


def _read_history_limit() -> int:
    raw = os.environ.get("WORKSPACE_HISTORY_LIMIT")
    if raw is None or raw.strip() == "":
        return DEFAULT_HISTORY_LIMIT
    try:
        limit = int(raw)
    except ValueError:
        raise ValueError(f"WORKSPACE_HISTORY_LIMIT must be an integer, got {raw!r}")
    if limit < 1:
        raise ValueError(f"WORKSPACE_HISTORY_LIMIT must be positive, got {limit}")
    return limit


def get_project_session() -> ProjectSession:
    """Get the shared ProjectSession instance.

    This function is a FastAPI dependency. When you add it to a route handler's
    parameters, FastAPI will automatically call this function and inject the result.

    Returns:
        The shared ProjectSession instance.

    Raises:
        RuntimeError: If the session hasn't been initialized yet.

    Example:
        @router.get("/some-endpoint")
        async def my_handler(session: ProjectSessionDep):
            return session.get_status()
    """
    if _project_session is None:
        raise RuntimeError(
            "ProjectSession not initialized. Call initialize_project_session() first."
        )

    return _project_session


def get_project_store() -> ProjectStore:
    """Get the shared project store.

    Raises:
        RuntimeError: If the store hasn't been initialized yet.
    """
    if _project_store is None:
        raise RuntimeError(
            "Project store not initialized. Call initialize_project_session() first."
        )

    return _project_store


def get_default_project_name() -> Optional[str]:
    """Default project name from WORKSPACE_PROJECT_NAME, if configured."""
    return _default_project_name


def initialize_project_session() -> ProjectSession:
    """Initialize the shared ProjectSession and project store.

    This should be called once when the FastAPI app starts up. Reads
    WORKSPACE_HISTORY_LIMIT and WORKSPACE_PROJECT_NAME from the environment.

    Returns:
        The newly created ProjectSession instance.

    Raises:
        ValueError: If WORKSPACE_HISTORY_LIMIT is not a positive integer.
    """
    global _project_session, _project_store, _default_project_name

    history_limit = _read_history_limit()
    _default_project_name = os.environ.get("WORKSPACE_PROJECT_NAME") or None

    _project_session = ProjectSession(
        file_system=VirtualFileSystem(history_limit=history_limit),
    )
    _project_store = InMemoryProjectStore()

    logger.info(
        f"Initialized session {_project_session.session_id} "
        f"(history limit {history_limit})"
    )
    return _project_session


def shutdown_project_session():
    """Drop the shared session and store.

    This should be called when the FastAPI app shuts down.
    """
    global _project_session, _project_store, _default_project_name

    if _project_session is not None:
        logger.info(f"Shutting down session {_project_session.session_id}")

    _project_session = None
    _project_store = None
    _default_project_name = None


# Type aliases for dependency injection
ProjectSessionDep = Annotated[ProjectSession, Depends(get_project_session)]
ProjectStoreDep = Annotated[ProjectStore, Depends(get_project_store)]
DefaultProjectNameDep = Annotated[Optional[str], Depends(get_default_project_name)]
