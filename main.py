"""Main entry point for the project workspace FastAPI application.

This module creates and configures the FastAPI app instance that serves the REST API
through which an agent edits a project's virtual file system and the transcript,
editor and preview observe it.

To run the development server:
    uv run uvicorn main:app --reload

To run in production:
    uv run uvicorn main:app --host 0.0.0.0 --port 8000
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from pydantic import ValidationError

from api.dependencies import initialize_project_session, shutdown_project_session
from api.exceptions import (
    generic_exception_handler,
    invocation_not_found_handler,
    persistence_refused_handler,
    runtime_error_handler,
    validation_exception_handler,
    value_error_handler,
    workspace_error_handler,
)
from api.routes import files as files_routes
from api.routes import projects as projects_routes
from api.routes import session as session_routes
from api.routes import tools as tools_routes
from api.routes import transcript as transcript_routes
from models.errors import WorkspaceError
from models.session import InvocationNotFoundError, PersistenceRefusedError


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan events.

    Args:
        app: The FastAPI application instance.

    Yields:
        Control back to FastAPI to handle requests.
    """
    print("🚀 Starting workspace - Initializing ProjectSession...")
    initialize_project_session()
    print("✅ ProjectSession initialized")

    yield

    print("🛑 Shutting down workspace - Releasing ProjectSession...")
    shutdown_project_session()
    print("✅ Shutdown complete")


# Create the FastAPI application instance
app = FastAPI(
    title="Project Workspace",
    description="Virtual file system and tool protocol for agent-driven project editing",
    version="0.1.0",
    lifespan=lifespan,
)

# Register exception handlers
# Specific exceptions before general ones
app.add_exception_handler(WorkspaceError, workspace_error_handler)
app.add_exception_handler(InvocationNotFoundError, invocation_not_found_handler)
app.add_exception_handler(PersistenceRefusedError, persistence_refused_handler)
app.add_exception_handler(ValidationError, validation_exception_handler)
app.add_exception_handler(ValueError, value_error_handler)
app.add_exception_handler(RuntimeError, runtime_error_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Register route modules
app.include_router(tools_routes.router)
app.include_router(files_routes.router)
app.include_router(projects_routes.router)
app.include_router(transcript_routes.router)
app.include_router(session_routes.router)


@app.get("/")
async def root():
    """Root endpoint - returns a welcome message."""
    return {
        "message": "Welcome to the Project Workspace API",
        "version": "0.1.0",
        "docs_url": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
