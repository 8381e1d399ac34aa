"""Project persistence endpoints.

Saving hands the session's transcript and files to the project store. The
caller's identity is never inspected here; the session boundary supplies
only a go/no-go in the `authorized` flag.
"""

from datetime import datetime
from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import DefaultProjectNameDep, ProjectSessionDep, ProjectStoreDep
from api.models import ErrorResponse
from models.project import ProjectRecord

# Create router for project endpoints
router = APIRouter(
    prefix="/projects",
    tags=["projects"],
)


# Request/Response Models


class SaveProjectRequest(BaseModel):
    """Request model for saving the current session as a project.

    Attributes:
        name: Project name; a default label is generated when omitted.
        authorized: Go/no-go from the session boundary.
        from_anonymous_work: Whether this promotes work done before sign-in.
    """

    name: Optional[str] = Field(default=None, description="Project name")
    authorized: bool = Field(default=False, description="Whether saving is allowed")
    from_anonymous_work: bool = Field(default=False)


class ProjectSummary(BaseModel):
    """Listing form of a stored project.

    Attributes:
        project_id: Identifier assigned by the store.
        name: Project name.
        file_count: Number of files saved.
        message_count: Number of transcript messages saved.
        created_at: When the project was saved.
    """

    project_id: str
    name: str
    file_count: int
    message_count: int
    created_at: datetime

    @classmethod
    def from_record(cls, record: ProjectRecord) -> "ProjectSummary":
        return cls(
            project_id=record.project_id,
            name=record.name,
            file_count=len(record.data),
            message_count=len(record.messages),
            created_at=record.created_at,
        )


class ProjectResponse(ProjectSummary):
    """Full stored project.

    Attributes:
        messages: The saved transcript.
        data: Mapping of path to content.
    """

    messages: list[dict[str, Any]]
    data: dict[str, str]

    @classmethod
    def from_record(cls, record: ProjectRecord) -> "ProjectResponse":
        return cls(
            **ProjectSummary.from_record(record).model_dump(),
            messages=record.messages,
            data=record.data,
        )


class ProjectListResponse(BaseModel):
    """Response model for listing projects.

    Attributes:
        projects: Stored projects, most recent first.
        total: Number of stored projects.
    """

    projects: list[ProjectSummary]
    total: int


# Route Handlers


@router.post(
    "/save",
    response_model=ProjectResponse,
    responses={403: {"model": ErrorResponse}},
)
async def save_project(
    request: SaveProjectRequest,
    session: ProjectSessionDep,
    store: ProjectStoreDep,
    default_name: DefaultProjectNameDep,
):
    """Save the current session as a project.

    Refused with 403 (by the PersistenceRefusedError handler) when
    `authorized` is false.

    Args:
        request: Save options.
        session: The ProjectSession instance (injected by FastAPI).
        store: The project store (injected by FastAPI).
        default_name: WORKSPACE_PROJECT_NAME, if configured.

    Returns:
        The stored project.
    """
    record = session.save(
        store,
        authorized=request.authorized,
        name=request.name or default_name,
        from_anonymous_work=request.from_anonymous_work,
    )
    return ProjectResponse.from_record(record)


@router.get("", response_model=ProjectListResponse)
async def list_projects(store: ProjectStoreDep):
    """List stored projects, most recent first."""
    projects = [ProjectSummary.from_record(r) for r in store.list_projects()]
    return ProjectListResponse(projects=projects, total=len(projects))


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(project_id: str, store: ProjectStoreDep):
    """Get one stored project.

    Raises:
        HTTPException: If the project does not exist.
    """
    record = store.get_project(project_id)
    if record is None:
        raise HTTPException(
            status_code=404,
            detail=f"Project {project_id} not found",
        )
    return ProjectResponse.from_record(record)
