"""Session lifecycle endpoints.

Status reporting and clearing for the process-wide project session.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel

from api.dependencies import ProjectSessionDep

# Create router for session endpoints
router = APIRouter(
    prefix="/session",
    tags=["session"],
)


# Request/Response Models


class SessionStatusResponse(BaseModel):
    """Response model for session status.

    Attributes:
        session_id: Unique identifier for the session.
        total_invocations: Number of invocations submitted.
        pending: Pending invocations.
        executing: Executing invocations.
        completed: Completed invocations.
        failed: Failed invocations (cancelled ones included).
        cancelled: Invocations abandoned before dispatch.
        file_count: Number of files in the tree.
        revision: Tree revision.
    """

    session_id: str
    total_invocations: int
    pending: int
    executing: int
    completed: int
    failed: int
    cancelled: int
    file_count: int
    revision: int


class ClearSessionResponse(BaseModel):
    """Response model for clearing the session.

    Attributes:
        status: Confirmation status ("cleared").
        files_removed: Number of files dropped.
        invocations_removed: Number of invocations dropped.
        messages_removed: Number of transcript messages dropped.
    """

    status: str
    files_removed: int
    invocations_removed: int
    messages_removed: int


# Route Handlers


@router.get("/status", response_model=SessionStatusResponse)
async def get_session_status(session: ProjectSessionDep):
    """Get invocation counts and the file tree summary."""
    return SessionStatusResponse(**session.get_status())


@router.post("/clear", response_model=ClearSessionResponse)
async def clear_session(session: ProjectSessionDep):
    """Drop every file, invocation and transcript message.

    Raises:
        HTTPException: 409 if invocations are still pending or executing.
    """
    try:
        result = session.clear()
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return ClearSessionResponse(status="cleared", **result)
