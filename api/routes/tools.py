"""Tool invocation endpoints.

These endpoints are how the agent drives the workspace: submitting tool
calls, dispatching them, cancelling pending ones, and reading back their
lifecycle state and display labels.

A failed tool call is a normal outcome: execution endpoints return 200 with
the failed invocation in the body. HTTP errors are reserved for unknown
invocations and illegal lifecycle transitions.

Handlers that dispatch are plain functions so FastAPI runs them in its
threadpool; dispatch may block while earlier invocations on the same path
finish.
"""

from typing import Any, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from api.dependencies import ProjectSessionDep
from api.models import InvocationResponse, ToolDisplayResponse
from models.display import render_tool_status
from models.invocation import LifecycleState

# Create router for tool endpoints
router = APIRouter(
    prefix="/tools",
    tags=["tools"],
)


# Request/Response Models


class InvokeToolRequest(BaseModel):
    """Request model for submitting a tool call.

    Attributes:
        tool_name: Tool the agent called (e.g., "str_replace_editor").
        command: Sub-command; defaults to args["command"].
        args: Argument mapping as sent by the agent.
        message_id: Transcript message to attach the invocation to.
    """

    tool_name: str = Field(..., min_length=1, description="Tool the agent called")
    command: Optional[str] = Field(default=None, description="Sub-command")
    args: dict[str, Any] = Field(default_factory=dict, description="Argument mapping")
    message_id: Optional[str] = Field(default=None, description="Owning transcript message")


class CancelInvocationRequest(BaseModel):
    """Request model for cancelling a pending invocation.

    Attributes:
        reason: Why the invocation is abandoned.
    """

    reason: str = Field(default="abandoned by caller", min_length=1)


class InvocationListResponse(BaseModel):
    """Response model for listing invocations.

    Attributes:
        invocations: Invocations matching the filters, in submission order.
        total: Number of matching invocations before pagination.
        pending: Pending invocations in the session.
        executing: Executing invocations in the session.
        completed: Completed invocations in the session.
        failed: Failed invocations in the session.
    """

    invocations: list[InvocationResponse]
    total: int
    pending: int
    executing: int
    completed: int
    failed: int


class DisplayRequest(BaseModel):
    """Request model for projecting arbitrary tool-call data onto a label.

    Attributes:
        tool_name: Tool name (any value).
        args: Argument mapping (any value).
        state: Lifecycle or transcript wire state (e.g., "call", "result").
        result: Result payload, if any.
    """

    tool_name: Any = None
    args: Any = None
    state: Any = LifecycleState.PENDING.value
    result: Optional[Any] = None


# Route Handlers


@router.post("/invoke", response_model=InvocationResponse)
def invoke_tool(request: InvokeToolRequest, session: ProjectSessionDep):
    """Submit and execute a tool call.

    Waits for earlier invocations on the same paths before executing.

    Args:
        request: The tool call.
        session: The ProjectSession instance (injected by FastAPI).

    Returns:
        The invocation in its terminal state.
    """
    try:
        invocation = session.execute(
            request.tool_name,
            request.args,
            command=request.command,
            message_id=request.message_id,
        )
    except ValueError as e:
        # Unknown message_id
        raise HTTPException(status_code=404, detail=str(e))
    except RuntimeError as e:
        # Cancelled or started elsewhere between submit and dispatch
        raise HTTPException(status_code=409, detail=str(e))

    return InvocationResponse.from_invocation(invocation)


@router.post("/submit", response_model=InvocationResponse)
def submit_tool(request: InvokeToolRequest, session: ProjectSessionDep):
    """Record a tool call as pending without executing it.

    Args:
        request: The tool call.
        session: The ProjectSession instance (injected by FastAPI).

    Returns:
        The pending invocation.
    """
    try:
        invocation = session.submit(
            request.tool_name,
            request.args,
            command=request.command,
            message_id=request.message_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return InvocationResponse.from_invocation(invocation)


@router.post("/invocations/{invocation_id}/dispatch", response_model=InvocationResponse)
def dispatch_invocation(invocation_id: str, session: ProjectSessionDep):
    """Execute a pending invocation.

    Args:
        invocation_id: The invocation to run.
        session: The ProjectSession instance (injected by FastAPI).

    Returns:
        The invocation in its terminal state.

    Raises:
        HTTPException: 409 if the invocation is no longer pending.
    """
    try:
        invocation = session.dispatch(invocation_id)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return InvocationResponse.from_invocation(invocation)


@router.post("/invocations/{invocation_id}/cancel", response_model=InvocationResponse)
def cancel_invocation(
    invocation_id: str,
    session: ProjectSessionDep,
    request: Optional[CancelInvocationRequest] = None,
):
    """Abandon a pending invocation.

    Args:
        invocation_id: The invocation to cancel.
        session: The ProjectSession instance (injected by FastAPI).
        request: Optional cancellation reason.

    Returns:
        The cancelled invocation.

    Raises:
        HTTPException: 409 if the invocation already left pending.
    """
    reason = request.reason if request else CancelInvocationRequest().reason
    try:
        invocation = session.cancel(invocation_id, reason)
    except RuntimeError as e:
        raise HTTPException(status_code=409, detail=str(e))

    return InvocationResponse.from_invocation(invocation)


@router.get("/invocations", response_model=InvocationListResponse)
async def list_invocations(
    session: ProjectSessionDep,
    state: Optional[str] = None,
    tool_name: Optional[str] = None,
    path: Optional[str] = None,
    limit: Optional[int] = None,
    offset: int = 0,
):
    """List invocations with optional filters.

    Args:
        session: The ProjectSession instance (injected by FastAPI).
        state: Filter by lifecycle state.
        tool_name: Filter by tool name.
        path: Filter by a path argument.
        limit: Maximum number of invocations to return.
        offset: Number of invocations to skip.

    Returns:
        Matching invocations plus per-state counts.
    """
    lifecycle_state = None
    if state:
        try:
            lifecycle_state = LifecycleState(state)
        except ValueError:
            raise HTTPException(
                status_code=400,
                detail=f"Invalid state: {state}. Must be one of: "
                + ", ".join(s.value for s in LifecycleState),
            )

    invocations = session.query_invocations(
        state=lifecycle_state,
        tool_name=tool_name,
        path=path,
    )

    total = len(invocations)
    if limit:
        invocations = invocations[offset : offset + limit]
    else:
        invocations = invocations[offset:]

    status = session.get_status()
    return InvocationListResponse(
        invocations=[InvocationResponse.from_invocation(i) for i in invocations],
        total=total,
        pending=status["pending"],
        executing=status["executing"],
        completed=status["completed"],
        failed=status["failed"],
    )


@router.get("/invocations/{invocation_id}", response_model=InvocationResponse)
async def get_invocation(invocation_id: str, session: ProjectSessionDep):
    """Get a single invocation by id.

    Unknown ids are answered with 404 by the InvocationNotFoundError handler.
    """
    return InvocationResponse.from_invocation(session.get_invocation(invocation_id))


@router.post("/display", response_model=ToolDisplayResponse)
async def project_display(request: DisplayRequest):
    """Project tool-call data onto a transcript label and indicator.

    Pure: does not touch the session. Accepts any shape of input and always
    returns a label.
    """
    display = render_tool_status(request.tool_name, request.args, request.state, request.result)
    return ToolDisplayResponse(label=display.label, indicator=display.indicator.value)
