"""Shared request and response models for API endpoints.

This module contains models used by more than one router: the wire form of
a tool invocation, its display projection and the common error body.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field

from models.invocation import ToolInvocation


class ToolDisplayResponse(BaseModel):
    """What the transcript shows for one invocation.

    Attributes:
        label: Human-readable label (e.g., "Creating App.tsx").
        indicator: One of "busy", "success", "error".
    """

    label: str
    indicator: str


class InvocationResponse(BaseModel):
    """Wire form of a ToolInvocation.

    Attributes:
        invocation_id: Unique identifier for the invocation.
        tool_name: Tool the agent called.
        command: Sub-command.
        args: Argument mapping as submitted.
        state: Lifecycle state (pending, executing, completed, failed).
        result: Terminal result payload, None until finished.
        error_kind: Failure kind when failed.
        error_message: Failure description when failed.
        cancelled: Whether the invocation was abandoned before dispatch.
        sequence: Submission order within the session.
        message_id: Transcript message the invocation belongs to.
        created_at: When the invocation was submitted.
        started_at: When execution began.
        finished_at: When the invocation finished.
        display: Label and indicator for the transcript.
    """

    invocation_id: str
    tool_name: str
    command: Optional[str] = None
    args: dict[str, Any] = Field(default_factory=dict)
    state: str
    result: Optional[Any] = None
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    cancelled: bool = False
    sequence: int
    message_id: Optional[str] = None
    created_at: datetime
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None
    display: ToolDisplayResponse

    @classmethod
    def from_invocation(cls, invocation: ToolInvocation) -> "InvocationResponse":
        """Build the response from a ToolInvocation."""
        display = invocation.get_display()
        return cls(
            invocation_id=invocation.invocation_id,
            tool_name=invocation.tool_name,
            command=invocation.command,
            args=invocation.args,
            state=invocation.state.value,
            result=invocation.result,
            error_kind=invocation.error_kind.value if invocation.error_kind else None,
            error_message=invocation.error_message,
            cancelled=invocation.cancelled,
            sequence=invocation.sequence,
            message_id=invocation.message_id,
            created_at=invocation.created_at,
            started_at=invocation.started_at,
            finished_at=invocation.finished_at,
            display=ToolDisplayResponse(
                label=display.label,
                indicator=display.indicator.value,
            ),
        )


class ErrorResponse(BaseModel):
    """Standard error response model.

    Attributes:
        error: Error type or code.
        detail: Human-readable error message.
    """

    error: str
    detail: str
