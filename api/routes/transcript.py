"""Transcript endpoints.

The transcript is the ordered chat between the user and the agent. Each
assistant message lists the tool invocations issued with it, rendered in the
transcript wire form (state "call" while in flight, "result" once finished)
together with their display labels.
"""

from datetime import datetime
from typing import Any

from fastapi import APIRouter
from pydantic import BaseModel, Field

from api.dependencies import ProjectSessionDep
from api.models import ToolDisplayResponse
from models.session import InvocationNotFoundError, ProjectSession
from models.transcript import ChatMessage, MessageRole

# Create router for transcript endpoints
router = APIRouter(
    prefix="/transcript",
    tags=["transcript"],
)


# Request/Response Models


class AddMessageRequest(BaseModel):
    """Request model for appending a transcript message.

    Attributes:
        role: Author of the message.
        content: Message text.
    """

    role: MessageRole
    content: str = Field(default="")


class TranscriptToolPart(BaseModel):
    """A tool invocation as it appears in a message.

    Attributes:
        toolCallId: Invocation id.
        toolName: Tool name.
        args: Arguments, including the command.
        state: "call" while in flight, "result" once finished.
        result: Result payload once finished.
        display: Label and indicator.
    """

    toolCallId: str
    toolName: str
    args: dict[str, Any]
    state: str
    result: Any = None
    display: ToolDisplayResponse


class MessageResponse(BaseModel):
    """Response model for one transcript message."""

    message_id: str
    role: str
    content: str
    tool_invocations: list[TranscriptToolPart]
    created_at: datetime


class TranscriptResponse(BaseModel):
    """Response model for the whole transcript.

    Attributes:
        messages: Messages, oldest first.
        total: Number of messages.
    """

    messages: list[MessageResponse]
    total: int


def _to_message_response(session: ProjectSession, message: ChatMessage) -> MessageResponse:
    parts = []
    for invocation_id in message.tool_invocations:
        try:
            invocation = session.get_invocation(invocation_id)
        except InvocationNotFoundError:
            # Removed by a concurrent clear
            continue
        display = invocation.get_display()
        parts.append(
            TranscriptToolPart(
                **invocation.to_transcript_part(),
                display=ToolDisplayResponse(
                    label=display.label,
                    indicator=display.indicator.value,
                ),
            )
        )
    return MessageResponse(
        message_id=message.message_id,
        role=message.role.value,
        content=message.content,
        tool_invocations=parts,
        created_at=message.created_at,
    )


# Route Handlers


@router.get("", response_model=TranscriptResponse)
async def get_transcript(session: ProjectSessionDep):
    """Return the transcript with each tool invocation's current label."""
    messages = [_to_message_response(session, m) for m in session.transcript.messages]
    return TranscriptResponse(messages=messages, total=len(messages))


@router.post("/messages", response_model=MessageResponse)
async def add_message(request: AddMessageRequest, session: ProjectSessionDep):
    """Append a message to the transcript.

    Tool calls issued with this message reference it through `message_id`
    on POST /tools/invoke or POST /tools/submit.
    """
    message_id = session.add_message(request.role, request.content)
    return _to_message_response(session, session.transcript.get_message(message_id))
