"""Chat transcript models.

The transcript is the ordered conversation between the user and the agent.
Assistant messages reference the tool invocations they issued; the
invocations themselves are owned by the ProjectSession.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


class MessageRole(str, Enum):
    """Author of a transcript message."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


class ChatMessage(BaseModel):
    """One message in the transcript.

    Args:
        message_id: Unique identifier for this message.
        role: Who wrote the message.
        content: Message text.
        tool_invocations: IDs of invocations issued in this message, in order.
        created_at: When the message was added.
    """

    message_id: str = Field(default_factory=lambda: str(uuid4()))
    role: MessageRole
    content: str = ""
    tool_invocations: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class Transcript(BaseModel):
    """Ordered list of chat messages."""

    messages: list[ChatMessage] = Field(default_factory=list)

    def add_message(self, role: MessageRole, content: str = "") -> ChatMessage:
        """Append a message and return it."""
        message = ChatMessage(role=role, content=content)
        self.messages.append(message)
        return message

    def get_message(self, message_id: str) -> Optional[ChatMessage]:
        for message in self.messages:
            if message.message_id == message_id:
                return message
        return None

    def attach_invocation(self, message_id: str, invocation_id: str) -> None:
        """Record that an invocation was issued as part of a message.

        Raises:
            ValueError: If the message does not exist.
        """
        message = self.get_message(message_id)
        if message is None:
            raise ValueError(f"Message {message_id} not found in transcript")
        message.tool_invocations.append(invocation_id)

    def clear(self) -> None:
        self.messages.clear()

    def to_messages(self, tool_parts: dict[str, dict[str, Any]]) -> list[dict[str, Any]]:
        """Serialize for persistence.

        Args:
            tool_parts: Transcript parts keyed by invocation id
                (from ToolInvocation.to_transcript_part()).

        Returns:
            List of message dicts, oldest first.
        """
        return [
            {
                "id": message.message_id,
                "role": message.role.value,
                "content": message.content,
                "toolInvocations": [
                    tool_parts[invocation_id]
                    for invocation_id in message.tool_invocations
                    if invocation_id in tool_parts
                ],
                "createdAt": message.created_at.isoformat(),
            }
            for message in self.messages
        ]
