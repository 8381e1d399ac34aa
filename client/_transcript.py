"""Transcript sub-client for the workspace API.

This module provides TranscriptClient and AsyncTranscriptClient for the
transcript endpoints (/transcript/*).

This is an internal module. Import from `client` instead.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel

from client._base import AsyncBaseClient, BaseClient
from client.models import ToolDisplayResponse


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


class TranscriptMessage(BaseModel):
    """One transcript message."""

    message_id: str
    role: str
    content: str
    tool_invocations: list[TranscriptToolPart]
    created_at: datetime


class TranscriptResponse(BaseModel):
    """The whole transcript, oldest message first."""

    messages: list[TranscriptMessage]
    total: int


class TranscriptClient(BaseClient):
    """Synchronous client for the transcript endpoints (/transcript/*).

    Example:
        with WorkspaceClient() as client:
            message = client.transcript.add_message("assistant", "Creating the app")
            client.tools.invoke(
                "str_replace_editor",
                {"command": "create", "path": "/App.jsx", "file_text": ""},
                message_id=message.message_id,
            )
    """

    _BASE_PATH = "/transcript"

    def get(self) -> TranscriptResponse:
        """Get the transcript with each invocation's current label."""
        return TranscriptResponse(**self._get(self._path()))

    def add_message(self, role: str, content: str = "") -> TranscriptMessage:
        """Append a message.

        Args:
            role: "user", "assistant" or "system".
            content: Message text.

        Raises:
            ValidationError: If role is not recognized.
        """
        data = self._post(self._path("/messages"), json={"role": role, "content": content})
        return TranscriptMessage(**data)


class AsyncTranscriptClient(AsyncBaseClient):
    """Asynchronous client for the transcript endpoints (/transcript/*)."""

    _BASE_PATH = "/transcript"

    async def get(self) -> TranscriptResponse:
        """Get the transcript with each invocation's current label."""
        return TranscriptResponse(**await self._get(self._path()))

    async def add_message(self, role: str, content: str = "") -> TranscriptMessage:
        """Append a message."""
        data = await self._post(
            self._path("/messages"), json={"role": role, "content": content}
        )
        return TranscriptMessage(**data)

