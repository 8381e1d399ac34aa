"""Session sub-client for the workspace API.

This module provides SessionClient and AsyncSessionClient for the session
endpoints (/session/*).

This is an internal module. Import from `client` instead.
"""

from pydantic import BaseModel

from client._base import AsyncBaseClient, BaseClient


class SessionStatusResponse(BaseModel):
    """Invocation counts and file tree summary for the session."""

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
    """Summary of a session clear."""

    status: str
    files_removed: int
    invocations_removed: int
    messages_removed: int


class SessionClient(BaseClient):
    """Synchronous client for the session endpoints (/session/*)."""

    _BASE_PATH = "/session"

    def status(self) -> SessionStatusResponse:
        """Get invocation counts and the file tree summary."""
        return SessionStatusResponse(**self._get(self._path("/status")))

    def clear(self) -> ClearSessionResponse:
        """Drop every file, invocation and message.

        Raises:
            ConflictError: If invocations are still pending or executing.
        """
        return ClearSessionResponse(**self._post(self._path("/clear")))


class AsyncSessionClient(AsyncBaseClient):
    """Asynchronous client for the session endpoints (/session/*)."""

    _BASE_PATH = "/session"

    async def status(self) -> SessionStatusResponse:
        """Get invocation counts and the file tree summary."""
        return SessionStatusResponse(**await self._get(self._path("/status")))

    async def clear(self) -> ClearSessionResponse:
        """Drop every file, invocation and message."""
        return ClearSessionResponse(**await self._post(self._path("/clear")))
