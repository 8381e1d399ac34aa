"""Tool invocation sub-client for the workspace API.

This module provides ToolsClient and AsyncToolsClient for the tool protocol
endpoints (/tools/*).

This is an internal module. Import from `client` instead.
"""

from typing import Any

from pydantic import BaseModel

from client._base import AsyncBaseClient, BaseClient
from client.models import InvocationResponse, ToolDisplayResponse


class InvocationListResponse(BaseModel):
    """Response model for listing invocations.

    Attributes:
        invocations: Invocations matching the filters, in submission order.
        total: Number of matches before pagination.
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


def _tool_call_body(
    tool_name: str,
    args: dict[str, Any] | None,
    command: str | None,
    message_id: str | None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"tool_name": tool_name, "args": args or {}}
    if command is not None:
        body["command"] = command
    if message_id is not None:
        body["message_id"] = message_id
    return body


def _list_params(
    state: str | None,
    tool_name: str | None,
    path: str | None,
    limit: int | None,
    offset: int,
) -> dict[str, Any]:
    return {
        "state": state,
        "tool_name": tool_name,
        "path": path,
        "limit": limit,
        "offset": offset,
    }


def _display_body(tool_name: Any, args: Any, state: Any, result: Any) -> dict[str, Any]:
    return {"tool_name": tool_name, "args": args, "state": state, "result": result}


class ToolsClient(BaseClient):
    """Synchronous client for the tool endpoints (/tools/*).

    A failed tool call is returned, not raised: check `state` and
    `error_kind` on the returned invocation.

    Example:
        with WorkspaceClient() as client:
            invocation = client.tools.invoke(
                "str_replace_editor",
                {"command": "create", "path": "/App.jsx", "file_text": "export default 1"},
            )
            print(invocation.display.label)  # "Creating App.jsx"
    """

    _BASE_PATH = "/tools"

    def invoke(
        self,
        tool_name: str,
        args: dict[str, Any] | None = None,
        command: str | None = None,
        message_id: str | None = None,
    ) -> InvocationResponse:
        """Submit and execute a tool call.

        Args:
            tool_name: Tool to call (e.g., "str_replace_editor").
            args: Argument mapping; may carry "command".
            command: Sub-command, when not in args.
            message_id: Transcript message to attach the invocation to.

        Returns:
            The invocation in its terminal state.

        Raises:
            NotFoundError: If message_id is unknown.
            APIError: If the request fails.
        """
        data = self._post(
            self._path("/invoke"),
            json=_tool_call_body(tool_name, args, command, message_id),
        )
        return InvocationResponse(**data)

    def submit(
        self,
        tool_name: str,
        args: dict[str, Any] | None = None,
        command: str | None = None,
        message_id: str | None = None,
    ) -> InvocationResponse:
        """Record a tool call as pending without executing it.

        Returns:
            The pending invocation.
        """
        data = self._post(
            self._path("/submit"),
            json=_tool_call_body(tool_name, args, command, message_id),
        )
        return InvocationResponse(**data)

    def dispatch(self, invocation_id: str) -> InvocationResponse:
        """Execute a pending invocation.

        Raises:
            NotFoundError: If the invocation is unknown.
            ConflictError: If the invocation is no longer pending.
        """
        data = self._post(self._path(f"/invocations/{invocation_id}/dispatch"))
        return InvocationResponse(**data)

    def cancel(self, invocation_id: str, reason: str | None = None) -> InvocationResponse:
        """Abandon a pending invocation.

        Raises:
            NotFoundError: If the invocation is unknown.
            ConflictError: If the invocation already left pending.
        """
        json_body = {"reason": reason} if reason is not None else None
        data = self._post(self._path(f"/invocations/{invocation_id}/cancel"), json=json_body)
        return InvocationResponse(**data)

    def get(self, invocation_id: str) -> InvocationResponse:
        """Get one invocation.

        Raises:
            NotFoundError: If the invocation is unknown.
        """
        data = self._get(self._path(f"/invocations/{invocation_id}"))
        return InvocationResponse(**data)

    def list_invocations(
        self,
        state: str | None = None,
        tool_name: str | None = None,
        path: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> InvocationListResponse:
        """List invocations with optional filters.

        Args:
            state: Lifecycle state (pending, executing, completed, failed).
            tool_name: Tool name.
            path: Path argument.
            limit: Maximum number of invocations to return.
            offset: Number of invocations to skip.
        """
        data = self._get(
            self._path("/invocations"),
            params=_list_params(state, tool_name, path, limit, offset),
        )
        return InvocationListResponse(**data)

    def display(
        self,
        tool_name: Any,
        args: Any = None,
        state: Any = "pending",
        result: Any = None,
    ) -> ToolDisplayResponse:
        """Project tool-call data onto a transcript label and indicator."""
        data = self._post(self._path("/display"), json=_display_body(tool_name, args, state, result))
        return ToolDisplayResponse(**data)


class AsyncToolsClient(AsyncBaseClient):
    """Asynchronous client for the tool endpoints (/tools/*).

    Example:
        async with AsyncWorkspaceClient() as client:
            pending = await client.tools.submit(
                "file_manager", {"command": "delete", "path": "/old.css"}
            )
            await client.tools.dispatch(pending.invocation_id)
    """

    _BASE_PATH = "/tools"

    async def invoke(
        self,
        tool_name: str,
        args: dict[str, Any] | None = None,
        command: str | None = None,
        message_id: str | None = None,
    ) -> InvocationResponse:
        """Submit and execute a tool call. See ToolsClient.invoke."""
        data = await self._post(
            self._path("/invoke"),
            json=_tool_call_body(tool_name, args, command, message_id),
        )
        return InvocationResponse(**data)

    async def submit(
        self,
        tool_name: str,
        args: dict[str, Any] | None = None,
        command: str | None = None,
        message_id: str | None = None,
    ) -> InvocationResponse:
        """Record a tool call as pending without executing it."""
        data = await self._post(
            self._path("/submit"),
            json=_tool_call_body(tool_name, args, command, message_id),
        )
        return InvocationResponse(**data)

    async def dispatch(self, invocation_id: str) -> InvocationResponse:
        """Execute a pending invocation."""
        data = await self._post(self._path(f"/invocations/{invocation_id}/dispatch"))
        return InvocationResponse(**data)

    async def cancel(self, invocation_id: str, reason: str | None = None) -> InvocationResponse:
        """Abandon a pending invocation."""
        json_body = {"reason": reason} if reason is not None else None
        data = await self._post(
            self._path(f"/invocations/{invocation_id}/cancel"), json=json_body
        )
        return InvocationResponse(**data)

    async def get(self, invocation_id: str) -> InvocationResponse:
        """Get one invocation."""
        data = await self._get(self._path(f"/invocations/{invocation_id}"))
        return InvocationResponse(**data)

    async def list_invocations(
        self,
        state: str | None = None,
        tool_name: str | None = None,
        path: str | None = None,
        limit: int | None = None,
        offset: int = 0,
    ) -> InvocationListResponse:
        """List invocations with optional filters."""
        data = await self._get(
            self._path("/invocations"),
            params=_list_params(state, tool_name, path, limit, offset),
        )
        return InvocationListResponse(**data)

    async def display(
        self,
        tool_name: Any,
        args: Any = None,
        state: Any = "pending",
        result: Any = None,
    ) -> ToolDisplayResponse:
        """Project tool-call data onto a transcript label and indicator."""
        data = await self._post(
            self._path("/display"), json=_display_body(tool_name, args, state, result)
        )
        return ToolDisplayResponse(**data)
