"""Workspace API Client Library.

This module provides a type-safe Python client for the project workspace
REST API. It supports both synchronous and asynchronous usage patterns.

Example:
    Synchronous usage::

        from client import WorkspaceClient

        with WorkspaceClient(base_url="http://localhost:8000") as client:
            invocation = client.tools.invoke(
                "str_replace_editor",
                {"command": "create", "path": "/src/App.jsx", "file_text": "export default 1"},
            )
            print(invocation.display.label)  # "Creating App.jsx"

    Asynchronous usage::

        from client import AsyncWorkspaceClient

        async with AsyncWorkspaceClient() as client:
            snapshot = await client.files.snapshot()

Exports:
    WorkspaceClient: Synchronous client.
    AsyncWorkspaceClient: Asynchronous client.

    Exceptions:
        WorkspaceClientError: Base exception for all client errors.
        ConnectionError: Failed to connect to the server.
        TimeoutError: Request timed out.
        APIError: Server returned an error response.
        ValidationError: Request validation failed (HTTP 422).
        NotFoundError: Resource not found (HTTP 404).
        ConflictError: State conflict (HTTP 409).
        ForbiddenError: Not authorized (HTTP 403).
        ServerError: Server-side error (HTTP 5xx).
"""

from client._files import (
    AsyncFilesClient,
    DirectoryEntry,
    DirectoryListResponse,
    FileContentResponse,
    FileEntry,
    FileListResponse,
    FilesClient,
    SnapshotResponse,
)
from client._projects import (
    AsyncProjectsClient,
    ProjectListResponse,
    ProjectResponse,
    ProjectsClient,
    ProjectSummary,
)
from client._session import (
    AsyncSessionClient,
    ClearSessionResponse,
    SessionClient,
    SessionStatusResponse,
)
from client._tools import AsyncToolsClient, InvocationListResponse, ToolsClient
from client._transcript import (
    AsyncTranscriptClient,
    TranscriptClient,
    TranscriptMessage,
    TranscriptResponse,
    TranscriptToolPart,
)
from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
    WorkspaceClientError,
)
from client.models import (
    ErrorResponse,
    HealthResponse,
    InvocationResponse,
    ToolDisplayResponse,
)
from client.client import AsyncWorkspaceClient, WorkspaceClient

__all__ = [
    # Main clients
    "WorkspaceClient",
    "AsyncWorkspaceClient",
    # Sub-clients
    "ToolsClient",
    "AsyncToolsClient",
    "FilesClient",
    "AsyncFilesClient",
    "ProjectsClient",
    "AsyncProjectsClient",
    "TranscriptClient",
    "AsyncTranscriptClient",
    "SessionClient",
    "AsyncSessionClient",
    # Models
    "InvocationResponse",
    "InvocationListResponse",
    "ToolDisplayResponse",
    "ErrorResponse",
    "HealthResponse",
    "FileEntry",
    "FileListResponse",
    "FileContentResponse",
    "DirectoryEntry",
    "DirectoryListResponse",
    "SnapshotResponse",
    "ProjectSummary",
    "ProjectResponse",
    "ProjectListResponse",
    "TranscriptToolPart",
    "TranscriptMessage",
    "TranscriptResponse",
    "SessionStatusResponse",
    "ClearSessionResponse",
    # Exceptions
    "WorkspaceClientError",
    "ConnectionError",
    "TimeoutError",
    "APIError",
    "ValidationError",
    "NotFoundError",
    "ConflictError",
    "ForbiddenError",
    "ServerError",
]
