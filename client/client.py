"""Main workspace client classes.

This module provides the main entry points for interacting with the workspace API:
- WorkspaceClient: Synchronous client
- AsyncWorkspaceClient: Asynchronous client

Both clients provide namespaced access to the API through sub-client
properties (client.tools, client.files, client.projects, client.transcript,
client.session).

Example:
    Synchronous usage::

        from client import WorkspaceClient

        with WorkspaceClient(base_url="http://localhost:8000") as client:
            client.tools.invoke(
                "str_replace_editor",
                {"command": "create", "path": "/App.jsx", "file_text": "export default 1"},
            )
            print(client.files.read("/App.jsx").content)

    Asynchronous usage::

        from client import AsyncWorkspaceClient

        async with AsyncWorkspaceClient() as client:
            await client.tools.invoke("file_manager", {"command": "delete", "path": "/App.jsx"})
"""

from typing import Any

from client._files import AsyncFilesClient, FilesClient
from client._http import AsyncHTTPClient, HTTPClient
from client._projects import AsyncProjectsClient, ProjectsClient
from client._session import AsyncSessionClient, SessionClient
from client._tools import AsyncToolsClient, ToolsClient
from client._transcript import AsyncTranscriptClient, TranscriptClient
from client.models import HealthResponse


class WorkspaceClient:
    """Synchronous client for the workspace REST API.

    Sub-clients are created lazily and share one HTTP client. Supports the
    context manager protocol for automatic resource cleanup.

    Attributes:
        base_url: The base URL of the workspace server.
        timeout: Request timeout in seconds.
        retry_enabled: Whether automatic retry is enabled.
        max_retries: Maximum number of retry attempts.

    Example:
        Manual lifecycle management::

            client = WorkspaceClient()
            try:
                client.tools.invoke(...)
            finally:
                client.close()
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the workspace client.

        Args:
            base_url: The base URL of the workspace server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to automatically retry on connection
                errors, timeouts, and HTTP 502/503/504, with exponential backoff.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g., for testing).
        """
        self._http = HTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        self._tools: ToolsClient | None = None
        self._files: FilesClient | None = None
        self._projects: ProjectsClient | None = None
        self._transcript: TranscriptClient | None = None
        self._session: SessionClient | None = None

    def __enter__(self) -> "WorkspaceClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the client and release resources."""
        self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    @property
    def tools(self) -> ToolsClient:
        """Tool protocol: invoke, submit, dispatch, cancel, inspect invocations."""
        if self._tools is None:
            self._tools = ToolsClient(self._http)
        return self._tools

    @property
    def files(self) -> FilesClient:
        """Read-only access to the file tree."""
        if self._files is None:
            self._files = FilesClient(self._http)
        return self._files

    @property
    def projects(self) -> ProjectsClient:
        """Saving and listing projects."""
        if self._projects is None:
            self._projects = ProjectsClient(self._http)
        return self._projects

    @property
    def transcript(self) -> TranscriptClient:
        """The chat transcript."""
        if self._transcript is None:
            self._transcript = TranscriptClient(self._http)
        return self._transcript

    @property
    def session(self) -> SessionClient:
        """Session status and clearing."""
        if self._session is None:
            self._session = SessionClient(self._http)
        return self._session

    def health(self) -> HealthResponse:
        """Check server health."""
        return HealthResponse(**self._http.get("/health"))


class AsyncWorkspaceClient:
    """Asynchronous client for the workspace REST API.

    Example:
        Concurrent reads::

            async with AsyncWorkspaceClient() as client:
                files, transcript = await asyncio.gather(
                    client.files.snapshot(),
                    client.transcript.get(),
                )
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: Any = None,
    ) -> None:
        """Initialize the async workspace client.

        Args:
            base_url: The base URL of the workspace server.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to automatically retry on transient failures.
            max_retries: Maximum number of retry attempts when retry is enabled.
            transport: Custom HTTP transport (e.g., httpx.ASGITransport for testing).
        """
        self._http = AsyncHTTPClient(
            base_url=base_url,
            timeout=timeout,
            retry_enabled=retry_enabled,
            max_retries=max_retries,
            transport=transport,
        )

        self._tools: AsyncToolsClient | None = None
        self._files: AsyncFilesClient | None = None
        self._projects: AsyncProjectsClient | None = None
        self._transcript: AsyncTranscriptClient | None = None
        self._session: AsyncSessionClient | None = None

    async def __aenter__(self) -> "AsyncWorkspaceClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the client and release resources."""
        await self._http.close()

    @property
    def base_url(self) -> str:
        return self._http.base_url

    @property
    def timeout(self) -> float:
        return self._http.timeout

    @property
    def retry_enabled(self) -> bool:
        return self._http.retry_enabled

    @property
    def max_retries(self) -> int:
        return self._http.max_retries

    @property
    def tools(self) -> AsyncToolsClient:
        if self._tools is None:
            self._tools = AsyncToolsClient(self._http)
        return self._tools

    @property
    def files(self) -> AsyncFilesClient:
        if self._files is None:
            self._files = AsyncFilesClient(self._http)
        return self._files

    @property
    def projects(self) -> AsyncProjectsClient:
        if self._projects is None:
            self._projects = AsyncProjectsClient(self._http)
        return self._projects

    @property
    def transcript(self) -> AsyncTranscriptClient:
        if self._transcript is None:
            self._transcript = AsyncTranscriptClient(self._http)
        return self._transcript

    @property
    def session(self) -> AsyncSessionClient:
        if self._session is None:
            self._session = AsyncSessionClient(self._http)
        return self._session

    async def health(self) -> HealthResponse:
        """Check server health."""
        return HealthResponse(**await self._http.get("/health"))
