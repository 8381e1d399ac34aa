"""Base classes for all sub-clients.

Sub-clients share one HTTP client owned by the WorkspaceClient facade and
build their paths from a `_BASE_PATH`.

This is an internal module and should not be imported directly by users.
"""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from client._http import AsyncHTTPClient, HTTPClient


class BaseClient:
    """Base class for synchronous sub-clients.

    Attributes:
        _http: The shared HTTP client for making requests.
    """

    _BASE_PATH = ""

    def __init__(self, http_client: "HTTPClient") -> None:
        self._http = http_client

    def _path(self, suffix: str = "") -> str:
        return f"{self._BASE_PATH}{suffix}"

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make a GET request and return the parsed JSON response."""
        return self._http.get(path, params=params)

    def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make a POST request and return the parsed JSON response."""
        return self._http.post(path, json=json, params=params)


class AsyncBaseClient:
    """Base class for asynchronous sub-clients.

    Attributes:
        _http: The shared async HTTP client for making requests.
    """

    _BASE_PATH = ""

    def __init__(self, http_client: "AsyncHTTPClient") -> None:
        self._http = http_client

    def _path(self, suffix: str = "") -> str:
        return f"{self._BASE_PATH}{suffix}"

    async def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Make an async GET request and return the parsed JSON response."""
        return await self._http.get(path, params=params)

    async def _post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Make an async POST request and return the parsed JSON response."""
        return await self._http.post(path, json=json, params=params)
