"""Internal HTTP handling utilities for the workspace client.

This module provides the low-level HTTP communication layer used by all
sub-clients:
- Making HTTP requests (sync and async)
- Mapping error responses onto the client exception hierarchy
- Retry logic with exponential backoff

This is an internal module and should not be imported directly by users.
"""

import asyncio
import time
from typing import Any, Literal

import httpx

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    ForbiddenError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)


# HTTP methods supported by the client
HttpMethod = Literal["GET", "POST", "PUT", "PATCH", "DELETE"]

# Status codes that trigger automatic retry (when retry is enabled)
RETRYABLE_STATUS_CODES = {502, 503, 504}

# Default backoff settings for retry logic
DEFAULT_RETRY_BACKOFF_BASE = 0.5  # seconds
DEFAULT_RETRY_BACKOFF_MAX = 30.0  # seconds

# 4xx status codes with a dedicated exception type
_CLIENT_ERRORS: dict[int, type[APIError]] = {
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: ValidationError,
}


def _parse_error_response(response: httpx.Response) -> tuple[str, str | None, dict | None]:
    """Extract (message, error_type, details) from an error response.

    Understands the service's {"error", "detail", "kind"} bodies as well as
    FastAPI's own {"detail": [...]} request-validation bodies. Falls back to
    the raw response text.
    """
    try:
        body = response.json()
    except ValueError:
        text = response.text.strip()
        return (text or f"HTTP {response.status_code} error"), None, None

    if not isinstance(body, dict):
        return str(body), None, None

    detail = body.get("detail")
    error_type = body.get("kind") or body.get("type")
    if isinstance(detail, str):
        return detail, error_type, body
    if isinstance(detail, list):
        messages = [
            f"{err.get('loc', ['unknown'])[-1]}: {err.get('msg', 'invalid')}"
            for err in detail
            if isinstance(err, dict)
        ]
        return "; ".join(messages), "validation_error", {"errors": detail}
    if "error" in body:
        return str(body["error"]), error_type, body
    return str(body), error_type, None


def _raise_for_status(response: httpx.Response) -> None:
    """Raise the client exception matching an error status code.

    Raises:
        ValidationError: For HTTP 422 responses.
        NotFoundError: For HTTP 404 responses.
        ConflictError: For HTTP 409 responses.
        ForbiddenError: For HTTP 403 responses.
        ServerError: For HTTP 5xx responses.
        APIError: For other HTTP 4xx responses.
    """
    if response.is_success:
        return

    message, error_type, details = _parse_error_response(response)
    status_code = response.status_code
    try:
        response_body = response.json()
    except ValueError:
        response_body = response.text

    if status_code in _CLIENT_ERRORS:
        raise _CLIENT_ERRORS[status_code](
            message=message,
            details=details,
            response_body=response_body,
        )
    if status_code >= 500:
        raise ServerError(
            message=message,
            status_code=status_code,
            details=details,
            response_body=response_body,
        )
    raise APIError(
        message=message,
        status_code=status_code,
        error_type=error_type,
        details=details,
        response_body=response_body,
    )


def _calculate_backoff(attempt: int, base: float = DEFAULT_RETRY_BACKOFF_BASE) -> float:
    """Exponential backoff delay (base * 2^attempt), capped at DEFAULT_RETRY_BACKOFF_MAX."""
    return min(base * (2 ** attempt), DEFAULT_RETRY_BACKOFF_MAX)


def _decode(response: httpx.Response) -> Any:
    _raise_for_status(response)
    if response.content:
        return response.json()
    return None


class _RequestPolicy:
    """Settings shared by the sync and async clients."""

    def __init__(
        self,
        base_url: str,
        timeout: float,
        retry_enabled: bool,
        max_retries: int,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.retry_enabled = retry_enabled
        self.max_retries = max_retries

    @property
    def attempts(self) -> int:
        return self.max_retries + 1 if self.retry_enabled else 1

    def should_retry_status(self, response: httpx.Response, attempt: int) -> bool:
        return (
            self.retry_enabled
            and response.status_code in RETRYABLE_STATUS_CODES
            and attempt < self.attempts - 1
        )

    def translate(self, error: httpx.TransportError, path: str) -> Exception:
        """Map an httpx transport failure onto the client hierarchy."""
        url = f"{self.base_url}{path}"
        if isinstance(error, httpx.TimeoutException):
            return TimeoutError(
                message=f"Request to {url} timed out",
                timeout=self.timeout,
                url=url,
            )
        return ConnectionError(message=f"Failed to connect to {url}", url=url, cause=error)


def _clean_params(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return params
    return {k: v for k, v in params.items() if v is not None}


class HTTPClient(_RequestPolicy):
    """Synchronous HTTP client for making API requests.

    Wraps httpx.Client with error handling and retry logic.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., for testing against the app).
        """
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.Client(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an HTTP request and return the parsed JSON response.

        Args:
            method: The HTTP method (GET, POST, etc.).
            path: The URL path (appended to base_url).
            params: Query parameters; None values are dropped.
            json: JSON body to send with the request.

        Returns:
            The parsed JSON response body, or None for empty responses.

        Raises:
            ConnectionError: If the connection fails.
            TimeoutError: If the request times out.
            APIError: If the server returns an error response.
        """
        params = _clean_params(params)

        for attempt in range(self.attempts):
            try:
                response = self._client.request(method=method, url=path, params=params, json=json)
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                if attempt >= self.attempts - 1:
                    raise self.translate(e, path) from e
                time.sleep(_calculate_backoff(attempt))
                continue

            if self.should_retry_status(response, attempt):
                time.sleep(_calculate_backoff(attempt))
                continue
            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return self.request("GET", path, params=params)

    def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return self.request("POST", path, params=params, json=json)


class AsyncHTTPClient(_RequestPolicy):
    """Asynchronous HTTP client for making API requests.

    Wraps httpx.AsyncClient with error handling and retry logic.

    Attributes:
        base_url: The base URL for all API requests.
        timeout: Request timeout in seconds.
        retry_enabled: Whether to retry on transient failures.
        max_retries: Maximum number of retry attempts.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 30.0,
        retry_enabled: bool = False,
        max_retries: int = 3,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        """Initialize the async HTTP client.

        Args:
            base_url: The base URL for all API requests.
            timeout: Request timeout in seconds.
            retry_enabled: Whether to retry on transient failures.
            max_retries: Maximum number of retry attempts.
            transport: Custom transport (e.g., httpx.ASGITransport for testing).
        """
        super().__init__(base_url, timeout, retry_enabled, max_retries)
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        """Close the HTTP client and release resources."""
        await self._client.aclose()

    async def __aenter__(self) -> "AsyncHTTPClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def request(
        self,
        method: HttpMethod,
        path: str,
        params: dict[str, Any] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Make an async HTTP request and return the parsed JSON response.

        See HTTPClient.request for arguments and exceptions.
        """
        params = _clean_params(params)

        for attempt in range(self.attempts):
            try:
                response = await self._client.request(
                    method=method, url=path, params=params, json=json
                )
            except (httpx.ConnectError, httpx.TimeoutException) as e:
                if attempt >= self.attempts - 1:
                    raise self.translate(e, path) from e
                await asyncio.sleep(_calculate_backoff(attempt))
                continue

            if self.should_retry_status(response, attempt):
                await asyncio.sleep(_calculate_backoff(attempt))
                continue
            return _decode(response)

        raise RuntimeError("Unexpected error in request retry loop")

    async def get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def post(
        self,
        path: str,
        json: dict[str, Any] | None = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        return await self.request("POST", path, params=params, json=json)
