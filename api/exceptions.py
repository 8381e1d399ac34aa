"""Exception handlers for the workspace FastAPI application.

This module converts Python exceptions into consistent JSON responses of the
form {"error": ..., "detail": ..., ...}.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from models.errors import ErrorKind, WorkspaceError
from models.session import InvocationNotFoundError, PersistenceRefusedError

logger = logging.getLogger(__name__)


# HTTP status for each recoverable workspace error kind
WORKSPACE_ERROR_STATUS: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.PATH_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_PATH: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.MISSING_ARGUMENT: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.UNSUPPORTED_COMMAND: status.HTTP_422_UNPROCESSABLE_ENTITY,
    ErrorKind.NO_MATCH: status.HTTP_400_BAD_REQUEST,
    ErrorKind.LINE_OUT_OF_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NO_HISTORY: status.HTTP_400_BAD_REQUEST,
}


async def workspace_error_handler(request: Request, exc: WorkspaceError):
    """Handle WorkspaceError exceptions raised outside tool execution.

    Tool endpoints never reach this handler: a failed tool call is reported
    in the invocation body. Direct file-system reads (e.g. GET /files/content)
    do.

    Args:
        request: The incoming request that triggered the error.
        exc: The WorkspaceError exception.

    Returns:
        JSONResponse with the status mapped from the error kind.
    """
    return JSONResponse(
        status_code=WORKSPACE_ERROR_STATUS.get(exc.kind, status.HTTP_400_BAD_REQUEST),
        content={
            "error": exc.kind.value,
            "detail": exc.message,
            "kind": exc.kind.value,
        },
    )


async def invocation_not_found_handler(request: Request, exc: InvocationNotFoundError):
    """Handle InvocationNotFoundError exceptions with a 404."""
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={
            "error": "Invocation Not Found",
            "detail": str(exc),
            "invocation_id": exc.invocation_id,
        },
    )


async def persistence_refused_handler(request: Request, exc: PersistenceRefusedError):
    """Handle PersistenceRefusedError exceptions.

    Returns a 403: the session boundary did not authorize saving.
    """
    return JSONResponse(
        status_code=status.HTTP_403_FORBIDDEN,
        content={
            "error": "Persistence Refused",
            "detail": exc.message,
            "suggestion": "Sign in before saving the project",
        },
    )


async def validation_exception_handler(request: Request, exc: ValidationError):
    """Handle Pydantic validation errors.

    Args:
        request: The incoming request that triggered the error.
        exc: The ValidationError exception.

    Returns:
        JSONResponse with validation error details.
    """
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "detail": "The request data failed validation",
            "validation_errors": exc.errors(include_url=False, include_context=False),
        },
    )


async def value_error_handler(request: Request, exc: ValueError):
    """Handle ValueError exceptions.

    ValueErrors typically indicate invalid input values that passed Pydantic
    validation but failed business logic validation.
    """
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "Invalid Value",
            "detail": str(exc),
            "type": "ValueError",
        },
    )


async def runtime_error_handler(request: Request, exc: RuntimeError):
    """Handle RuntimeError exceptions."""
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Runtime Error",
            "detail": str(exc),
            "type": "RuntimeError",
        },
    )


async def generic_exception_handler(request: Request, exc: Exception):
    """Handle any unhandled exceptions.

    This is a catch-all handler for unexpected errors. It prevents
    stack traces from being exposed to clients.
    """
    logger.error(f"Unhandled exception on {request.url.path}: {exc}", exc_info=exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "detail": "An unexpected error occurred",
            "type": type(exc).__name__,
        },
    )
