"""Client response models for the workspace API client.

This module re-exports the shared models from the API layer and defines
client-specific response models that don't exist there.
"""

from pydantic import BaseModel, Field

# Re-export common models from API layer for client convenience
from api.models import ErrorResponse, InvocationResponse, ToolDisplayResponse

__all__ = [
    # Re-exported from api.models
    "ErrorResponse",
    "InvocationResponse",
    "ToolDisplayResponse",
    # Client-specific models
    "HealthResponse",
]


class HealthResponse(BaseModel):
    """Response model for the API health check.

    Attributes:
        status: Health status ("healthy").
    """

    status: str = Field(..., description="Health status")
