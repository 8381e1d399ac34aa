"""Project persistence sub-client for the workspace API.

This module provides ProjectsClient and AsyncProjectsClient for the project
endpoints (/projects/*).

This is an internal module. Import from `client` instead.
"""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from client._base import AsyncBaseClient, BaseClient


class ProjectSummary(BaseModel):
    """Listing form of a stored project."""

    project_id: str
    name: str
    file_count: int
    message_count: int
    created_at: datetime


class ProjectResponse(ProjectSummary):
    """A stored project with its transcript and files."""

    messages: list[dict[str, Any]] = Field(default_factory=list)
    data: dict[str, str] = Field(default_factory=dict)


class ProjectListResponse(BaseModel):
    """Response model for listing projects, most recent first."""

    projects: list[ProjectSummary]
    total: int


def _save_body(
    authorized: bool, name: str | None, from_anonymous_work: bool
) -> dict[str, Any]:
    body: dict[str, Any] = {
        "authorized": authorized,
        "from_anonymous_work": from_anonymous_work,
    }
    if name is not None:
        body["name"] = name
    return body


class ProjectsClient(BaseClient):
    """Synchronous client for the project endpoints (/projects/*).

    Example:
        with WorkspaceClient() as client:
            project = client.projects.save(authorized=True)
            print(project.name)  # e.g. "New Design #4821"
    """

    _BASE_PATH = "/projects"

    def save(
        self,
        authorized: bool,
        name: str | None = None,
        from_anonymous_work: bool = False,
    ) -> ProjectResponse:
        """Save the current session as a project.

        Args:
            authorized: Go/no-go from the caller's session boundary.
            name: Project name; generated when omitted.
            from_anonymous_work: Whether this promotes work done before sign-in.

        Returns:
            The stored project.

        Raises:
            ForbiddenError: If authorized is False.
        """
        data = self._post(
            self._path("/save"),
            json=_save_body(authorized, name, from_anonymous_work),
        )
        return ProjectResponse(**data)

    def list_projects(self) -> ProjectListResponse:
        """List stored projects, most recent first."""
        return ProjectListResponse(**self._get(self._path()))

    def get(self, project_id: str) -> ProjectResponse:
        """Get one stored project.

        Raises:
            NotFoundError: If the project does not exist.
        """
        return ProjectResponse(**self._get(self._path(f"/{project_id}")))


class AsyncProjectsClient(AsyncBaseClient):
    """Asynchronous client for the project endpoints (/projects/*)."""

    _BASE_PATH = "/projects"

    async def save(
        self,
        authorized: bool,
        name: str | None = None,
        from_anonymous_work: bool = False,
    ) -> ProjectResponse:
        """Save the current session as a project. See ProjectsClient.save."""
        data = await self._post(
            self._path("/save"),
            json=_save_body(authorized, name, from_anonymous_work),
        )
        return ProjectResponse(**data)

    async def list_projects(self) -> ProjectListResponse:
        """List stored projects, most recent first."""
        return ProjectListResponse(**await self._get(self._path()))

    async def get(self, project_id: str) -> ProjectResponse:
        """Get one stored project."""
        return ProjectResponse(**await self._get(self._path(f"/{project_id}")))
