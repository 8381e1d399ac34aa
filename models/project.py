"""Project snapshot and persistence hand-off models.

A ProjectSnapshot is what the editor and preview render and what gets handed
to the persistence collaborator when a session is promoted (anonymous work
saved after sign-in, or an explicit save). The collaborator itself lives
outside this service; ProjectStore is the interface it must satisfy.
"""

import random
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator


class ProjectSnapshot(BaseModel):
    """The complete set of files at one tree revision.

    Args:
        files: Mapping of canonical path to content.
        revisions: Mapping of canonical path to file revision.
        revision: Tree revision the snapshot was taken at.
        taken_at: When the snapshot was taken (wall clock).
    """

    files: dict[str, str] = Field(default_factory=dict)
    revisions: dict[str, int] = Field(default_factory=dict)
    revision: int = Field(default=0, ge=0)
    taken_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def file_count(self) -> int:
        return len(self.files)

    def to_dict(self) -> dict[str, Any]:
        """Convert this snapshot to a dictionary.

        Returns:
            Dictionary representation suitable for serialization.
        """
        return {
            "files": dict(self.files),
            "revisions": dict(self.revisions),
            "revision": self.revision,
            "taken_at": self.taken_at.isoformat(),
        }


def default_project_name(
    from_anonymous_work: bool = False,
    now: Optional[datetime] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate the label used when a project is saved without a name.

    Fresh projects get "New Design #N" with a random N below 100000; promoted
    anonymous work gets "Design from <time>".

    Args:
        from_anonymous_work: Whether the project carries work done before sign-in.
        now: Time to stamp into the name (defaults to local now).
        rng: Random source for the sequence number.

    Returns:
        The generated project name.
    """
    if from_anonymous_work:
        moment = now or datetime.now()
        return f"Design from {moment.strftime('%I:%M:%S %p').lstrip('0')}"
    number = (rng or random).randrange(100000)
    return f"New Design #{number}"


class ProjectCreateRequest(BaseModel):
    """Payload handed to the project-creation interface.

    Args:
        name: Project name.
        messages: The chat transcript, oldest first.
        data: Mapping of path to file content.
    """

    name: str = Field(description="Project name")
    messages: list[dict[str, Any]] = Field(
        default_factory=list, description="Chat transcript, oldest first"
    )
    data: dict[str, str] = Field(
        default_factory=dict, description="Mapping of path to file content"
    )

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        """Validate that name is non-empty.

        Raises:
            ValueError: If name is empty or whitespace.
        """
        if not v or not v.strip():
            raise ValueError("name cannot be empty")
        return v.strip()


class ProjectRecord(BaseModel):
    """A project as returned by the persistence collaborator."""

    project_id: str = Field(default_factory=lambda: str(uuid4()))
    name: str
    messages: list[dict[str, Any]] = Field(default_factory=list)
    data: dict[str, str] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ProjectStore(ABC):
    """Interface of the external project-creation collaborator."""

    @abstractmethod
    def create_project(self, request: ProjectCreateRequest) -> ProjectRecord:
        """Persist a project and return its stored record.

        Args:
            request: The name, transcript and files to persist.

        Returns:
            The created ProjectRecord.
        """

    @abstractmethod
    def list_projects(self) -> list[ProjectRecord]:
        """Return stored projects, most recent first."""

    @abstractmethod
    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        """Return one stored project, or None if it does not exist."""


class InMemoryProjectStore(ProjectStore):
    """ProjectStore kept in process memory.

    Used by the HTTP service when no real backing store is wired in, and by
    the tests.
    """

    def __init__(self) -> None:
        self._projects: list[ProjectRecord] = []

    def create_project(self, request: ProjectCreateRequest) -> ProjectRecord:
        record = ProjectRecord(
            name=request.name,
            messages=list(request.messages),
            data=dict(request.data),
        )
        self._projects.append(record)
        return record

    def list_projects(self) -> list[ProjectRecord]:
        return list(reversed(self._projects))

    def get_project(self, project_id: str) -> Optional[ProjectRecord]:
        for record in self._projects:
            if record.project_id == project_id:
                return record
        return None
