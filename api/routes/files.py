"""File tree endpoints for the editor and preview.

These endpoints read the project's virtual file system directly, without
going through the tool protocol. They never mutate the tree.
"""

from datetime import datetime

from fastapi import APIRouter, Query
from pydantic import BaseModel

from api.dependencies import ProjectSessionDep
from api.models import ErrorResponse
from models.paths import resolve_directory

# Create router for file endpoints
router = APIRouter(
    prefix="/files",
    tags=["files"],
)


# Request/Response Models


class FileEntry(BaseModel):
    """One file in the tree listing.

    Attributes:
        path: Canonical path.
        revision: Per-file revision.
    """

    path: str
    revision: int


class FileListResponse(BaseModel):
    """Response model for listing files.

    Attributes:
        files: Every file, sorted by path.
        total: Number of files.
        revision: Tree revision the listing was taken at.
    """

    files: list[FileEntry]
    total: int
    revision: int


class FileContentResponse(BaseModel):
    """Response model for reading one file.

    Attributes:
        path: Canonical path.
        content: Current content.
        revision: Per-file revision.
    """

    path: str
    content: str
    revision: int


class DirectoryEntry(BaseModel):
    """One child of a directory."""

    name: str
    path: str
    type: str


class DirectoryListResponse(BaseModel):
    """Response model for listing a directory.

    Attributes:
        path: Canonical directory path.
        entries: Immediate children, sorted by name.
    """

    path: str
    entries: list[DirectoryEntry]


class SnapshotResponse(BaseModel):
    """Response model for a full project snapshot.

    Attributes:
        files: Mapping of path to content.
        revisions: Mapping of path to per-file revision.
        revision: Tree revision.
        file_count: Number of files.
        taken_at: When the snapshot was taken.
    """

    files: dict[str, str]
    revisions: dict[str, int]
    revision: int
    file_count: int
    taken_at: datetime


# Route Handlers


@router.get("", response_model=FileListResponse)
async def list_files(session: ProjectSessionDep):
    """List every file with its revision.

    Args:
        session: The ProjectSession instance (injected by FastAPI).

    Returns:
        Files sorted by path plus the tree revision.
    """
    snapshot = session.get_snapshot()
    files = [
        FileEntry(path=path, revision=snapshot.revisions[path])
        for path in sorted(snapshot.files)
    ]
    return FileListResponse(files=files, total=len(files), revision=snapshot.revision)


@router.get(
    "/content",
    response_model=FileContentResponse,
    responses={404: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def read_file(session: ProjectSessionDep, path: str = Query(..., description="File path")):
    """Read one file.

    Malformed paths are answered with 422 and missing files with 404 by the
    WorkspaceError handler.
    """
    result = session.file_system.read(path)
    return FileContentResponse(**result)


@router.get(
    "/directory",
    response_model=DirectoryListResponse,
    responses={404: {"model": ErrorResponse}},
)
async def list_directory(session: ProjectSessionDep, path: str = "/"):
    """List the immediate children of a directory ("/" by default)."""
    directory = resolve_directory(path)
    entries = session.file_system.list_directory(directory)
    return DirectoryListResponse(
        path=directory,
        entries=[DirectoryEntry(**entry) for entry in entries],
    )


@router.get("/snapshot", response_model=SnapshotResponse)
async def get_snapshot(session: ProjectSessionDep):
    """Return every file's content at one consistent tree revision."""
    snapshot = session.get_snapshot()
    return SnapshotResponse(
        files=snapshot.files,
        revisions=snapshot.revisions,
        revision=snapshot.revision,
        file_count=snapshot.file_count,
        taken_at=snapshot.taken_at,
    )
