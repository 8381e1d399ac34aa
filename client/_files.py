"""File tree sub-client for the workspace API.

This module provides FilesClient and AsyncFilesClient for the read-only
file endpoints (/files/*) used by the editor and preview.

This is an internal module. Import from `client` instead.
"""

from datetime import datetime

from pydantic import BaseModel

from client._base import AsyncBaseClient, BaseClient


class FileEntry(BaseModel):
    """One file in the tree listing."""

    path: str
    revision: int


class FileListResponse(BaseModel):
    """Response model for listing files.

    Attributes:
        files: Every file, sorted by path.
        total: Number of files.
        revision: Tree revision.
    """

    files: list[FileEntry]
    total: int
    revision: int


class FileContentResponse(BaseModel):
    """Response model for reading one file."""

    path: str
    content: str
    revision: int


class DirectoryEntry(BaseModel):
    """One child of a directory; type is "file" or "directory"."""

    name: str
    path: str
    type: str


class DirectoryListResponse(BaseModel):
    """Response model for listing a directory."""

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


class FilesClient(BaseClient):
    """Synchronous client for the file endpoints (/files/*).

    Example:
        with WorkspaceClient() as client:
            for entry in client.files.list_files().files:
                print(entry.path, entry.revision)
    """

    _BASE_PATH = "/files"

    def list_files(self) -> FileListResponse:
        """List every file with its revision."""
        return FileListResponse(**self._get(self._path()))

    def read(self, path: str) -> FileContentResponse:
        """Read one file.

        Raises:
            NotFoundError: If no file exists at the path.
            ValidationError: If the path is malformed.
        """
        return FileContentResponse(**self._get(self._path("/content"), params={"path": path}))

    def list_directory(self, path: str = "/") -> DirectoryListResponse:
        """List the immediate children of a directory.

        Raises:
            NotFoundError: If the directory does not exist.
        """
        data = self._get(self._path("/directory"), params={"path": path})
        return DirectoryListResponse(**data)

    def snapshot(self) -> SnapshotResponse:
        """Get every file's content at one tree revision."""
        return SnapshotResponse(**self._get(self._path("/snapshot")))


class AsyncFilesClient(AsyncBaseClient):
    """Asynchronous client for the file endpoints (/files/*)."""

    _BASE_PATH = "/files"

    async def list_files(self) -> FileListResponse:
        """List every file with its revision."""
        return FileListResponse(**await self._get(self._path()))

    async def read(self, path: str) -> FileContentResponse:
        """Read one file."""
        data = await self._get(self._path("/content"), params={"path": path})
        return FileContentResponse(**data)

    async def list_directory(self, path: str = "/") -> DirectoryListResponse:
        """List the immediate children of a directory."""
        data = await self._get(self._path("/directory"), params={"path": path})
        return DirectoryListResponse(**data)

    async def snapshot(self) -> SnapshotResponse:
        """Get every file's content at one tree revision."""
        return SnapshotResponse(**await self._get(self._path("/snapshot")))
