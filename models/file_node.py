"""File node model for the virtual file system."""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field, field_validator

from models.history import DEFAULT_HISTORY_LIMIT, EditHistory, HistoryEntry


def count_lines(content: str) -> int:
    """Number of lines in `content` ("" has 0 lines, a trailing newline adds none)."""
    return len(content.splitlines())


def insert_after_line(content: str, after_line: int, text: str) -> str:
    """Return `content` with `text` inserted after line `after_line`.

    Line 0 means the top of the file. The inserted block always ends with a
    newline so it never fuses with the following line.

    Args:
        content: The current content.
        after_line: Line number after which to insert (0..line count).
        text: The text to insert.

    Returns:
        The new content.

    Raises:
        ValueError: If after_line is outside 0..line count.
    """
    lines = content.splitlines(keepends=True)
    if after_line < 0 or after_line > len(lines):
        raise ValueError(f"after_line {after_line} outside 0..{len(lines)}")

    block = text if not text or text.endswith("\n") else text + "\n"
    head = lines[:after_line]
    if head and not head[-1].endswith(("\n", "\r")):
        head[-1] += "\n"
    return "".join(head) + block + "".join(lines[after_line:])


class FileNode(BaseModel):
    """A single file in the virtual project tree.

    FileNodes are owned by the VirtualFileSystem. Every content mutation goes
    through apply_content() so that the previous content is snapshotted into
    history and the revision counter moves forward.

    Args:
        path: Canonical virtual path of this file.
        content: Current file content.
        history: Bounded stack of previous content snapshots.
        revision: Logical modification counter, starts at 0.
        created_at: When the file was created (wall clock).
        updated_at: When the file was last modified (wall clock).
    """

    path: str = Field(description="Canonical virtual path of this file")
    content: str = Field(default="", description="Current file content")
    history: EditHistory = Field(
        default_factory=EditHistory,
        description="Bounded stack of previous content snapshots",
    )
    revision: int = Field(default=0, ge=0, description="Logical modification counter")
    created_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the file was created",
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the file was last modified",
    )

    @field_validator("path")
    @classmethod
    def validate_path(cls, v: str) -> str:
        """Validate that path is in canonical absolute form.

        Args:
            v: The path value.

        Returns:
            The validated path.

        Raises:
            ValueError: If path is not absolute.
        """
        if not v.startswith("/") or v == "/":
            raise ValueError("path must be an absolute virtual path below the root")
        return v

    @classmethod
    def new(
        cls,
        path: str,
        content: str,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
    ) -> "FileNode":
        """Create a fresh node with revision 0 and empty history."""
        now = datetime.now(timezone.utc)
        return cls(
            path=path,
            content=content,
            history=EditHistory(max_size=history_limit),
            created_at=now,
            updated_at=now,
        )

    @property
    def line_count(self) -> int:
        return count_lines(self.content)

    def apply_content(self, new_content: str, operation: str) -> None:
        """Replace the content, snapshotting the old content first.

        Args:
            new_content: The content to store.
            operation: Name of the store operation performing the change.
        """
        now = datetime.now(timezone.utc)
        self.history.push(
            HistoryEntry(
                content=self.content,
                revision=self.revision,
                operation=operation,
                captured_at=now,
            )
        )
        self.content = new_content
        self.revision += 1
        self.updated_at = now

    def restore_previous(self) -> HistoryEntry:
        """Pop the latest snapshot and make it the current content.

        The revision still moves forward; undo is a new revision, not a
        rollback of the counter.

        Returns:
            The HistoryEntry that was restored.

        Raises:
            IndexError: If there is no history.
        """
        entry = self.history.pop()
        self.content = entry.content
        self.revision += 1
        self.updated_at = datetime.now(timezone.utc)
        return entry

    def get_snapshot(self) -> dict[str, Any]:
        """Return file metadata and content for API responses."""
        return {
            "path": self.path,
            "content": self.content,
            "revision": self.revision,
            "line_count": self.line_count,
            "history_depth": self.history.depth,
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
