"""Per-file edit history models.

This module provides the models that back `undo_edit`:
- HistoryEntry: Captures the content of a file before a single mutation
- EditHistory: A bounded stack of HistoryEntry snapshots

Each mutation of a FileNode pushes the full previous content, so undo is a
plain restore rather than a reverse patch. The stack is bounded; when it
overflows the oldest snapshot is discarded and can no longer be restored.
"""

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

DEFAULT_HISTORY_LIMIT = 50


class HistoryEntry(BaseModel):
    """Snapshot of a file's content taken before a mutation.

    Args:
        content: The full content of the file before the mutation.
        revision: The file revision the content belonged to.
        operation: The store operation that replaced this content
            (e.g., "replace", "insert").
        captured_at: Wall-clock time the snapshot was taken.

    Examples:
        HistoryEntry(
            content="export default function App() {}\\n",
            revision=3,
            operation="replace",
            captured_at=datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc),
        )
    """

    content: str = Field(description="File content before the mutation")
    revision: int = Field(ge=0, description="Revision the content belonged to")
    operation: str = Field(description="Store operation that replaced this content")
    captured_at: datetime = Field(description="When the snapshot was taken")

    @field_validator("operation")
    @classmethod
    def validate_operation(cls, v: str) -> str:
        """Validate that operation is non-empty.

        Args:
            v: The operation value.

        Returns:
            The validated operation.

        Raises:
            ValueError: If operation is empty or whitespace.
        """
        if not v or not v.strip():
            raise ValueError("operation cannot be empty")
        return v

    def to_dict(self) -> dict[str, Any]:
        """Convert this entry to a dictionary.

        Returns:
            Dictionary representation suitable for serialization.
        """
        return {
            "content": self.content,
            "revision": self.revision,
            "operation": self.operation,
            "captured_at": self.captured_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "HistoryEntry":
        """Create a HistoryEntry from a dictionary.

        Args:
            data: Dictionary containing entry data.

        Returns:
            New HistoryEntry instance.
        """
        return cls(
            content=data["content"],
            revision=data["revision"],
            operation=data["operation"],
            captured_at=datetime.fromisoformat(data["captured_at"]),
        )


class EditHistory(BaseModel):
    """Bounded stack of content snapshots for one file.

    - When a file is mutated, push() adds the previous content
    - When undo_edit runs, pop() returns the most recent snapshot
    - When the stack is full, the oldest snapshot is discarded

    There is no redo: undoing is itself a mutation of current content, and
    the snapshot it restores is consumed.

    Args:
        entries: Snapshots available for undo (most recent at end).
        max_size: Maximum number of snapshots to keep.

    Examples:
        history = EditHistory(max_size=20)
        history.push(entry)
        if history.can_undo:
            previous = history.pop()
    """

    entries: list[HistoryEntry] = Field(
        default_factory=list,
        description="Snapshots available for undo (most recent at end)",
    )
    max_size: int = Field(
        default=DEFAULT_HISTORY_LIMIT,
        description="Maximum number of snapshots to keep",
    )

    @field_validator("max_size")
    @classmethod
    def validate_max_size(cls, v: int) -> int:
        """Validate that max_size is positive.

        Args:
            v: The max_size value.

        Returns:
            The validated max_size.

        Raises:
            ValueError: If max_size is not positive.
        """
        if v <= 0:
            raise ValueError("max_size must be positive")
        return v

    @model_validator(mode="after")
    def trim_entries_to_max_size(self) -> "EditHistory":
        """Trim entries if they exceed max_size.

        Returns:
            The validated EditHistory.
        """
        if len(self.entries) > self.max_size:
            # Keep most recent entries
            self.entries = self.entries[-self.max_size :]
        return self

    @property
    def can_undo(self) -> bool:
        """True if at least one snapshot is available."""
        return len(self.entries) > 0

    @property
    def depth(self) -> int:
        """Number of snapshots currently held."""
        return len(self.entries)

    def push(self, entry: HistoryEntry) -> Optional[HistoryEntry]:
        """Push a snapshot taken before a mutation.

        Args:
            entry: The HistoryEntry to add.

        Returns:
            The discarded oldest entry if max_size was exceeded, None otherwise.
        """
        self.entries.append(entry)

        removed = None
        if len(self.entries) > self.max_size:
            removed = self.entries.pop(0)

        return removed

    def pop(self) -> HistoryEntry:
        """Remove and return the most recent snapshot.

        Returns:
            The most recent HistoryEntry.

        Raises:
            IndexError: If the history is empty.
        """
        if not self.entries:
            raise IndexError("pop from empty edit history")
        return self.entries.pop()

    def peek(self) -> Optional[HistoryEntry]:
        """Return the most recent snapshot without removing it."""
        return self.entries[-1] if self.entries else None

    def clear(self) -> None:
        """Drop all snapshots."""
        self.entries.clear()

    def get_summary(self) -> list[dict[str, Any]]:
        """Get a summary of the snapshots available for undo.

        Returns:
            List of dicts with revision, operation and captured_at,
            ordered most recent first.
        """
        return [
            {
                "revision": entry.revision,
                "operation": entry.operation,
                "captured_at": entry.captured_at.isoformat(),
            }
            for entry in reversed(self.entries)
        ]

    def to_dict(self) -> dict[str, Any]:
        """Convert this history to a dictionary.

        Returns:
            Dictionary representation suitable for serialization.
        """
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "max_size": self.max_size,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "EditHistory":
        """Create an EditHistory from a dictionary.

        Args:
            data: Dictionary containing history data.

        Returns:
            New EditHistory instance.
        """
        return cls(
            entries=[HistoryEntry.from_dict(e) for e in data.get("entries", [])],
            max_size=data.get("max_size", DEFAULT_HISTORY_LIMIT),
        )
