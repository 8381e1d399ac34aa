"""Unit tests for HistoryEntry and EditHistory.

This module tests:
- HistoryEntry: validation and serialization
- EditHistory: bounded push/pop, overflow and serialization
"""

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from models.history import DEFAULT_HISTORY_LIMIT, EditHistory, HistoryEntry


# =============================================================================
# Helper Functions
# =============================================================================


def create_history_entry(
    content: str = "v0\n",
    revision: int = 0,
    operation: str = "replace",
) -> HistoryEntry:
    """Create a HistoryEntry with sensible defaults for testing.

    Args:
        content: Snapshot content.
        revision: Revision the content belonged to.
        operation: Operation that replaced it.

    Returns:
        New HistoryEntry instance.
    """
    return HistoryEntry(
        content=content,
        revision=revision,
        operation=operation,
        captured_at=datetime(2025, 1, 15, 10, 30, tzinfo=timezone.utc),
    )


# =============================================================================
# HistoryEntry Tests
# =============================================================================


class TestHistoryEntry:
    """Test HistoryEntry validation and serialization."""

    def test_empty_operation_rejected(self):
        """Verify a blank operation name fails validation."""
        with pytest.raises(ValidationError):
            create_history_entry(operation="  ")

    def test_negative_revision_rejected(self):
        """Verify revisions are non-negative."""
        with pytest.raises(ValidationError):
            create_history_entry(revision=-1)

    def test_dict_round_trip(self):
        """Verify to_dict/from_dict preserve every field."""
        entry = create_history_entry(content="a\nb\n", revision=4, operation="insert")
        restored = HistoryEntry.from_dict(entry.to_dict())
        assert restored == entry


# =============================================================================
# EditHistory Tests
# =============================================================================


class TestEditHistoryStack:
    """Test stack behaviour of EditHistory."""

    def test_defaults(self):
        """Verify a new history is empty with the default limit."""
        history = EditHistory()
        assert history.max_size == DEFAULT_HISTORY_LIMIT
        assert not history.can_undo
        assert history.peek() is None

    def test_push_then_pop_is_lifo(self):
        """Verify the most recent snapshot comes back first."""
        history = EditHistory()
        history.push(create_history_entry(content="first", revision=0))
        history.push(create_history_entry(content="second", revision=1))

        assert history.depth == 2
        assert history.pop().content == "second"
        assert history.pop().content == "first"
        assert not history.can_undo

    def test_pop_empty_raises(self):
        """Verify popping an empty history raises IndexError."""
        with pytest.raises(IndexError):
            EditHistory().pop()

    def test_overflow_discards_oldest(self):
        """Verify the oldest snapshot is dropped when the bound is exceeded."""
        history = EditHistory(max_size=2)
        assert history.push(create_history_entry(content="a", revision=0)) is None
        assert history.push(create_history_entry(content="b", revision=1)) is None

        removed = history.push(create_history_entry(content="c", revision=2))

        assert removed.content == "a"
        assert [e.content for e in history.entries] == ["b", "c"]

    def test_constructor_trims_to_max_size(self):
        """Verify oversized entry lists are trimmed to the newest entries."""
        entries = [create_history_entry(content=str(i), revision=i) for i in range(5)]
        history = EditHistory(entries=entries, max_size=3)
        assert [e.content for e in history.entries] == ["2", "3", "4"]

    @pytest.mark.parametrize("max_size", [0, -3])
    def test_non_positive_max_size_rejected(self, max_size):
        """Verify max_size must be positive."""
        with pytest.raises(ValidationError):
            EditHistory(max_size=max_size)

    def test_clear(self):
        """Verify clear drops every snapshot."""
        history = EditHistory()
        history.push(create_history_entry())
        history.clear()
        assert history.depth == 0


class TestEditHistorySerialization:
    """Test summaries and dict conversion."""

    def test_summary_is_most_recent_first(self):
        """Verify get_summary lists newest snapshots first without content."""
        history = EditHistory()
        history.push(create_history_entry(revision=0, operation="replace"))
        history.push(create_history_entry(revision=1, operation="insert"))

        summary = history.get_summary()

        assert [s["operation"] for s in summary] == ["insert", "replace"]
        assert "content" not in summary[0]

    def test_dict_round_trip(self):
        """Verify to_dict/from_dict preserve entries and bound."""
        history = EditHistory(max_size=4)
        history.push(create_history_entry(content="x"))
        restored = EditHistory.from_dict(history.to_dict())
        assert restored.max_size == 4
        assert restored.entries == history.entries
