"""Unit tests for the tool display projection.

Labels must be total: every (tool_name, args) pair yields a non-empty
string and nothing raises.
"""

import pytest

from models.display import (
    StatusIndicator,
    get_status_indicator,
    get_tool_display_message,
    render_tool_status,
)
from models.invocation import LifecycleState


class TestEditorLabels:
    """Test labels for str_replace_editor commands."""

    def test_create(self):
        """Verify create shows the file name only."""
        label = get_tool_display_message(
            "str_replace_editor", {"command": "create", "path": "src/components/App.tsx"}
        )
        assert label == "Creating App.tsx"

    @pytest.mark.parametrize("command", ["str_replace", "insert"])
    def test_edit(self, command):
        """Verify str_replace and insert both read as editing."""
        label = get_tool_display_message(
            "str_replace_editor", {"command": command, "path": "/src/styles.css"}
        )
        assert label == "Editing styles.css"

    def test_view(self):
        """Verify view shows the file name."""
        label = get_tool_display_message(
            "str_replace_editor", {"command": "view", "path": "/index.html"}
        )
        assert label == "Viewing index.html"

    def test_undo_never_shows_filename(self):
        """Verify undo_edit ignores its path."""
        label = get_tool_display_message(
            "str_replace_editor", {"command": "undo_edit", "path": "/src/App.tsx"}
        )
        assert label == "Undoing edit"

    @pytest.mark.parametrize(
        "command, expected",
        [
            ("create", "Creating file"),
            ("str_replace", "Editing file"),
            ("insert", "Editing file"),
            ("view", "Viewing file"),
        ],
    )
    @pytest.mark.parametrize("path", [None, "", 17])
    def test_fallback_without_path(self, command, expected, path):
        """Verify absent, empty or non-string paths use the generic label."""
        args = {"command": command}
        if path is not None:
            args["path"] = path
        assert get_tool_display_message("str_replace_editor", args) == expected

    def test_unknown_command_shows_tool_name(self):
        """Verify an unrecognized command falls back to the tool name."""
        assert get_tool_display_message("str_replace_editor", {"command": "zap"}) == (
            "str_replace_editor"
        )


class TestFileManagerLabels:
    """Test labels for file_manager commands."""

    def test_rename(self):
        """Verify rename shows both file names."""
        label = get_tool_display_message(
            "file_manager",
            {"command": "rename", "old_path": "src/Old.tsx", "new_path": "src/New.tsx"},
        )
        assert label == "Renaming Old.tsx → New.tsx"

    def test_rename_missing_new_path(self):
        """Verify rename without new_path uses the generic label."""
        label = get_tool_display_message(
            "file_manager", {"command": "rename", "old_path": "src/Old.tsx"}
        )
        assert label == "Renaming file"

    def test_delete(self):
        """Verify delete shows the file name."""
        label = get_tool_display_message(
            "file_manager", {"command": "delete", "path": "/src/App.tsx"}
        )
        assert label == "Deleting App.tsx"

    def test_delete_without_path(self):
        """Verify delete without a path uses the generic label."""
        assert get_tool_display_message("file_manager", {"command": "delete"}) == "Deleting file"


class TestTotality:
    """Test that the projection never raises and never returns empty."""

    def test_unknown_tool(self):
        """Verify an unknown tool name is returned unmodified."""
        assert get_tool_display_message("unknown_tool", {"foo": "bar"}) == "unknown_tool"

    @pytest.mark.parametrize(
        "tool_name, args",
        [
            ("", {}),
            (None, None),
            (42, {"command": "create"}),
            ("str_replace_editor", None),
            ("str_replace_editor", "not a mapping"),
            ("file_manager", {"command": ["rename"]}),
            ("file_manager", {"command": "rename", "old_path": 1, "new_path": 2}),
        ],
    )
    def test_labels_are_total(self, tool_name, args):
        """Verify odd inputs still produce a non-empty label."""
        label = get_tool_display_message(tool_name, args)
        assert isinstance(label, str)
        assert label


class TestStatusIndicator:
    """Test indicator selection."""

    @pytest.mark.parametrize("state", [LifecycleState.PENDING, LifecycleState.EXECUTING])
    def test_in_flight_is_busy(self, state):
        """Verify pending and executing render busy."""
        assert get_status_indicator(state) == StatusIndicator.BUSY

    def test_completed_with_result(self):
        """Verify a completed invocation with a result renders success."""
        assert get_status_indicator(LifecycleState.COMPLETED, {"message": "ok"}) == (
            StatusIndicator.SUCCESS
        )

    def test_completed_without_result_is_busy(self):
        """Verify a completed invocation without a result looks pending."""
        assert get_status_indicator(LifecycleState.COMPLETED, None) == get_status_indicator(
            LifecycleState.PENDING
        )

    def test_failed_is_error(self):
        """Verify failed invocations render the error indicator."""
        assert get_status_indicator(LifecycleState.FAILED, {"error": "NotFound"}) == (
            StatusIndicator.ERROR
        )

    @pytest.mark.parametrize(
        "state, result, expected",
        [
            ("call", None, StatusIndicator.BUSY),
            ("result", {"message": "ok"}, StatusIndicator.SUCCESS),
            ("result", None, StatusIndicator.BUSY),
        ],
    )
    def test_transcript_wire_states(self, state, result, expected):
        """Verify the transcript's call/result states are understood."""
        assert get_status_indicator(state, result) == expected

    @pytest.mark.parametrize("state", [None, 3, ["completed"], {"state": "completed"}])
    def test_unrecognized_state_is_busy(self, state):
        """Verify junk states render busy rather than raising."""
        assert get_status_indicator(state, {"message": "ok"}) == StatusIndicator.BUSY


class TestRenderToolStatus:
    """Test the combined projection."""

    def test_render(self):
        """Verify label and indicator are combined."""
        display = render_tool_status(
            "str_replace_editor",
            {"command": "create", "path": "/src/App.tsx"},
            LifecycleState.COMPLETED,
            {"message": "File created: /src/App.tsx"},
        )
        assert display.label == "Creating App.tsx"
        assert display.indicator == StatusIndicator.SUCCESS
