"""Display projection for tool invocations.

Pure functions from (tool name, arguments, lifecycle state) to what the chat
transcript shows. Nothing here reads or writes the file system, and nothing
here raises: every input has a fallback label.
"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel

from models.paths import basename


class StatusIndicator(str, Enum):
    """Visual affordance next to a tool label."""

    BUSY = "busy"
    SUCCESS = "success"
    ERROR = "error"


class ToolStatusDisplay(BaseModel):
    """What the transcript renders for one invocation."""

    label: str
    indicator: StatusIndicator


# Lifecycle states as well as the transcript wire states
_DONE_STATES = {"completed", "result"}
_FAILED_STATES = {"failed"}


def _filename(args: dict[str, Any], key: str) -> str:
    return basename(args.get(key))


def get_tool_display_message(tool_name: Any, args: Any) -> str:
    """Return the human-readable label for a tool invocation.

    Examples:
        get_tool_display_message("str_replace_editor",
                                 {"command": "create", "path": "src/App.tsx"})
        -> "Creating App.tsx"

        get_tool_display_message("unknown_tool", {"foo": "bar"})
        -> "unknown_tool"

    Args:
        tool_name: Name of the tool that was called.
        args: Argument mapping; args["command"] selects the sub-command.

    Returns:
        A non-empty label.
    """
    name = tool_name if isinstance(tool_name, str) and tool_name else "tool"
    if not isinstance(args, dict):
        args = {}
    command = args.get("command")

    if name == "str_replace_editor":
        filename = _filename(args, "path")
        if command == "create":
            return f"Creating {filename}" if filename else "Creating file"
        if command in ("str_replace", "insert"):
            return f"Editing {filename}" if filename else "Editing file"
        if command == "view":
            return f"Viewing {filename}" if filename else "Viewing file"
        if command == "undo_edit":
            return "Undoing edit"
        return name

    if name == "file_manager":
        if command == "rename":
            old_filename = _filename(args, "old_path")
            new_filename = _filename(args, "new_path")
            if old_filename and new_filename:
                return f"Renaming {old_filename} → {new_filename}"
            return "Renaming file"
        if command == "delete":
            filename = _filename(args, "path")
            return f"Deleting {filename}" if filename else "Deleting file"
        return name

    return name


def get_status_indicator(state: Any, result: Optional[Any] = None) -> StatusIndicator:
    """Choose the indicator for a lifecycle (or transcript wire) state.

    A completed invocation without a result payload renders as busy, the
    same as one still in flight.
    """
    state_value = state.value if isinstance(state, Enum) else state
    if not isinstance(state_value, str):
        return StatusIndicator.BUSY
    if state_value in _FAILED_STATES:
        return StatusIndicator.ERROR
    if state_value in _DONE_STATES and result is not None:
        return StatusIndicator.SUCCESS
    return StatusIndicator.BUSY


def render_tool_status(
    tool_name: Any,
    args: Any,
    state: Any,
    result: Optional[Any] = None,
) -> ToolStatusDisplay:
    """Project an invocation onto its label and indicator."""
    return ToolStatusDisplay(
        label=get_tool_display_message(tool_name, args),
        indicator=get_status_indicator(state, result),
    )
