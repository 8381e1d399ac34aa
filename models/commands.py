"""Tool command models.

Every (tool_name, command) pair the agent may issue has exactly one command
model here. parse_command() turns a loose argument mapping into one of these
models, so argument errors surface before the file system is touched, and
each model knows which store operation it performs.

Supported commands:
    str_replace_editor: create, str_replace, insert, view, undo_edit
    file_manager: rename, delete
"""

from abc import abstractmethod
from enum import Enum
from typing import TYPE_CHECKING, Any, ClassVar, Optional

from pydantic import BaseModel, ValidationError

from models import paths
from models.errors import MissingArgumentError, UnsupportedCommandError

if TYPE_CHECKING:
    from models.file_system import VirtualFileSystem


class ToolName(str, Enum):
    """Tools the agent can call."""

    STR_REPLACE_EDITOR = "str_replace_editor"
    FILE_MANAGER = "file_manager"


class ToolCommand(BaseModel):
    """Base class for all parsed tool commands.

    Subclasses declare which tool and command they implement, which
    arguments are required, and which of their fields hold paths.
    """

    tool_name: ClassVar[ToolName]
    command: ClassVar[str]
    required_args: ClassVar[tuple[str, ...]] = ()
    path_fields: ClassVar[tuple[str, ...]] = ()

    class Config:
        extra = "ignore"

    def resolve_paths(self) -> None:
        """Canonicalize every path field in place.

        Raises:
            InvalidPathError: If a path field is malformed.
        """
        for field_name in self.path_fields:
            setattr(self, field_name, paths.resolve(getattr(self, field_name)))

    def affected_paths(self) -> list[str]:
        """Paths whose FileNodes this command reads or writes."""
        return [getattr(self, name) for name in self.path_fields]

    @abstractmethod
    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        """Run this command against the file system.

        Returns:
            JSON-serializable result payload, always including "message".

        Raises:
            WorkspaceError: If the store rejects the operation.
        """


class CreateFileCommand(ToolCommand):
    """str_replace_editor.create: create a file with initial content."""

    tool_name = ToolName.STR_REPLACE_EDITOR
    command = "create"
    required_args = ("path", "content")
    path_fields = ("path",)

    path: str
    content: str

    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        result = file_system.create(self.path, self.content)
        return {"message": f"File created: {self.path}", **result}


class StrReplaceCommand(ToolCommand):
    """str_replace_editor.str_replace: replace a unique snippet."""

    tool_name = ToolName.STR_REPLACE_EDITOR
    command = "str_replace"
    required_args = ("path", "old_str", "new_str")
    path_fields = ("path",)

    path: str
    old_str: str
    new_str: str

    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        result = file_system.replace(self.path, self.old_str, self.new_str)
        return {"message": f"Replaced text in {self.path}", **result}


class InsertCommand(ToolCommand):
    """str_replace_editor.insert: insert text after a line."""

    tool_name = ToolName.STR_REPLACE_EDITOR
    command = "insert"
    required_args = ("path", "insert_line", "new_str")
    path_fields = ("path",)

    path: str
    insert_line: int
    new_str: str

    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        result = file_system.insert(self.path, self.insert_line, self.new_str)
        return {
            "message": f"Inserted text after line {self.insert_line} of {self.path}",
            **result,
        }


class ViewCommand(ToolCommand):
    """str_replace_editor.view: show a file (or a line range) or list a directory."""

    tool_name = ToolName.STR_REPLACE_EDITOR
    command = "view"
    required_args = ("path",)

    path: str
    view_range: Optional[tuple[int, int]] = None

    def resolve_paths(self) -> None:
        # The root may be viewed as a directory
        self.path = paths.resolve_directory(self.path)

    def affected_paths(self) -> list[str]:
        return [self.path]

    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        result = file_system.view(self.path, self.view_range)
        return {"message": f"Viewed {self.path}", **result}


class UndoEditCommand(ToolCommand):
    """str_replace_editor.undo_edit: revert the latest edit of a file."""

    tool_name = ToolName.STR_REPLACE_EDITOR
    command = "undo_edit"
    required_args = ("path",)
    path_fields = ("path",)

    path: str

    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        result = file_system.undo(self.path)
        return {"message": f"Undid last edit to {self.path}", **result}


class RenameCommand(ToolCommand):
    """file_manager.rename: move a file or directory."""

    tool_name = ToolName.FILE_MANAGER
    command = "rename"
    required_args = ("old_path", "new_path")
    path_fields = ("old_path", "new_path")

    old_path: str
    new_path: str

    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        result = file_system.rename(self.old_path, self.new_path)
        return {
            "message": f"Renamed {self.old_path} to {self.new_path}",
            "success": True,
            **result,
        }


class DeleteCommand(ToolCommand):
    """file_manager.delete: delete a file or directory."""

    tool_name = ToolName.FILE_MANAGER
    command = "delete"
    required_args = ("path",)
    path_fields = ("path",)

    path: str

    def apply(self, file_system: "VirtualFileSystem") -> dict[str, Any]:
        result = file_system.delete(self.path)
        return {"message": f"Deleted {self.path}", "success": True, **result}


COMMAND_TYPES: dict[tuple[str, str], type[ToolCommand]] = {
    (cls.tool_name.value, cls.command): cls
    for cls in (
        CreateFileCommand,
        StrReplaceCommand,
        InsertCommand,
        ViewCommand,
        UndoEditCommand,
        RenameCommand,
        DeleteCommand,
    )
}


def _normalize_args(command_type: type[ToolCommand], args: dict[str, Any]) -> dict[str, Any]:
    normalized = dict(args)
    # Anthropic-style editors send the initial content as file_text
    if command_type is CreateFileCommand and normalized.get("content") is None:
        if normalized.get("file_text") is not None:
            normalized["content"] = normalized["file_text"]
    return normalized


def parse_command(
    tool_name: str, command: Optional[str], args: Optional[dict[str, Any]]
) -> ToolCommand:
    """Parse a loose tool invocation into its command model.

    Validation order: the (tool_name, command) pair, then required
    arguments, then argument shapes, then paths. Nothing here touches the
    file system.

    Args:
        tool_name: Name of the tool the agent called.
        command: Sub-command; when None it is taken from args["command"].
        args: Argument mapping as sent by the agent.

    Returns:
        The parsed ToolCommand with canonical paths.

    Raises:
        UnsupportedCommandError: If the (tool_name, command) pair is unknown.
        MissingArgumentError: If a required argument is absent or has the
            wrong shape.
        InvalidPathError: If a path argument is malformed.
    """
    args = dict(args or {})
    if command is None:
        command = args.get("command")

    command_type = COMMAND_TYPES.get((tool_name, command)) if isinstance(command, str) else None
    if command_type is None:
        raise UnsupportedCommandError(tool_name, command)

    args = _normalize_args(command_type, args)
    missing = [name for name in command_type.required_args if args.get(name) is None]
    if missing:
        raise MissingArgumentError(tool_name, command, missing)

    try:
        parsed = command_type.model_validate(args)
    except ValidationError as e:
        invalid = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise MissingArgumentError(tool_name, command, invalid or ["<arguments>"]) from e

    parsed.resolve_paths()
    return parsed
