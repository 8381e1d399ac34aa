"""Error taxonomy for the virtual file system and tool protocol.

Every failure a tool invocation can run into maps to exactly one ErrorKind.
The store raises these exceptions; the CommandInterpreter catches them and
reports a failed CommandOutcome instead of propagating them.

Exception Hierarchy:
    WorkspaceError (base, ValueError)
    ├── InvalidPathError
    ├── PathExistsError
    ├── NotFoundError
    ├── NoMatchError
    ├── LineOutOfRangeError
    ├── NoHistoryError
    ├── MissingArgumentError
    └── UnsupportedCommandError

    InvariantViolationError (RuntimeError) - programming defect, never user-facing
"""

from enum import Enum


class ErrorKind(str, Enum):
    """Kind of a recoverable tool failure."""

    INVALID_PATH = "InvalidPath"
    PATH_EXISTS = "PathExists"
    NOT_FOUND = "NotFound"
    NO_MATCH = "NoMatch"
    LINE_OUT_OF_RANGE = "LineOutOfRange"
    NO_HISTORY = "NoHistory"
    MISSING_ARGUMENT = "MissingArgument"
    UNSUPPORTED_COMMAND = "UnsupportedCommand"


class WorkspaceError(ValueError):
    """Base class for all recoverable workspace errors.

    Attributes:
        kind: The ErrorKind this exception represents.
        message: Human-readable error description.
    """

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidPathError(WorkspaceError):
    """Raised when a raw path cannot be normalized into a VirtualPath."""

    kind = ErrorKind.INVALID_PATH

    def __init__(self, raw_path: object, reason: str) -> None:
        self.raw_path = raw_path
        self.reason = reason
        super().__init__(f"Invalid path {raw_path!r}: {reason}")


class PathExistsError(WorkspaceError):
    """Raised when a create or rename targets an occupied path."""

    kind = ErrorKind.PATH_EXISTS

    def __init__(self, path: str, reason: str | None = None) -> None:
        self.path = path
        message = f"Path already exists: {path}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class NotFoundError(WorkspaceError):
    """Raised when an operation targets a path with no node."""

    kind = ErrorKind.NOT_FOUND

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"File not found: {path}")


class NoMatchError(WorkspaceError):
    """Raised when a replace target does not occur exactly once.

    Attributes:
        occurrences: How many times the match text was found (0 or >1).
    """

    kind = ErrorKind.NO_MATCH

    def __init__(self, path: str, occurrences: int) -> None:
        self.path = path
        self.occurrences = occurrences
        if occurrences == 0:
            detail = "old_str was not found"
        else:
            detail = f"old_str occurs {occurrences} times; it must be unique"
        super().__init__(f"No unique match in {path}: {detail}")


class LineOutOfRangeError(WorkspaceError):
    """Raised when an insert or view addresses a line outside the file."""

    kind = ErrorKind.LINE_OUT_OF_RANGE

    def __init__(self, path: str, line: int, line_count: int) -> None:
        self.path = path
        self.line = line
        self.line_count = line_count
        super().__init__(
            f"Line {line} is out of range for {path} (file has {line_count} lines)"
        )


class NoHistoryError(WorkspaceError):
    """Raised when undo is requested for a file without edit history."""

    kind = ErrorKind.NO_HISTORY

    def __init__(self, path: str) -> None:
        self.path = path
        super().__init__(f"No edit history to undo for {path}")


class MissingArgumentError(WorkspaceError):
    """Raised when a tool invocation lacks a required argument."""

    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, tool_name: str, command: str, arguments: list[str]) -> None:
        self.tool_name = tool_name
        self.command = command
        self.arguments = arguments
        super().__init__(
            f"{tool_name}.{command} is missing required argument(s): "
            f"{', '.join(arguments)}"
        )


class UnsupportedCommandError(WorkspaceError):
    """Raised for a (tool_name, command) pair outside the protocol."""

    kind = ErrorKind.UNSUPPORTED_COMMAND

    def __init__(self, tool_name: str, command: object) -> None:
        self.tool_name = tool_name
        self.command = command
        super().__init__(f"Unsupported command {command!r} for tool {tool_name!r}")


class InvariantViolationError(RuntimeError):
    """Raised when the file tree breaks one of its own invariants.

    This signals a defect in the store, not a bad request.
    """
