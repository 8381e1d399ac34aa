"""Command interpreter for agent tool invocations."""

import logging
from typing import Any, Optional

from pydantic import BaseModel

from models.commands import ToolCommand, parse_command
from models.errors import ErrorKind, WorkspaceError
from models.file_system import VirtualFileSystem

logger = logging.getLogger(__name__)


class CommandOutcome(BaseModel):
    """Result of executing one tool invocation.

    Args:
        ok: Whether the command succeeded.
        value: Result payload when ok.
        error_kind: Failure kind when not ok.
        error_message: Human-readable failure description when not ok.
    """

    ok: bool
    value: Optional[dict[str, Any]] = None
    error_kind: Optional[ErrorKind] = None
    error_message: Optional[str] = None

    @classmethod
    def success(cls, value: dict[str, Any]) -> "CommandOutcome":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: WorkspaceError) -> "CommandOutcome":
        return cls(ok=False, error_kind=error.kind, error_message=error.message)

    def to_result_payload(self) -> dict[str, Any]:
        """Payload stored as an invocation's terminal result."""
        if self.ok:
            return dict(self.value or {})
        return {
            "error": self.error_kind.value if self.error_kind else None,
            "message": self.error_message,
        }


class CommandInterpreter:
    """Maps tool invocations onto VirtualFileSystem operations.

    The interpreter owns no state of its own; the file system is passed in
    explicitly. Workspace errors never escape execute(); they come back as a
    failed CommandOutcome.

    Attributes:
        file_system: The store that commands are applied to.
    """

    def __init__(self, file_system: VirtualFileSystem) -> None:
        self.file_system = file_system

    def parse_invocation(
        self,
        tool_name: str,
        command: Optional[str],
        args: Optional[dict[str, Any]],
    ) -> ToolCommand:
        """Validate an invocation without executing it.

        Raises:
            WorkspaceError: If the invocation is unsupported or malformed.
        """
        return parse_command(tool_name, command, args)

    def execute(
        self,
        tool_name: str,
        command: Optional[str],
        args: Optional[dict[str, Any]],
    ) -> CommandOutcome:
        """Validate and run an invocation.

        Args:
            tool_name: Tool the agent called.
            command: Sub-command (None to read it from args["command"]).
            args: Argument mapping.

        Returns:
            CommandOutcome describing success or the failure kind.
        """
        try:
            parsed = self.parse_invocation(tool_name, command, args)
        except WorkspaceError as e:
            logger.debug(f"Rejected {tool_name}.{command}: {e.message}")
            return CommandOutcome.failure(e)
        return self.execute_parsed(parsed)

    def execute_parsed(self, parsed: ToolCommand) -> CommandOutcome:
        """Run an already-parsed command against the store."""
        try:
            value = parsed.apply(self.file_system)
        except WorkspaceError as e:
            logger.debug(
                f"{parsed.tool_name.value}.{parsed.command} failed: {e.kind.value}: {e.message}"
            )
            return CommandOutcome.failure(e)

        logger.debug(f"{parsed.tool_name.value}.{parsed.command} succeeded")
        return CommandOutcome.success(value)
