"""Tool invocation model and its lifecycle."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional
from uuid import uuid4

from pydantic import BaseModel, Field

from models.display import ToolStatusDisplay, render_tool_status
from models.errors import ErrorKind
from models.interpreter import CommandOutcome


class LifecycleState(str, Enum):
    """Lifecycle state of a tool invocation."""

    PENDING = "pending"
    EXECUTING = "executing"
    COMPLETED = "completed"
    FAILED = "failed"


TERMINAL_STATES = (LifecycleState.COMPLETED, LifecycleState.FAILED)

# Legal transitions; anything else is a programming defect
_TRANSITIONS: dict[LifecycleState, tuple[LifecycleState, ...]] = {
    LifecycleState.PENDING: (LifecycleState.EXECUTING, LifecycleState.FAILED),
    LifecycleState.EXECUTING: (LifecycleState.COMPLETED, LifecycleState.FAILED),
    LifecycleState.COMPLETED: (),
    LifecycleState.FAILED: (),
}


class InvocationTransition(BaseModel):
    """Event emitted every time an invocation changes state.

    Args:
        invocation_id: The invocation that moved.
        previous: State before the transition.
        current: State after the transition.
        label: Display label for the invocation.
        indicator: Display indicator for the new state.
    """

    invocation_id: str
    previous: LifecycleState
    current: LifecycleState
    label: str
    indicator: str


class ToolInvocation(BaseModel):
    """A single structured command issued by the agent.

    Invocations are created pending, dispatched to the CommandInterpreter,
    and finish completed or failed. Transitions only move forward; calling
    a transition method from the wrong state raises RuntimeError.

    Args:
        invocation_id: Unique identifier for this invocation.
        tool_name: Tool the agent called (e.g., "str_replace_editor").
        command: Sub-command (e.g., "create").
        args: Argument mapping as sent by the agent.
        state: Current lifecycle state.
        result: Terminal result payload (None until finished).
        error_kind: Failure kind if state is FAILED.
        error_message: Failure details if state is FAILED.
        cancelled: True if the caller abandoned the invocation before dispatch.
        sequence: Submission order within the session.
        message_id: Transcript message this invocation belongs to.
        created_at: When the invocation was submitted.
        started_at: When execution began.
        finished_at: When the invocation reached a terminal state.
    """

    invocation_id: str = Field(
        default_factory=lambda: str(uuid4()),
        description="Unique identifier for this invocation",
    )
    tool_name: str = Field(description="Tool the agent called")
    command: Optional[str] = Field(default=None, description="Sub-command")
    args: dict[str, Any] = Field(default_factory=dict, description="Argument mapping")
    state: LifecycleState = Field(
        default=LifecycleState.PENDING, description="Current lifecycle state"
    )
    result: Optional[Any] = Field(default=None, description="Terminal result payload")
    error_kind: Optional[ErrorKind] = Field(default=None)
    error_message: Optional[str] = Field(default=None)
    cancelled: bool = Field(default=False)
    sequence: int = Field(default=0, ge=0, description="Submission order")
    message_id: Optional[str] = Field(default=None)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    started_at: Optional[datetime] = Field(default=None)
    finished_at: Optional[datetime] = Field(default=None)

    class Config:
        use_enum_values = False

    @property
    def is_terminal(self) -> bool:
        return self.state in TERMINAL_STATES

    @property
    def display_args(self) -> dict[str, Any]:
        """Arguments as the projector expects them, with the command included."""
        if self.command is None or "command" in self.args:
            return dict(self.args)
        return {**self.args, "command": self.command}

    def _transition(self, target: LifecycleState) -> LifecycleState:
        if target not in _TRANSITIONS[self.state]:
            raise RuntimeError(
                f"Cannot move invocation {self.invocation_id} "
                f"from {self.state.value} to {target.value}"
            )
        previous = self.state
        self.state = target
        return previous

    def begin(self) -> LifecycleState:
        """Move from PENDING to EXECUTING.

        Returns:
            The previous state.

        Raises:
            RuntimeError: If the invocation is not pending.
        """
        previous = self._transition(LifecycleState.EXECUTING)
        self.started_at = datetime.now(timezone.utc)
        return previous

    def finish(self, outcome: CommandOutcome) -> LifecycleState:
        """Record the interpreter's outcome and move to a terminal state.

        Args:
            outcome: The CommandOutcome returned by the interpreter.

        Returns:
            The previous state.

        Raises:
            RuntimeError: If the invocation is not executing.
        """
        target = LifecycleState.COMPLETED if outcome.ok else LifecycleState.FAILED
        previous = self._transition(target)
        self.result = outcome.to_result_payload()
        if not outcome.ok:
            self.error_kind = outcome.error_kind
            self.error_message = outcome.error_message
        self.finished_at = datetime.now(timezone.utc)
        return previous

    def cancel(self, reason: str) -> LifecycleState:
        """Abandon the invocation before it is dispatched.

        Once executing, the store operation always runs to completion, so
        only pending invocations can be cancelled.

        Args:
            reason: Why the invocation was abandoned.

        Returns:
            The previous state.

        Raises:
            RuntimeError: If the invocation is not pending.
        """
        if self.state != LifecycleState.PENDING:
            raise RuntimeError(
                f"Cannot cancel invocation {self.invocation_id} with state {self.state.value}"
            )
        previous = self._transition(LifecycleState.FAILED)
        self.cancelled = True
        self.error_message = f"Cancelled: {reason}"
        self.result = {"error": "Cancelled", "message": self.error_message}
        self.finished_at = datetime.now(timezone.utc)
        return previous

    def get_display(self) -> ToolStatusDisplay:
        """Label and indicator for the transcript."""
        return render_tool_status(self.tool_name, self.display_args, self.state, self.result)

    def make_transition(self, previous: LifecycleState) -> InvocationTransition:
        display = self.get_display()
        return InvocationTransition(
            invocation_id=self.invocation_id,
            previous=previous,
            current=self.state,
            label=display.label,
            indicator=display.indicator.value,
        )

    def to_transcript_part(self) -> dict[str, Any]:
        """Serialize as a transcript tool-invocation part.

        The transcript wire format only distinguishes an in-flight "call" from
        a finished "result".
        """
        part: dict[str, Any] = {
            "toolCallId": self.invocation_id,
            "toolName": self.tool_name,
            "args": self.display_args,
            "state": "result" if self.is_terminal else "call",
        }
        if self.is_terminal:
            part["result"] = self.result
        return part

    def get_summary(self) -> str:
        """One-line summary for logs, e.g. "#3 str_replace_editor.create [completed]"."""
        return f"#{self.sequence} {self.tool_name}.{self.command} [{self.state.value}]"
