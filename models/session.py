"""Project session orchestration.

A ProjectSession is the single logical owner of one project's virtual file
system. It records every tool invocation the agent issues, orders
invocations that touch the same paths, runs them through the
CommandInterpreter and tells subscribers about every lifecycle transition.
"""

import logging
import threading
import uuid
from typing import Any, Callable, Optional

from pydantic import BaseModel, Field

from models import paths
from models.commands import ToolCommand
from models.errors import WorkspaceError
from models.file_system import VirtualFileSystem
from models.interpreter import CommandInterpreter, CommandOutcome
from models.invocation import InvocationTransition, LifecycleState, ToolInvocation
from models.project import (
    ProjectCreateRequest,
    ProjectRecord,
    ProjectSnapshot,
    ProjectStore,
    default_project_name,
)
from models.transcript import MessageRole, Transcript

logger = logging.getLogger(__name__)

TransitionListener = Callable[[InvocationTransition], None]


class InvocationNotFoundError(LookupError):
    """Raised when an invocation id is not known to the session."""

    def __init__(self, invocation_id: str):
        self.invocation_id = invocation_id
        super().__init__(f"Invocation '{invocation_id}' not found")


class PersistenceRefusedError(PermissionError):
    """Raised when a save is attempted without a go from the session boundary."""

    def __init__(self, message: str = "Saving requires an authenticated session"):
        self.message = message
        super().__init__(message)


def paths_conflict(first: list[str], second: list[str]) -> bool:
    """True if any path in `first` equals, contains or lies below one in `second`."""
    for a in first:
        for b in second:
            if a == b or paths.is_ancestor(a, b) or paths.is_ancestor(b, a):
                return True
    return False


class ProjectSession(BaseModel):
    """Owner of one project's file system, invocations and transcript.

    Responsibilities:
    - Accept invocations (submit) and hand out submission sequence numbers
    - Serialize invocations on overlapping paths in submission order
    - Drive each invocation through pending -> executing -> completed | failed
    - Notify transition subscribers (transcript renderer, status views)
    - Build the project payload handed to persistence

    Invocations on disjoint paths do not wait for each other.

    Attributes:
        file_system: The project's virtual file system.
        transcript: The chat transcript.
        invocations: All invocations by id, in submission order.
        session_id: Unique identifier for this session.
    """

    file_system: VirtualFileSystem = Field(default_factory=VirtualFileSystem)
    transcript: Transcript = Field(default_factory=Transcript)
    invocations: dict[str, ToolInvocation] = Field(default_factory=dict)
    session_id: str = Field(default_factory=lambda: str(uuid.uuid4()))

    class Config:
        arbitrary_types_allowed = True

    def __init__(self, **data):
        """Initialize with private attributes."""
        super().__init__(**data)
        self._interpreter = CommandInterpreter(self.file_system)
        self._condition = threading.Condition()
        self._sequence = len(self.invocations)
        # Parsed commands (or parse errors) for invocations not yet finished
        self._parsed: dict[str, ToolCommand | WorkspaceError] = {}
        # invocation id -> paths, for pending and executing invocations
        self._outstanding: dict[str, list[str]] = {}
        self._listeners: list[TransitionListener] = []

    @property
    def interpreter(self) -> CommandInterpreter:
        return self._interpreter

    # ===== Subscriptions =====

    def subscribe(self, listener: TransitionListener) -> Callable[[], None]:
        """Register a listener for invocation transitions.

        Args:
            listener: Callable receiving an InvocationTransition.

        Returns:
            A callable that removes the listener.
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, invocation: ToolInvocation, previous: LifecycleState) -> None:
        transition = invocation.make_transition(previous)
        for listener in list(self._listeners):
            try:
                listener(transition)
            except Exception as e:
                logger.error(
                    f"Transition listener failed for {invocation.invocation_id}: {e}",
                    exc_info=True,
                )

    # ===== Invocation Lifecycle =====

    def submit(
        self,
        tool_name: str,
        args: Optional[dict[str, Any]] = None,
        command: Optional[str] = None,
        message_id: Optional[str] = None,
    ) -> ToolInvocation:
        """Record a new pending invocation.

        The invocation is parsed immediately so its target paths are known
        and it can be queued behind earlier invocations on the same paths.
        An invocation that fails to parse is not queued on any path; it will
        fail as soon as it is dispatched.

        Args:
            tool_name: Tool the agent called.
            args: Argument mapping.
            command: Sub-command; defaults to args["command"].
            message_id: Transcript message to attach the invocation to.

        Returns:
            The pending ToolInvocation.

        Raises:
            ValueError: If message_id is given but not in the transcript.
        """
        args = dict(args or {})
        if command is None and isinstance(args.get("command"), str):
            command = args["command"]

        if message_id is not None and self.transcript.get_message(message_id) is None:
            raise ValueError(f"Message {message_id} not found in transcript")

        try:
            parsed: ToolCommand | WorkspaceError = self._interpreter.parse_invocation(
                tool_name, command, args
            )
            affected = parsed.affected_paths()
        except WorkspaceError as e:
            parsed = e
            affected = []

        with self._condition:
            self._sequence += 1
            invocation = ToolInvocation(
                tool_name=tool_name,
                command=command,
                args=args,
                sequence=self._sequence,
                message_id=message_id,
            )
            self.invocations[invocation.invocation_id] = invocation
            self._parsed[invocation.invocation_id] = parsed
            self._outstanding[invocation.invocation_id] = affected
            if message_id is not None:
                self.transcript.attach_invocation(message_id, invocation.invocation_id)

        logger.debug(f"Submitted {invocation.get_summary()} on {affected}")
        return invocation

    def _blockers(self, invocation: ToolInvocation) -> list[ToolInvocation]:
        """Earlier unfinished invocations on overlapping paths, oldest first."""
        mine = self._outstanding.get(invocation.invocation_id, [])
        if not mine:
            return []
        blockers = [
            self.invocations[other_id]
            for other_id, other_paths in self._outstanding.items()
            if self.invocations[other_id].sequence < invocation.sequence
            and paths_conflict(mine, other_paths)
        ]
        return sorted(blockers, key=lambda i: i.sequence)

    def dispatch(self, invocation_id: str) -> ToolInvocation:
        """Execute a pending invocation after earlier same-path invocations.

        Earlier invocations on overlapping paths that are still pending are
        dispatched first, oldest first, on the calling thread. The call then
        waits only for overlapping invocations already executing elsewhere,
        which always run to completion. If the invocation is cancelled or
        started by another caller in the meantime, it is returned as is.

        Args:
            invocation_id: The invocation to run.

        Returns:
            The invocation in its terminal state.

        Raises:
            InvocationNotFoundError: If the id is unknown.
            RuntimeError: If the invocation is not pending.
        """
        with self._condition:
            invocation = self.get_invocation(invocation_id)
            if invocation.state != LifecycleState.PENDING:
                raise RuntimeError(
                    f"Cannot dispatch invocation {invocation_id} "
                    f"with state {invocation.state.value}"
                )
        return self._run(invocation)

    def _run(self, invocation: ToolInvocation) -> ToolInvocation:
        invocation_id = invocation.invocation_id
        while True:
            with self._condition:
                if invocation.state != LifecycleState.PENDING:
                    return invocation
                waiting_on = [
                    b for b in self._blockers(invocation) if b.state == LifecycleState.PENDING
                ]
                if not waiting_on:
                    # Pending never comes back, so only executing blockers remain
                    self._condition.wait_for(
                        lambda: invocation.state != LifecycleState.PENDING
                        or not self._blockers(invocation)
                    )
                    if invocation.state != LifecycleState.PENDING:
                        return invocation
                    previous = invocation.begin()
                    parsed = self._parsed.pop(invocation_id)
                    break

            logger.debug(
                f"Dispatching {waiting_on[0].get_summary()} "
                f"ahead of {invocation.get_summary()}"
            )
            self._run(waiting_on[0])

        self._emit(invocation, previous)

        try:
            if isinstance(parsed, WorkspaceError):
                outcome = CommandOutcome.failure(parsed)
            else:
                outcome = self._interpreter.execute_parsed(parsed)
        except Exception as e:
            logger.error(
                f"Invocation {invocation.get_summary()} raised unexpectedly: {e}",
                exc_info=True,
            )
            with self._condition:
                previous = invocation.state
                invocation.state = LifecycleState.FAILED
                invocation.error_message = f"{type(e).__name__}: {e}"
                self._outstanding.pop(invocation_id, None)
                self._condition.notify_all()
            self._emit(invocation, previous)
            raise

        with self._condition:
            previous = invocation.finish(outcome)
            self._outstanding.pop(invocation_id, None)
            self._condition.notify_all()

        if outcome.ok:
            logger.info(f"Invocation {invocation.get_summary()} completed")
        else:
            logger.warning(
                f"Invocation {invocation.get_summary()} failed: "
                f"{outcome.error_kind.value if outcome.error_kind else 'error'}: "
                f"{outcome.error_message}"
            )
        self._emit(invocation, previous)
        return invocation

    def execute(
        self,
        tool_name: str,
        args: Optional[dict[str, Any]] = None,
        command: Optional[str] = None,
        message_id: Optional[str] = None,
    ) -> ToolInvocation:
        """Submit and immediately dispatch an invocation.

        Returns:
            The invocation in its terminal state.
        """
        invocation = self.submit(tool_name, args, command=command, message_id=message_id)
        return self.dispatch(invocation.invocation_id)

    def cancel(self, invocation_id: str, reason: str = "abandoned by caller") -> ToolInvocation:
        """Abandon a pending invocation.

        Args:
            invocation_id: The invocation to cancel.
            reason: Why it was abandoned.

        Returns:
            The cancelled invocation (state FAILED, cancelled=True).

        Raises:
            InvocationNotFoundError: If the id is unknown.
            RuntimeError: If the invocation already left PENDING.
        """
        with self._condition:
            invocation = self.get_invocation(invocation_id)
            previous = invocation.cancel(reason)
            self._parsed.pop(invocation_id, None)
            self._outstanding.pop(invocation_id, None)
            self._condition.notify_all()

        logger.warning(f"Invocation {invocation.get_summary()} cancelled: {reason}")
        self._emit(invocation, previous)
        return invocation

    # ===== Queries =====

    def get_invocation(self, invocation_id: str) -> ToolInvocation:
        """Look up an invocation by id.

        Raises:
            InvocationNotFoundError: If the id is unknown.
        """
        with self._condition:
            invocation = self.invocations.get(invocation_id)
        if invocation is None:
            raise InvocationNotFoundError(invocation_id)
        return invocation

    def query_invocations(
        self,
        state: Optional[LifecycleState] = None,
        tool_name: Optional[str] = None,
        path: Optional[str] = None,
    ) -> list[ToolInvocation]:
        """Query invocations with filters, in submission order.

        Args:
            state: Filter by lifecycle state.
            tool_name: Filter by tool name.
            path: Filter by a raw path appearing in path, old_path or new_path.

        Returns:
            List of matching invocations.
        """
        with self._condition:
            results = sorted(self.invocations.values(), key=lambda i: i.sequence)

        if state is not None:
            results = [i for i in results if i.state == state]

        if tool_name is not None:
            results = [i for i in results if i.tool_name == tool_name]

        if path is not None:
            wanted = paths.resolve_directory(path)

            def touches(invocation: ToolInvocation) -> bool:
                for key in ("path", "old_path", "new_path"):
                    value = invocation.args.get(key)
                    try:
                        if isinstance(value, str) and paths.resolve_directory(value) == wanted:
                            return True
                    except WorkspaceError:
                        continue
                return False

            results = [i for i in results if touches(i)]

        return results

    def get_status(self) -> dict[str, Any]:
        """Counts per lifecycle state plus file-system summary."""
        with self._condition:
            invocations = list(self.invocations.values())

        counts = {state.value: 0 for state in LifecycleState}
        cancelled = 0
        for invocation in invocations:
            counts[invocation.state.value] += 1
            cancelled += int(invocation.cancelled)

        return {
            "session_id": self.session_id,
            "total_invocations": len(invocations),
            "pending": counts[LifecycleState.PENDING.value],
            "executing": counts[LifecycleState.EXECUTING.value],
            "completed": counts[LifecycleState.COMPLETED.value],
            "failed": counts[LifecycleState.FAILED.value],
            "cancelled": cancelled,
            "file_count": len(self.file_system.nodes),
            "revision": self.file_system.revision,
        }

    def get_snapshot(self) -> ProjectSnapshot:
        return self.file_system.get_snapshot()

    # ===== Persistence Hand-off =====

    def build_project_request(
        self,
        name: Optional[str] = None,
        from_anonymous_work: bool = False,
    ) -> ProjectCreateRequest:
        """Assemble the {name, messages, data} payload for persistence.

        Args:
            name: Project name; a default label is generated when omitted.
            from_anonymous_work: Whether this saves work done before sign-in
                (affects the default name only).

        Returns:
            The ProjectCreateRequest.
        """
        with self._condition:
            invocations = dict(self.invocations)
        parts = {
            invocation_id: invocation.to_transcript_part()
            for invocation_id, invocation in invocations.items()
        }
        return ProjectCreateRequest(
            name=name or default_project_name(from_anonymous_work=from_anonymous_work),
            messages=self.transcript.to_messages(parts),
            data=self.get_snapshot().files,
        )

    def save(
        self,
        store: ProjectStore,
        authorized: bool,
        name: Optional[str] = None,
        from_anonymous_work: bool = False,
    ) -> ProjectRecord:
        """Hand the project to the persistence collaborator.

        Identity is never inspected here; the session boundary only supplies
        a go/no-go.

        Args:
            store: The persistence collaborator.
            authorized: Go/no-go from the session boundary.
            name: Optional project name.
            from_anonymous_work: Whether this promotes anonymous work.

        Returns:
            The created ProjectRecord.

        Raises:
            PersistenceRefusedError: If authorized is False.
        """
        if not authorized:
            raise PersistenceRefusedError()

        request = self.build_project_request(name, from_anonymous_work=from_anonymous_work)
        record = store.create_project(request)
        logger.info(
            f"Session {self.session_id} saved as project {record.project_id} "
            f"'{record.name}' ({len(request.data)} files, {len(request.messages)} messages)"
        )
        return record

    # ===== Lifecycle =====

    def add_message(self, role: MessageRole, content: str = "") -> str:
        """Append a transcript message and return its id."""
        return self.transcript.add_message(role, content).message_id

    def clear(self) -> dict[str, Any]:
        """Drop every file, invocation and message.

        Returns:
            Summary with files_removed, invocations_removed, messages_removed.

        Raises:
            RuntimeError: If any invocation is still pending or executing.
        """
        with self._condition:
            if self._outstanding:
                raise RuntimeError(
                    f"Cannot clear session with {len(self._outstanding)} unfinished invocations"
                )
            invocations_removed = len(self.invocations)
            messages_removed = len(self.transcript.messages)
            self.invocations.clear()
            self._parsed.clear()
            self.transcript.clear()
            self._sequence = 0

        files_removed = self.file_system.clear()
        logger.info(
            f"Session {self.session_id} cleared: {files_removed} files, "
            f"{invocations_removed} invocations, {messages_removed} messages"
        )
        return {
            "files_removed": files_removed,
            "invocations_removed": invocations_removed,
            "messages_removed": messages_removed,
        }
