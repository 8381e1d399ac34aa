"""Workspace data models package.

This package contains the virtual file system that backs a generated
project, the tool commands an agent uses to edit it, the tool invocation
lifecycle, the display projection shown in the chat transcript, and the
project session that ties them together.
"""

from models.errors import ErrorKind, WorkspaceError
from models.file_node import FileNode
from models.history import EditHistory, HistoryEntry
from models.file_system import VirtualFileSystem
from models.project import (
    InMemoryProjectStore,
    ProjectCreateRequest,
    ProjectRecord,
    ProjectSnapshot,
    ProjectStore,
)
from models.commands import ToolCommand, ToolName, parse_command
from models.interpreter import CommandInterpreter, CommandOutcome
from models.display import StatusIndicator, ToolStatusDisplay, get_tool_display_message
from models.invocation import InvocationTransition, LifecycleState, ToolInvocation
from models.transcript import ChatMessage, MessageRole, Transcript
from models.session import ProjectSession

__all__ = [
    "ErrorKind",
    "WorkspaceError",
    "FileNode",
    "EditHistory",
    "HistoryEntry",
    "VirtualFileSystem",
    "ProjectSnapshot",
    "ProjectCreateRequest",
    "ProjectRecord",
    "ProjectStore",
    "InMemoryProjectStore",
    "ToolCommand",
    "ToolName",
    "parse_command",
    "CommandInterpreter",
    "CommandOutcome",
    "StatusIndicator",
    "ToolStatusDisplay",
    "get_tool_display_message",
    "LifecycleState",
    "ToolInvocation",
    "InvocationTransition",
    "ChatMessage",
    "MessageRole",
    "Transcript",
    "ProjectSession",
]
