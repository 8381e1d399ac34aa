"""Core infrastructure fixtures."""

from tests.fixtures.core.file_systems import (
    APP_FILES,
    create_file_system,
)
from tests.fixtures.core.invocations import (
    TOOL_CALL_EXAMPLES,
    create_invocation,
)
from tests.fixtures.core.sessions import create_session

__all__ = [
    "APP_FILES",
    "create_file_system",
    "TOOL_CALL_EXAMPLES",
    "create_invocation",
    "create_session",
]
