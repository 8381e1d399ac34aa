"""Unit tests for CommandInterpreter and CommandOutcome."""

import pytest

from models.commands import parse_command
from models.errors import ErrorKind, NotFoundError
from models.interpreter import CommandInterpreter, CommandOutcome
from tests.fixtures.core.file_systems import APP_FILES, create_file_system


@pytest.fixture
def interpreter():
    """Provide an interpreter over a file system holding APP_FILES."""
    return CommandInterpreter(create_file_system(APP_FILES))


class TestCommandOutcome:
    """Test CommandOutcome construction and payloads."""

    def test_success_payload(self):
        """Verify a success payload is the value itself."""
        outcome = CommandOutcome.success({"message": "ok", "path": "/a.txt"})
        assert outcome.ok
        assert outcome.to_result_payload() == {"message": "ok", "path": "/a.txt"}

    def test_failure_payload(self):
        """Verify a failure payload names the error kind."""
        outcome = CommandOutcome.failure(NotFoundError("/a.txt"))
        assert not outcome.ok
        assert outcome.error_kind == ErrorKind.NOT_FOUND
        assert outcome.to_result_payload() == {
            "error": "NotFound",
            "message": "File not found: /a.txt",
        }


class TestExecute:
    """Test execute() against the store."""

    def test_create(self, interpreter):
        """Verify a create invocation creates the file."""
        outcome = interpreter.execute(
            "str_replace_editor",
            "create",
            {"path": "src/components/Card.jsx", "file_text": "export default 1;\n"},
        )

        assert outcome.ok
        assert outcome.value["message"] == "File created: /src/components/Card.jsx"
        assert interpreter.file_system.read_file("/src/components/Card.jsx") == "export default 1;\n"

    def test_command_from_args(self, interpreter):
        """Verify execute reads the command from args when not given."""
        outcome = interpreter.execute(
            "file_manager", None, {"command": "delete", "path": "/src/styles.css"}
        )
        assert outcome.ok
        assert outcome.value["success"] is True
        assert outcome.value["deleted"] == ["/src/styles.css"]

    def test_rename(self, interpreter):
        """Verify rename reports success and the moved pairs."""
        outcome = interpreter.execute(
            "file_manager", "rename", {"old_path": "/src/styles.css", "new_path": "/src/theme.css"}
        )
        assert outcome.ok
        assert outcome.value["moved"] == [["/src/styles.css", "/src/theme.css"]]

    def test_view_does_not_mutate(self, interpreter):
        """Verify view returns content without touching the revision."""
        revision = interpreter.file_system.revision
        outcome = interpreter.execute("str_replace_editor", "view", {"path": "/index.html"})

        assert outcome.ok
        assert outcome.value["content"] == APP_FILES["/index.html"]
        assert interpreter.file_system.revision == revision

    @pytest.mark.parametrize(
        "tool_name, command, args, kind",
        [
            ("unknown_tool", "create", {"path": "/a"}, ErrorKind.UNSUPPORTED_COMMAND),
            ("str_replace_editor", "insert", {"path": "/index.html"}, ErrorKind.MISSING_ARGUMENT),
            ("file_manager", "delete", {"path": "../x"}, ErrorKind.INVALID_PATH),
            ("file_manager", "delete", {"path": "/nope.txt"}, ErrorKind.NOT_FOUND),
            (
                "str_replace_editor",
                "create",
                {"path": "/index.html", "file_text": ""},
                ErrorKind.PATH_EXISTS,
            ),
            (
                "str_replace_editor",
                "str_replace",
                {"path": "/index.html", "old_str": "absent", "new_str": ""},
                ErrorKind.NO_MATCH,
            ),
            (
                "str_replace_editor",
                "insert",
                {"path": "/index.html", "insert_line": 9, "new_str": ""},
                ErrorKind.LINE_OUT_OF_RANGE,
            ),
            ("str_replace_editor", "undo_edit", {"path": "/index.html"}, ErrorKind.NO_HISTORY),
        ],
    )
    def test_failures_become_outcomes(self, interpreter, tool_name, command, args, kind):
        """Verify every error kind comes back as a failed outcome, not an exception."""
        before = interpreter.file_system.get_snapshot()

        outcome = interpreter.execute(tool_name, command, args)

        assert not outcome.ok
        assert outcome.error_kind == kind
        assert outcome.error_message
        after = interpreter.file_system.get_snapshot()
        assert after.files == before.files
        assert after.revision == before.revision

    def test_execute_parsed(self, interpreter):
        """Verify an already-parsed command can be run directly."""
        parsed = parse_command("str_replace_editor", "undo_edit", {"path": "/index.html"})
        outcome = interpreter.execute_parsed(parsed)
        assert outcome.error_kind == ErrorKind.NO_HISTORY
