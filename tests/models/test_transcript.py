"""Unit tests for ChatMessage and Transcript."""

import pytest
from pydantic import ValidationError

from models.transcript import ChatMessage, MessageRole, Transcript


class TestChatMessage:
    """Test ChatMessage validation."""

    def test_role_must_be_known(self):
        """Verify roles outside user/assistant/system are rejected."""
        with pytest.raises(ValidationError):
            ChatMessage(role="robot")

    def test_role_from_string(self):
        """Verify plain strings are accepted for known roles."""
        assert ChatMessage(role="assistant").role == MessageRole.ASSISTANT


class TestTranscript:
    """Test transcript operations."""

    def test_messages_keep_order(self):
        """Verify messages are kept oldest first."""
        transcript = Transcript()
        transcript.add_message(MessageRole.USER, "Make a button")
        transcript.add_message(MessageRole.ASSISTANT, "Sure")
        assert [m.content for m in transcript.messages] == ["Make a button", "Sure"]

    def test_attach_invocation(self):
        """Verify invocations are recorded on their message in order."""
        transcript = Transcript()
        message = transcript.add_message(MessageRole.ASSISTANT)
        transcript.attach_invocation(message.message_id, "inv-1")
        transcript.attach_invocation(message.message_id, "inv-2")
        assert transcript.get_message(message.message_id).tool_invocations == ["inv-1", "inv-2"]

    def test_attach_to_unknown_message(self):
        """Verify attaching to an absent message raises ValueError."""
        with pytest.raises(ValueError):
            Transcript().attach_invocation("missing", "inv-1")

    def test_to_messages(self):
        """Verify serialization embeds known tool parts and skips unknown ids."""
        transcript = Transcript()
        message = transcript.add_message(MessageRole.ASSISTANT, "Creating")
        transcript.attach_invocation(message.message_id, "inv-1")
        transcript.attach_invocation(message.message_id, "gone")

        messages = transcript.to_messages({"inv-1": {"toolCallId": "inv-1"}})

        assert messages[0]["id"] == message.message_id
        assert messages[0]["role"] == "assistant"
        assert messages[0]["toolInvocations"] == [{"toolCallId": "inv-1"}]

    def test_clear(self):
        """Verify clear removes every message."""
        transcript = Transcript()
        transcript.add_message(MessageRole.USER, "hi")
        transcript.clear()
        assert transcript.messages == []
