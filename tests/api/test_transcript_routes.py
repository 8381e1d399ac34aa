"""Integration tests for the transcript endpoints (/transcript/*)."""


class TestTranscript:
    """Tests for GET /transcript and POST /transcript/messages."""

    def test_empty(self, client_with_session):
        """Verify a new session has an empty transcript."""
        client, _, _ = client_with_session
        assert client.get("/transcript").json() == {"messages": [], "total": 0}

    def test_add_message(self, client_with_session):
        """Verify a message is appended and returned."""
        client, session, _ = client_with_session

        response = client.post(
            "/transcript/messages", json={"role": "user", "content": "Make a card"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["role"] == "user"
        assert data["tool_invocations"] == []
        assert session.transcript.get_message(data["message_id"]) is not None

    def test_invalid_role(self, client_with_session):
        """Verify unknown roles are rejected by request validation."""
        client, _, _ = client_with_session
        response = client.post("/transcript/messages", json={"role": "robot"})
        assert response.status_code == 422

    def test_tool_parts_follow_lifecycle(self, client_with_session):
        """Verify tool parts move from call to result with their labels."""
        client, _, _ = client_with_session
        message_id = client.post(
            "/transcript/messages", json={"role": "assistant", "content": "Working"}
        ).json()["message_id"]

        submitted = client.post(
            "/tools/submit",
            json={
                "tool_name": "str_replace_editor",
                "args": {"command": "create", "path": "src/Card.tsx", "file_text": ""},
                "message_id": message_id,
            },
        ).json()

        part = client.get("/transcript").json()["messages"][0]["tool_invocations"][0]
        assert part["state"] == "call"
        assert part["result"] is None
        assert part["display"] == {"label": "Creating Card.tsx", "indicator": "busy"}

        client.post(f"/tools/invocations/{submitted['invocation_id']}/dispatch")

        part = client.get("/transcript").json()["messages"][0]["tool_invocations"][0]
        assert part["toolCallId"] == submitted["invocation_id"]
        assert part["state"] == "result"
        assert part["result"]["path"] == "/src/Card.tsx"
        assert part["display"]["indicator"] == "success"
