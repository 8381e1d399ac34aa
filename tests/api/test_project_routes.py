"""Integration tests for the project persistence endpoints (/projects/*)."""

from api.dependencies import get_default_project_name
from main import app
from tests.fixtures.core.file_systems import APP_FILES


class TestSaveProject:
    """Tests for POST /projects/save."""

    def test_unauthorized_is_forbidden(self, client_with_session):
        """Verify saving without authorization is a 403 and stores nothing."""
        client, _, store = client_with_session

        response = client.post("/projects/save", json={"name": "Landing"})

        assert response.status_code == 403
        assert response.json()["error"] == "Persistence Refused"
        assert store.list_projects() == []

    def test_save(self, client_with_session):
        """Verify an authorized save hands files and transcript to the store."""
        client, session, store = client_with_session
        message_id = session.add_message("assistant", "Saving your work")

        response = client.post("/projects/save", json={"name": "Landing", "authorized": True})

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Landing"
        assert data["data"] == APP_FILES
        assert data["file_count"] == len(APP_FILES)
        assert data["messages"][0]["id"] == message_id
        assert store.get_project(data["project_id"]) is not None

    def test_generated_name(self, client_with_session):
        """Verify a name is generated when none is supplied."""
        client, _, _ = client_with_session

        data = client.post("/projects/save", json={"authorized": True}).json()

        assert data["name"].startswith("New Design #")

    def test_generated_name_for_anonymous_work(self, client_with_session):
        """Verify promoted anonymous work gets a timestamped name."""
        client, _, _ = client_with_session

        data = client.post(
            "/projects/save", json={"authorized": True, "from_anonymous_work": True}
        ).json()

        assert data["name"].startswith("Design from ")

    def test_configured_default_name(self, client_with_session):
        """Verify the configured default name is used when none is sent."""
        client, _, _ = client_with_session
        app.dependency_overrides[get_default_project_name] = lambda: "Team Workspace"

        data = client.post("/projects/save", json={"authorized": True}).json()

        assert data["name"] == "Team Workspace"


class TestListAndGetProjects:
    """Tests for GET /projects and GET /projects/{id}."""

    def test_list_most_recent_first(self, client_with_session):
        """Verify projects are listed newest first."""
        client, _, _ = client_with_session
        client.post("/projects/save", json={"name": "first", "authorized": True})
        client.post("/projects/save", json={"name": "second", "authorized": True})

        data = client.get("/projects").json()

        assert data["total"] == 2
        assert [p["name"] for p in data["projects"]] == ["second", "first"]
        assert "data" not in data["projects"][0]

    def test_get(self, client_with_session):
        """Verify one project can be fetched with its files."""
        client, _, _ = client_with_session
        project_id = client.post(
            "/projects/save", json={"name": "Landing", "authorized": True}
        ).json()["project_id"]

        response = client.get(f"/projects/{project_id}")

        assert response.status_code == 200
        assert response.json()["data"] == APP_FILES

    def test_get_missing(self, client_with_session):
        """Verify an unknown project is a 404."""
        client, _, _ = client_with_session
        assert client.get("/projects/missing").status_code == 404
