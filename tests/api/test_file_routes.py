"""Integration tests for the read-only file endpoints (/files/*)."""

from tests.fixtures.core.file_systems import APP_FILES


class TestListFiles:
    """Tests for GET /files."""

    def test_list(self, client_with_session):
        """Verify every file is listed, sorted, with the tree revision."""
        client, session, _ = client_with_session

        data = client.get("/files").json()

        assert data["total"] == len(APP_FILES)
        assert [f["path"] for f in data["files"]] == sorted(APP_FILES)
        assert data["revision"] == session.file_system.revision

    def test_revision_follows_edits(self, client_with_session):
        """Verify per-file and tree revisions reflect edits."""
        client, session, _ = client_with_session
        session.execute(
            "str_replace_editor",
            {"command": "str_replace", "path": "/src/styles.css", "old_str": "red", "new_str": "blue"},
        )

        data = client.get("/files").json()

        revisions = {f["path"]: f["revision"] for f in data["files"]}
        assert revisions["/src/styles.css"] == 1
        assert revisions["/index.html"] == 0


class TestReadFile:
    """Tests for GET /files/content."""

    def test_read(self, client_with_session):
        """Verify content and revision are returned."""
        client, _, _ = client_with_session

        response = client.get("/files/content", params={"path": "src/App.jsx"})

        assert response.status_code == 200
        assert response.json() == {
            "path": "/src/App.jsx",
            "content": APP_FILES["/src/App.jsx"],
            "revision": 0,
        }

    def test_missing_file(self, client_with_session):
        """Verify missing files are a 404 with the NotFound kind."""
        client, _, _ = client_with_session

        response = client.get("/files/content", params={"path": "/nope.txt"})

        assert response.status_code == 404
        assert response.json()["kind"] == "NotFound"

    def test_invalid_path(self, client_with_session):
        """Verify malformed paths are a 422 with the InvalidPath kind."""
        client, _, _ = client_with_session

        response = client.get("/files/content", params={"path": "../secret"})

        assert response.status_code == 422
        assert response.json()["error"] == "InvalidPath"

    def test_path_required(self, client_with_session):
        """Verify the path query parameter is required."""
        client, _, _ = client_with_session
        assert client.get("/files/content").status_code == 422


class TestListDirectory:
    """Tests for GET /files/directory."""

    def test_root_by_default(self, client_with_session):
        """Verify the root is listed when no path is given."""
        client, _, _ = client_with_session

        data = client.get("/files/directory").json()

        assert data["path"] == "/"
        assert [(e["name"], e["type"]) for e in data["entries"]] == [
            ("index.html", "file"),
            ("src", "directory"),
        ]

    def test_nested(self, client_with_session):
        """Verify a nested directory is listed."""
        client, _, _ = client_with_session
        data = client.get("/files/directory", params={"path": "src/components/"}).json()
        assert data["path"] == "/src/components"
        assert data["entries"][0]["path"] == "/src/components/Button.jsx"

    def test_missing_directory(self, client_with_session):
        """Verify an absent directory is a 404."""
        client, _, _ = client_with_session
        assert client.get("/files/directory", params={"path": "/lib"}).status_code == 404


class TestSnapshot:
    """Tests for GET /files/snapshot."""

    def test_snapshot(self, client_with_session):
        """Verify the snapshot carries every file's content."""
        client, _, _ = client_with_session

        data = client.get("/files/snapshot").json()

        assert data["files"] == APP_FILES
        assert data["file_count"] == len(APP_FILES)
        assert set(data["revisions"]) == set(APP_FILES)
