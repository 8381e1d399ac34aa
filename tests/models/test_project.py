"""Unit tests for project snapshots and the persistence hand-off."""

import random
from datetime import datetime

import pytest
from pydantic import ValidationError

from models.project import (
    InMemoryProjectStore,
    ProjectCreateRequest,
    ProjectSnapshot,
    default_project_name,
)


class TestDefaultProjectName:
    """Test generated project names."""

    def test_sequence_numbered(self):
        """Verify fresh projects get a 'New Design #N' label."""
        name = default_project_name(rng=random.Random(7))
        assert name.startswith("New Design #")
        assert 0 <= int(name.removeprefix("New Design #")) < 100000

    def test_timestamped_for_anonymous_work(self):
        """Verify promoted anonymous work gets a timestamped label."""
        name = default_project_name(
            from_anonymous_work=True, now=datetime(2025, 1, 15, 9, 5, 7)
        )
        assert name == "Design from 9:05:07 AM"


class TestProjectCreateRequest:
    """Test the persistence payload."""

    def test_name_is_stripped(self):
        """Verify surrounding whitespace is removed from the name."""
        assert ProjectCreateRequest(name="  Landing page ").name == "Landing page"

    def test_blank_name_rejected(self):
        """Verify a blank name fails validation."""
        with pytest.raises(ValidationError):
            ProjectCreateRequest(name="   ")


class TestProjectSnapshot:
    """Test snapshot serialization."""

    def test_to_dict(self):
        """Verify to_dict copies files and revisions."""
        snapshot = ProjectSnapshot(files={"/a": "x"}, revisions={"/a": 2}, revision=5)
        data = snapshot.to_dict()
        assert data["files"] == {"/a": "x"}
        assert data["revisions"] == {"/a": 2}
        assert data["revision"] == 5
        assert snapshot.file_count == 1


class TestInMemoryProjectStore:
    """Test the in-memory persistence collaborator."""

    def test_create_and_get(self, project_store):
        """Verify a created project can be fetched by id."""
        record = project_store.create_project(
            ProjectCreateRequest(name="App", messages=[{"id": "m1"}], data={"/a": "x"})
        )
        assert project_store.get_project(record.project_id) == record
        assert record.data == {"/a": "x"}

    def test_list_most_recent_first(self, project_store):
        """Verify listings put the newest project first."""
        project_store.create_project(ProjectCreateRequest(name="first"))
        project_store.create_project(ProjectCreateRequest(name="second"))
        assert [p.name for p in project_store.list_projects()] == ["second", "first"]

    def test_get_missing(self):
        """Verify an unknown id returns None."""
        assert InMemoryProjectStore().get_project("nope") is None
