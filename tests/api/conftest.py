"""Shared fixtures for API integration tests.

This module provides the TestClient wired to an isolated ProjectSession and
project store through FastAPI's dependency overrides.
"""

import pytest
from fastapi.testclient import TestClient

from api.dependencies import get_default_project_name, get_project_session, get_project_store
from main import app


@pytest.fixture
def client_with_session(api_session, api_store):
    """Provide a TestClient with a fresh ProjectSession injected.

    Args:
        api_session: A pytest fixture providing a session holding APP_FILES.
        api_store: A pytest fixture providing an empty project store.

    Yields:
        A tuple of (TestClient, ProjectSession, ProjectStore).

    Example:
        def test_something(client_with_session):
            client, session, store = client_with_session
            response = client.get("/files")
            assert response.status_code == 200
    """
    app.dependency_overrides[get_project_session] = lambda: api_session
    app.dependency_overrides[get_project_store] = lambda: api_store
    app.dependency_overrides[get_default_project_name] = lambda: None

    client = TestClient(app)

    yield client, api_session, api_store

    app.dependency_overrides.clear()
