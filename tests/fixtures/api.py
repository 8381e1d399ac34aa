"""Shared fixtures for API testing.

These fixtures provide a TestClient and a fresh ProjectSession for each
test, ensuring test isolation.
"""

import pytest
from fastapi.testclient import TestClient

from main import app
from models.project import InMemoryProjectStore
from tests.fixtures.core.file_systems import APP_FILES
from tests.fixtures.core.sessions import create_session


@pytest.fixture
def test_client():
    """Provide a FastAPI TestClient running the app lifespan.

    Yields:
        A TestClient bound to the process-wide session.
    """
    with TestClient(app) as client:
        yield client


@pytest.fixture
def api_session():
    """Provide a fresh session holding APP_FILES for dependency overrides."""
    return create_session(APP_FILES)


@pytest.fixture
def api_store():
    """Provide an empty project store for dependency overrides."""
    return InMemoryProjectStore()
