"""Pytest configuration and shared fixtures."""

# Load environment variables from .env file at test startup
# so WORKSPACE_* settings are visible before fixtures are created
from dotenv import load_dotenv
load_dotenv()

# Import all fixtures from fixture modules
pytest_plugins = [
    "tests.fixtures.core.file_systems",
    "tests.fixtures.core.invocations",
    "tests.fixtures.core.sessions",
    "tests.fixtures.api",
]
