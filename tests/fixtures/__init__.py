"""Test fixtures for the workspace.

This package provides reusable test fixtures:
- core: File systems, tool invocations and project sessions
- api: FastAPI TestClient and an isolated session for API tests
"""
