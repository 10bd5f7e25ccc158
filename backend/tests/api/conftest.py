"""Fixtures for API route tests."""

import pytest
from unittest.mock import patch
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service
from shared.config import Settings


@pytest.fixture
def app(mock_auth_service):
    """Fresh application with the auth service replaced by a mock."""
    app = create_app()
    app.dependency_overrides[get_auth_service] = lambda: mock_auth_service
    yield app
    app.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def supabase_unconfigured():
    """Services built by the container see no Supabase URL or key."""
    settings = Settings(_env_file=None, supabase_url="", supabase_service_role_key="")
    with patch("shared.database.get_settings", return_value=settings):
        yield
