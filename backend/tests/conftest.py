"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.models import Role, UserAccess
from shared.config import get_settings
from shared.database import reset_client_cache
from shared.models import AuthenticatedUser


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
) -> str:
    """
    Create a test JWT token for authentication.
    
    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
    
    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def query_result(data: Optional[list[dict[str, Any]]] = None, count: Optional[int] = None) -> MagicMock:
    """Build a Supabase execute() result."""
    result = MagicMock()
    result.data = data if data is not None else []
    result.count = count
    return result


def make_access(user_id: str = "test-user-123", *roles: Role) -> UserAccess:
    """Build a UserAccess from role assignments."""
    return UserAccess.from_roles(user_id, roles)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the service container, settings and client caches around each test."""
    reset_container()
    get_settings.cache_clear()
    reset_client_cache()
    yield
    reset_container()
    get_settings.cache_clear()
    reset_client_cache()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def test_user(test_user_id: str, test_user_email: str) -> AuthenticatedUser:
    """An authenticated plain user."""
    return AuthenticatedUser(id=test_user_id, email=test_user_email, email_verified=True)


@pytest.fixture
def mock_auth_service(test_user: AuthenticatedUser) -> AsyncMock:
    """Auth service accepting any token as test_user with no roles."""
    service = AsyncMock()
    service.validate_token.return_value = test_user
    service.get_access.return_value = make_access(test_user.id)
    return service


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
