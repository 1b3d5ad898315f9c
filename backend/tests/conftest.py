"""
Shared test fixtures and utilities.

Every app-level test runs against a container built from the in-memory
store and identity provider, so no network or database is touched.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import ServiceContainer
from modules.auth.identity import InMemoryIdentityProvider
from shared.config import Settings, get_settings
from shared.models import AuthContext, Role
from shared.store import InMemoryDocumentStore


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"

ADMIN_ID = "admin-user-1"
RESIDENT_ID = "resident-user-1"
OTHER_RESIDENT_ID = "resident-user-2"
TEST_PASSWORD = "password123"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
    secret: str = TEST_JWT_SECRET,
    **claims,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified
        secret: Signing secret
        **claims: Extra claims (e.g. app_metadata={"role": "admin"})

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
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def bearer(user_id: str, **claims) -> dict[str, str]:
    """Authorization header for a user id."""
    return {"Authorization": f"Bearer {create_test_token(user_id=user_id, email=f'{user_id}@example.com', **claims)}"}


def make_settings(**overrides) -> Settings:
    """Settings isolated from the developer's .env and environment."""
    values = {
        "environment": "test",
        "backend": "memory",
        "supabase_jwt_secret": TEST_JWT_SECRET,
        **overrides,
    }
    return Settings(_env_file=None, **values)


def seed_user(
    container: ServiceContainer,
    user_id: str,
    role: Role = Role.RESIDENT,
    email: Optional[str] = None,
    password: str = TEST_PASSWORD,
    **fields,
):
    """
    Create an identity and its application user record.

    The identity is created in the in-memory provider so profile and
    password operations work for seeded users.
    """
    email = email or f"{user_id}@example.com"
    container.identity.create_user(
        email,
        password,
        display_name=fields.get("display_name", ""),
        user_id=user_id,
    )
    return container.users.create({
        "id": user_id,
        "email": email,
        "role": role.value,
        **fields,
    })


def context_for(user_id: str, role: Role = Role.RESIDENT) -> AuthContext:
    return AuthContext(identity_id=user_id, email=f"{user_id}@example.com", role=role, email_verified=True)


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Clear the cached settings before and after each test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return make_settings()


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def identity() -> InMemoryIdentityProvider:
    return InMemoryIdentityProvider(TEST_JWT_SECRET)


@pytest.fixture
def container(settings, store, identity) -> ServiceContainer:
    """Service container wired to in-memory collaborators, with seeded users."""
    container = ServiceContainer(settings, store=store, identity=identity)
    seed_user(container, ADMIN_ID, Role.ADMIN, display_name="Admin")
    seed_user(container, RESIDENT_ID, display_name="Resident One", flat_number="A-101")
    seed_user(container, OTHER_RESIDENT_ID, display_name="Resident Two", flat_number="B-202")
    return container


@pytest.fixture
def app(container):
    return create_app(container=container)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def admin_headers() -> dict[str, str]:
    return bearer(ADMIN_ID)


@pytest.fixture
def resident_headers() -> dict[str, str]:
    return bearer(RESIDENT_ID)


@pytest.fixture
def other_resident_headers() -> dict[str, str]:
    return bearer(OTHER_RESIDENT_ID)
