"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules:
an in-memory store, fast bcrypt, a fixed signing secret, and a service
container wired to the fakes.
"""

import pytest
from fastapi.testclient import TestClient
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api import create_app
from api.dependencies import ServiceContainer, set_container, reset_container
from shared.config import Settings, get_settings
from shared.models import RoleName
from modules.auth.passwords import PasswordHasher
from modules.auth.policy import AccessPolicy
from modules.auth.service import SessionManager
from modules.auth.tokens import TokenSigner
from modules.users.models import User

from tests.fakes import FakeStore


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only-0123456789"

ADMIN_EMAIL = "admin@floe.io"
ADMIN_PASSWORD = "AdminPass1"
USER_PASSWORD = "UserPass1"


def create_test_token(
    user_id: int = 1,
    email: str = "test@example.com",
    role_id: int = 3,
    role_name: str = "viewer",
    expired: bool = False,
    secret: str = TEST_JWT_SECRET,
    algorithm: str = "HS256",
    **extra,
) -> str:
    """
    Create a hand-crafted access token.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        role_id: Role ID claim
        role_name: Role name claim
        expired: If True, creates an expired token
        secret: Signing key
        algorithm: Signing algorithm
        **extra: Additional or overriding claims

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(minutes=15)

    payload = {
        "user_id": user_id,
        "email": email,
        "role_id": role_id,
        "role_name": role_name,
        "sub": str(user_id),
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
        **extra,
    }
    return jwt.encode(payload, secret, algorithm=algorithm)


def auth_header(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        jwt_secret=TEST_JWT_SECRET,
        bcrypt_rounds=4,
        admin_email=ADMIN_EMAIL,
        admin_password=ADMIN_PASSWORD,
        supabase_url="",
        supabase_service_role_key="",
    )


@pytest.fixture
def store() -> FakeStore:
    return FakeStore()


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.fixture
def signer() -> TokenSigner:
    return TokenSigner(TEST_JWT_SECRET, timedelta(minutes=15))


@pytest.fixture
def policy(store: FakeStore) -> AccessPolicy:
    return AccessPolicy(store.memberships)


@pytest.fixture
def session_manager(store, hasher, signer, policy) -> SessionManager:
    return SessionManager(
        users=store.users,
        refresh_tokens=store.refresh_tokens,
        workspaces=store.workspaces,
        hasher=hasher,
        signer=signer,
        policy=policy,
        refresh_ttl=timedelta(days=7),
    )


@pytest.fixture
def roles(store: FakeStore) -> dict[RoleName, int]:
    """Ensure the three fixed roles exist; returns their ids by name."""
    return {
        name: (store.roles.get_by_name(name) or store.roles.create(name, name.description)).id
        for name in RoleName
    }


@pytest.fixture
def make_user(store: FakeStore, hasher: PasswordHasher, roles: dict[RoleName, int]):
    """Factory creating users directly in the fake store."""

    def _make_user(
        email: str,
        role: RoleName = RoleName.VIEWER,
        password: str = USER_PASSWORD,
        active: bool = True,
    ) -> User:
        return store.users.create({
            "email": email,
            "password_hash": hasher.hash_sync(password),
            "role_id": roles[role],
            "active": active,
        })

    return _make_user


@pytest.fixture
def container(test_settings: Settings, store: FakeStore, hasher: PasswordHasher):
    """Install a service container backed by the fake store."""
    container = ServiceContainer(
        settings=test_settings,
        hasher=hasher,
        **store.container_overrides(),
    )
    set_container(container)
    yield container
    reset_container()


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset cached settings and the service container around each test."""
    get_settings.cache_clear()
    reset_container()
    yield
    reset_container()
    get_settings.cache_clear()


@pytest.fixture
def client(container: ServiceContainer):
    """
    Test client for a fresh app; entering it runs the startup bootstrap,
    which creates the admin account in the fake store.
    """
    with TestClient(create_app()) as test_client:
        yield test_client


def login(client: TestClient, email: str, password: str, **extra) -> dict:
    """Log in through the API and return the token pair."""
    response = client.post(
        "/api/auth/login", json={"email": email, "password": password, **extra}
    )
    assert response.status_code == 200, response.text
    return response.json()


@pytest.fixture
def admin_tokens(client: TestClient) -> dict:
    return login(client, ADMIN_EMAIL, ADMIN_PASSWORD)


@pytest.fixture
def admin_headers(admin_tokens: dict) -> dict[str, str]:
    return auth_header(admin_tokens["access_token"])
