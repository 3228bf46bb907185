"""Shared pytest fixtures.

Provides:
- in-memory SQLite engine/session for repository and service tests
- JWT helper and token helpers built from a fixed test key
- a fully wired application (temp-file SQLite, schema auto-created) and a
  TestClient for HTTP-level tests
"""

import uuid
from collections.abc import Callable
from pathlib import Path

import pytest
import pytest_asyncio
from cryptography.fernet import Fernet
from fastapi.testclient import TestClient

from content_api.config import (
    DatabaseSettings,
    EncryptionSettings,
    JwtSettings,
    SeedSettings,
    Settings,
    StaticSettings,
)
from content_api.database import create_session_factory, create_test_engine
from content_api.main import create_app
from content_api.models import Base, User, UserRole
from content_api.utils.encryption import EncryptionService
from content_api.utils.jwt import JwtHelper
from tests.support.constants import ADMIN_EMAIL, ADMIN_PASSWORD, TEST_JWT_KEY


@pytest.fixture
def valid_fernet_key() -> str:
    """Generate a valid Fernet key for testing."""
    return Fernet.generate_key().decode()


@pytest.fixture
def encryption_service(valid_fernet_key: str) -> EncryptionService:
    return EncryptionService(valid_fernet_key)


@pytest.fixture
def jwt_settings() -> JwtSettings:
    return JwtSettings(
        key=TEST_JWT_KEY,
        issuer="TestIssuer",
        audience="TestAudience",
        expiry_minutes=60,
    )


@pytest.fixture
def jwt_helper(jwt_settings: JwtSettings) -> JwtHelper:
    return JwtHelper(jwt_settings)


@pytest_asyncio.fixture
async def async_engine():
    """Create an in-memory SQLite engine with all tables and foreign keys on.

    Yields:
        AsyncEngine: Configured test database engine.
    """
    engine, _ = create_test_engine()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture
async def async_session(async_engine):
    """Create an async session bound to the test engine.

    Uses expire_on_commit=False to match production configuration.
    """
    async with create_session_factory(async_engine)() as session:
        yield session


@pytest.fixture
def app_settings(tmp_path: Path, jwt_settings: JwtSettings, valid_fernet_key: str) -> Settings:
    """Settings for an application backed by a temp-file SQLite database.

    The frontend directory points at ``tmp_path / "build"``, which does not
    exist unless a test creates it before building the app.
    """
    return Settings(
        environment="Testing",
        database=DatabaseSettings(
            url=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
            auto_create_schema=True,
        ),
        jwt=jwt_settings,
        encryption=EncryptionSettings(fernet_key=valid_fernet_key),
        seed=SeedSettings(admin_email=ADMIN_EMAIL, admin_password=ADMIN_PASSWORD),
        static=StaticSettings(directory=str(tmp_path / "build")),
    )


@pytest.fixture
def client(app_settings: Settings):
    """TestClient with the lifespan running (schema created, seeding done)."""
    app = create_app(app_settings)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def make_token(jwt_helper: JwtHelper) -> Callable[..., str]:
    """Build bearer tokens without touching the database.

    Pass ``user_id`` of an existing user when the route writes rows that
    reference the caller.
    """

    def _make(role: UserRole = UserRole.EMPLOYEE, user_id: uuid.UUID | None = None) -> str:
        user = User(
            id=user_id or uuid.uuid4(),
            email=f"{role.value}@example.com",
            full_name=f"Test {role.value.title()}",
            password_hash="unused",
            role=role,
        )
        return jwt_helper.generate_token(user).access_token

    return _make


@pytest.fixture
def auth_headers(make_token: Callable[..., str]) -> Callable[..., dict[str, str]]:
    def _headers(role: UserRole = UserRole.EMPLOYEE, **kwargs) -> dict[str, str]:
        return {"Authorization": f"Bearer {make_token(role, **kwargs)}"}

    return _headers


@pytest.fixture
def admin_headers(client: TestClient) -> dict[str, str]:
    """Bearer header for the seeded admin account."""
    response = client.post(
        "/api/auth/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def register_user(client: TestClient) -> Callable[..., dict]:
    """Register an employee through the API and return the token response."""

    def _register(email: str = "employee@example.com", password: str = "Employee123") -> dict:
        response = client.post(
            "/api/auth/register",
            json={"email": email, "full_name": "Test Employee", "password": password},
        )
        assert response.status_code == 201, response.text
        return response.json()

    return _register
