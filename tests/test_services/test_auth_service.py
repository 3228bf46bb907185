"""Tests for AuthService registration and login."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import AuthenticationError, ConflictError
from content_api.models import UserRole
from content_api.schemas.auth import LoginRequest, RegisterRequest
from content_api.services import AuthService
from content_api.utils.jwt import JwtHelper
from tests.support.factories import create_user


@pytest.fixture
def service(async_session: AsyncSession, jwt_helper: JwtHelper) -> AuthService:
    return AuthService(async_session, jwt_helper)


class TestRegister:
    @pytest.mark.asyncio
    async def test_register_creates_employee(
        self, service: AuthService, jwt_helper: JwtHelper
    ) -> None:
        """[P0] Self-registered accounts are employees and get a token.

        GIVEN: A new email
        WHEN: register() is called
        THEN: An active employee is stored and a valid token is issued
        """
        data = RegisterRequest(
            email="New.Person@Example.com", full_name="New Person", password="Password1"
        )

        # WHEN: Registering
        user, token = await service.register(data)

        # THEN: Employee with a usable token
        assert user.email == "new.person@example.com"
        assert user.role == UserRole.EMPLOYEE
        assert user.is_active is True
        assert user.password_hash != "Password1"
        claims = jwt_helper.validate_token(token.access_token)
        assert claims["sub"] == str(user.id)
        assert claims["role"] == "employee"

    @pytest.mark.asyncio
    async def test_duplicate_email_conflicts(
        self, service: AuthService, async_session: AsyncSession
    ) -> None:
        """[P0] Emails are unique regardless of case."""
        await create_user(async_session, email="taken@example.com")

        with pytest.raises(ConflictError):
            await service.register(
                RegisterRequest(
                    email="TAKEN@example.com", full_name="Someone", password="Password1"
                )
            )


class TestLogin:
    @pytest.mark.asyncio
    async def test_valid_credentials(
        self, service: AuthService, async_session: AsyncSession
    ) -> None:
        user = await create_user(
            async_session, email="login@example.com", password="Secret123", role=UserRole.MANAGER
        )

        logged_in, token = await service.login(
            LoginRequest(email="Login@Example.com", password="Secret123")
        )

        assert logged_in.id == user.id
        assert token.expires_in == 3600

    @pytest.mark.asyncio
    async def test_wrong_password_and_unknown_email_look_the_same(
        self, service: AuthService, async_session: AsyncSession
    ) -> None:
        """[P0] Login never reveals which half of the credentials was wrong."""
        await create_user(async_session, email="login@example.com", password="Secret123")

        with pytest.raises(AuthenticationError) as wrong_password:
            await service.login(LoginRequest(email="login@example.com", password="Wrong123"))
        with pytest.raises(AuthenticationError) as unknown_email:
            await service.login(LoginRequest(email="nobody@example.com", password="Secret123"))

        assert wrong_password.value.message == unknown_email.value.message
        assert wrong_password.value.message == "Invalid email or password"

    @pytest.mark.asyncio
    async def test_inactive_user_cannot_log_in(
        self, service: AuthService, async_session: AsyncSession
    ) -> None:
        await create_user(
            async_session, email="gone@example.com", password="Secret123", is_active=False
        )

        with pytest.raises(AuthenticationError, match="disabled"):
            await service.login(LoginRequest(email="gone@example.com", password="Secret123"))


class TestGetActiveUser:
    @pytest.mark.asyncio
    async def test_missing_user(self, service: AuthService) -> None:
        with pytest.raises(AuthenticationError):
            await service.get_active_user(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_deactivated_user(
        self, service: AuthService, async_session: AsyncSession
    ) -> None:
        user = await create_user(async_session, is_active=False)

        with pytest.raises(AuthenticationError):
            await service.get_active_user(user.id)
