"""Account registration and credential login.

Emails are normalized to lowercase before lookup and storage. Login never
reveals whether the email or the password was wrong.
"""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import AuthenticationError, ConflictError
from content_api.models import User, UserRole
from content_api.repositories import UserRepository
from content_api.schemas.auth import LoginRequest, RegisterRequest
from content_api.utils.jwt import IssuedToken, JwtHelper
from content_api.utils.passwords import hash_password, verify_password

log = structlog.get_logger(__name__)

INVALID_CREDENTIALS = "Invalid email or password"


class AuthService:
    """Issues bearer tokens for registered users.

    Example:
        >>> service = AuthService(session, jwt_helper)
        >>> user, token = await service.login(LoginRequest(email=..., password=...))
    """

    def __init__(self, session: AsyncSession, jwt_helper: JwtHelper) -> None:
        self.users = UserRepository(session)
        self.jwt_helper = jwt_helper

    async def register(self, data: RegisterRequest) -> tuple[User, IssuedToken]:
        """Create an employee account and sign it in.

        Raises:
            ConflictError: If the email is already registered.
        """
        email = data.email.lower()
        if await self.users.get_by_email(email) is not None:
            raise ConflictError(f"Email already registered: {email}")

        user = await self.users.add(
            User(
                email=email,
                full_name=data.full_name,
                password_hash=hash_password(data.password),
                role=UserRole.EMPLOYEE,
                is_active=True,
            )
        )
        log.info("user_registered", user_id=str(user.id), role=user.role.value)
        return user, self.jwt_helper.generate_token(user)

    async def login(self, data: LoginRequest) -> tuple[User, IssuedToken]:
        """Verify credentials and issue a token.

        Raises:
            AuthenticationError: On unknown email, wrong password or a
                deactivated account.
        """
        user = await self.users.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            log.debug("login_rejected", reason="invalid_credentials")
            raise AuthenticationError(INVALID_CREDENTIALS)

        if not user.is_active:
            log.debug("login_rejected", reason="inactive", user_id=str(user.id))
            raise AuthenticationError("Account is disabled")

        log.info("user_logged_in", user_id=str(user.id))
        return user, self.jwt_helper.generate_token(user)

    async def get_active_user(self, user_id: uuid.UUID) -> User:
        """Load the user behind a validated token.

        Raises:
            AuthenticationError: If the user was deleted or deactivated after
                the token was issued.
        """
        user = await self.users.get(user_id)
        if user is None or not user.is_active:
            raise AuthenticationError("User no longer active")
        return user
