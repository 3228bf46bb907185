"""Bearer authentication and role authorization dependencies.

Every protected route depends on ``get_current_user`` (directly or through
``require_roles``), so authentication and authorization run before the
handler. Failures raise AuthenticationError (401, with
``WWW-Authenticate: Bearer``) or PermissionDeniedError (403); the exception
handlers in content_api.main turn them into JSON responses.

Usage:
    from content_api.auth import AuthenticatedUser, get_current_user, require_roles

    @router.get("/protected")
    async def protected(user: AuthenticatedUser = Depends(get_current_user)):
        return {"user_id": user.id}

    @router.delete("/{user_id}", dependencies=[Depends(require_roles(UserRole.ADMIN))])
    async def delete_user(...): ...
"""

import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

import structlog
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from content_api.exceptions import AuthenticationError, PermissionDeniedError
from content_api.models import UserRole
from content_api.utils.jwt import JwtHelper

log = structlog.get_logger(__name__)

# auto_error=False so a missing header becomes our 401, not FastAPI's 403
bearer_scheme = HTTPBearer(auto_error=False, description="JWT issued by /api/auth/login")


@dataclass(frozen=True)
class AuthenticatedUser:
    """Principal built from validated token claims."""

    id: uuid.UUID
    email: str
    name: str
    role: UserRole

    def has_role(self, *roles: UserRole) -> bool:
        return self.role in roles


def get_jwt_helper(request: Request) -> JwtHelper:
    return request.app.state.jwt_helper


async def get_current_user(
    request: Request,
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
    jwt_helper: JwtHelper = Depends(get_jwt_helper),
) -> AuthenticatedUser:
    """Validate the bearer token and attach the principal to ``request.state.user``.

    Raises:
        AuthenticationError: If the header is missing, the token is
            malformed, expired, signed with another key, or carries claims
            this API does not recognize.
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationError("Missing bearer token")

    claims = jwt_helper.validate_token(credentials.credentials)
    try:
        user = AuthenticatedUser(
            id=uuid.UUID(claims["sub"]),
            email=claims.get("email", ""),
            name=claims.get("name", ""),
            role=UserRole(claims["role"]),
        )
    except (KeyError, ValueError) as e:
        log.debug("token_claims_rejected", error=type(e).__name__)
        raise AuthenticationError("Invalid token") from e

    request.state.user = user
    return user


def require_roles(*roles: UserRole) -> Callable[..., Awaitable[AuthenticatedUser]]:
    """Build a dependency that admits only users holding one of ``roles``.

    Raises:
        PermissionDeniedError: If the authenticated user's role is not allowed.
    """
    allowed = ", ".join(role.value for role in roles)

    async def _check_role(
        user: AuthenticatedUser = Depends(get_current_user),
    ) -> AuthenticatedUser:
        if not user.has_role(*roles):
            log.info(
                "authorization_denied",
                user_id=str(user.id),
                role=user.role.value,
                required=allowed,
            )
            raise PermissionDeniedError(f"Requires role: {allowed}")
        return user

    return _check_role


require_admin = require_roles(UserRole.ADMIN)
require_manager = require_roles(UserRole.ADMIN, UserRole.MANAGER)
