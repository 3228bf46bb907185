"""Registration, login and current-user routes.

- POST /api/auth/register (public)
- POST /api/auth/login (public)
- GET /api/auth/me
"""

import structlog
from fastapi import APIRouter, Depends, status

from content_api.auth import AuthenticatedUser, get_current_user
from content_api.dependencies import get_auth_service
from content_api.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from content_api.schemas.user import UserResponse
from content_api.services import AuthService

log = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=TokenResponse, status_code=status.HTTP_201_CREATED)
async def register(
    data: RegisterRequest, service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    user, token = await service.register(data)
    return TokenResponse(
        access_token=token.access_token,
        token_type=token.token_type,
        expires_in=token.expires_in,
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(
    data: LoginRequest, service: AuthService = Depends(get_auth_service)
) -> TokenResponse:
    user, token = await service.login(data)
    return TokenResponse(
        access_token=token.access_token,
        token_type=token.token_type,
        expires_in=token.expires_in,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserResponse)
async def me(
    current_user: AuthenticatedUser = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service),
) -> UserResponse:
    user = await service.get_active_user(current_user.id)
    return UserResponse.model_validate(user)
