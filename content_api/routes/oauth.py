"""Google OAuth routes for linking YouTube channels.

The callback is public: Google's redirect carries no bearer token, so the
signed ``state`` parameter authenticates it instead.
"""

import uuid

import structlog
from fastapi import APIRouter, Depends, Query

from content_api.auth import AuthenticatedUser, get_current_user
from content_api.dependencies import get_oauth_service
from content_api.exceptions import PermissionDeniedError
from content_api.schemas.oauth import AuthorizationUrlResponse, OAuthLinkResult
from content_api.services import GoogleOAuthService

log = structlog.get_logger(__name__)
router = APIRouter(prefix="/api/oauth/google", tags=["oauth"])


@router.get("/authorize", response_model=AuthorizationUrlResponse)
async def authorize(
    channel_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: GoogleOAuthService = Depends(get_oauth_service),
) -> AuthorizationUrlResponse:
    url, state = await service.build_authorization_url(channel_id, user.id)
    return AuthorizationUrlResponse(authorization_url=url, state=state)


@router.get("/callback", response_model=OAuthLinkResult)
async def callback(
    state: str,
    code: str | None = None,
    error: str | None = Query(default=None, description="Set by Google when consent is denied"),
    service: GoogleOAuthService = Depends(get_oauth_service),
) -> OAuthLinkResult:
    if error or not code:
        log.info("oauth_consent_denied", error=error or "missing_code")
        raise PermissionDeniedError(f"Google authorization was not granted: {error or 'no code'}")

    channel = await service.handle_callback(code, state)
    return OAuthLinkResult(
        channel_id=channel.id,
        linked=channel.is_oauth_linked,
        token_expires_at=channel.oauth_token_expires_at,
    )


@router.post("/channels/{channel_id}/refresh", response_model=OAuthLinkResult)
async def refresh_token(
    channel_id: uuid.UUID,
    user: AuthenticatedUser = Depends(get_current_user),
    service: GoogleOAuthService = Depends(get_oauth_service),
) -> OAuthLinkResult:
    channel = await service.refresh_channel_token(channel_id)
    return OAuthLinkResult(
        channel_id=channel.id,
        linked=channel.is_oauth_linked,
        token_expires_at=channel.oauth_token_expires_at,
    )
