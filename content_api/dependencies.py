"""Request-scoped service factories.

FastAPI resolves these per request: each service gets the request's
AsyncSession (one unit of work per request) plus whatever shared objects
``create_app`` placed on ``app.state``.
"""

import httpx
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.auth import get_jwt_helper
from content_api.config import Settings
from content_api.database import get_session
from content_api.services import (
    AdRevenueService,
    AdSenseCampaignService,
    AuthService,
    GoogleOAuthService,
    TaskService,
    UserService,
    VideoCategoryService,
    VideoService,
    YouTubeChannelService,
)
from content_api.utils.encryption import EncryptionService
from content_api.utils.jwt import JwtHelper


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_encryption_service(request: Request) -> EncryptionService | None:
    """Shared encryption service, or None when FERNET_KEY is not configured."""
    return request.app.state.encryption_service


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def get_auth_service(
    session: AsyncSession = Depends(get_session),
    jwt_helper: JwtHelper = Depends(get_jwt_helper),
) -> AuthService:
    return AuthService(session, jwt_helper)


def get_user_service(session: AsyncSession = Depends(get_session)) -> UserService:
    return UserService(session)


def get_channel_service(session: AsyncSession = Depends(get_session)) -> YouTubeChannelService:
    return YouTubeChannelService(session)


def get_category_service(session: AsyncSession = Depends(get_session)) -> VideoCategoryService:
    return VideoCategoryService(session)


def get_video_service(session: AsyncSession = Depends(get_session)) -> VideoService:
    return VideoService(session)


def get_campaign_service(session: AsyncSession = Depends(get_session)) -> AdSenseCampaignService:
    return AdSenseCampaignService(session)


def get_revenue_service(session: AsyncSession = Depends(get_session)) -> AdRevenueService:
    return AdRevenueService(session)


def get_task_service(session: AsyncSession = Depends(get_session)) -> TaskService:
    return TaskService(session)


def get_oauth_service(
    session: AsyncSession = Depends(get_session),
    settings: Settings = Depends(get_app_settings),
    jwt_helper: JwtHelper = Depends(get_jwt_helper),
    encryption_service: EncryptionService | None = Depends(get_encryption_service),
    http_client: httpx.AsyncClient = Depends(get_http_client),
) -> GoogleOAuthService:
    return GoogleOAuthService(
        settings.google_oauth,
        jwt_helper,
        encryption_service,
        http_client,
        session,
    )
