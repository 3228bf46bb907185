"""Pydantic schemas for request validation and response serialization."""

from content_api.schemas.auth import LoginRequest, RegisterRequest, TokenResponse
from content_api.schemas.campaign import (
    CampaignCreate,
    CampaignResponse,
    CampaignSummary,
    CampaignUpdate,
)
from content_api.schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from content_api.schemas.channel import (
    ChannelCreate,
    ChannelResponse,
    ChannelStats,
    ChannelUpdate,
)
from content_api.schemas.oauth import AuthorizationUrlResponse, OAuthLinkResult
from content_api.schemas.revenue import RevenueCreate, RevenueResponse, RevenueUpdate
from content_api.schemas.task import (
    CommentCreate,
    CommentResponse,
    TaskAssign,
    TaskCreate,
    TaskResponse,
    TaskStatusChange,
    TaskUpdate,
)
from content_api.schemas.user import EmployeeSummary, UserResponse, UserUpdate
from content_api.schemas.video import VideoCreate, VideoPublish, VideoResponse, VideoUpdate

__all__ = [
    "AuthorizationUrlResponse",
    "CampaignCreate",
    "CampaignResponse",
    "CampaignSummary",
    "CampaignUpdate",
    "CategoryCreate",
    "CategoryResponse",
    "CategoryUpdate",
    "ChannelCreate",
    "ChannelResponse",
    "ChannelStats",
    "ChannelUpdate",
    "CommentCreate",
    "CommentResponse",
    "EmployeeSummary",
    "LoginRequest",
    "OAuthLinkResult",
    "RegisterRequest",
    "RevenueCreate",
    "RevenueResponse",
    "RevenueUpdate",
    "TaskAssign",
    "TaskCreate",
    "TaskResponse",
    "TaskStatusChange",
    "TaskUpdate",
    "TokenResponse",
    "UserResponse",
    "UserUpdate",
    "VideoCreate",
    "VideoPublish",
    "VideoResponse",
    "VideoUpdate",
]
