"""YouTube channel schemas.

OAuth tokens are stored encrypted and are never serialized; responses only
expose whether the channel is linked and when the access token expires.
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from content_api.models import VideoStatus


class ChannelCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=150)
    description: str | None = None
    youtube_channel_id: str | None = Field(
        default=None,
        max_length=64,
        description="YouTube channel id (UC...). Usually filled in by the OAuth link flow.",
    )
    owner_id: UUID | None = None
    subscriber_count: int = Field(default=0, ge=0)


class ChannelUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=150)
    description: str | None = None
    youtube_channel_id: str | None = Field(default=None, max_length=64)
    owner_id: UUID | None = None
    subscriber_count: int | None = Field(default=None, ge=0)
    is_active: bool | None = None


class ChannelResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    description: str | None
    youtube_channel_id: str | None
    owner_id: UUID | None
    subscriber_count: int
    is_active: bool
    is_oauth_linked: bool
    oauth_token_expires_at: datetime | None
    created_at: datetime
    updated_at: datetime


class ChannelStats(BaseModel):
    """Aggregated video figures for one channel."""

    channel_id: UUID
    total_videos: int
    videos_by_status: dict[VideoStatus, int]
    total_views: int
    subscriber_count: int
