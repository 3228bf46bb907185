"""Video schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from content_api.models import VideoStatus


class VideoCreate(BaseModel):
    """Schema for creating a video.

    Videos are created as drafts unless a status is given; use the publish
    endpoint to mark a video published so ``published_at`` is stamped.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    channel_id: UUID = Field(..., description="Channel the video belongs to")
    category_id: UUID | None = None
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    youtube_video_id: str | None = Field(default=None, max_length=32)
    status: VideoStatus = VideoStatus.DRAFT
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)


class VideoUpdate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    category_id: UUID | None = None
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    youtube_video_id: str | None = Field(default=None, max_length=32)
    status: VideoStatus | None = None
    view_count: int | None = Field(default=None, ge=0)
    like_count: int | None = Field(default=None, ge=0)


class VideoPublish(BaseModel):
    youtube_video_id: str | None = Field(
        default=None,
        max_length=32,
        description="YouTube id assigned on upload; keeps the stored id when omitted",
    )


class VideoResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    channel_id: UUID
    category_id: UUID | None
    youtube_video_id: str | None
    title: str
    description: str | None
    status: VideoStatus
    published_at: datetime | None
    view_count: int
    like_count: int
    created_at: datetime
    updated_at: datetime
