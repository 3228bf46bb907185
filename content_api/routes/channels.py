"""YouTube channel routes."""

import uuid

from fastapi import APIRouter, Depends, Query, status

from content_api.auth import get_current_user
from content_api.dependencies import get_channel_service
from content_api.schemas.channel import (
    ChannelCreate,
    ChannelResponse,
    ChannelStats,
    ChannelUpdate,
)
from content_api.schemas.video import VideoResponse
from content_api.services import YouTubeChannelService

router = APIRouter(
    prefix="/api/channels", tags=["channels"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[ChannelResponse])
async def list_channels(
    active_only: bool = False,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    service: YouTubeChannelService = Depends(get_channel_service),
) -> list:
    return await service.list_channels(active_only=active_only, offset=offset, limit=limit)


@router.post("", response_model=ChannelResponse, status_code=status.HTTP_201_CREATED)
async def create_channel(
    data: ChannelCreate, service: YouTubeChannelService = Depends(get_channel_service)
):
    return await service.create_channel(data)


@router.get("/{channel_id}", response_model=ChannelResponse)
async def get_channel(
    channel_id: uuid.UUID, service: YouTubeChannelService = Depends(get_channel_service)
):
    return await service.get_channel(channel_id)


@router.put("/{channel_id}", response_model=ChannelResponse)
async def update_channel(
    channel_id: uuid.UUID,
    data: ChannelUpdate,
    service: YouTubeChannelService = Depends(get_channel_service),
):
    return await service.update_channel(channel_id, data)


@router.delete("/{channel_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_channel(
    channel_id: uuid.UUID, service: YouTubeChannelService = Depends(get_channel_service)
) -> None:
    await service.delete_channel(channel_id)


@router.get("/{channel_id}/stats", response_model=ChannelStats)
async def channel_stats(
    channel_id: uuid.UUID, service: YouTubeChannelService = Depends(get_channel_service)
) -> ChannelStats:
    return await service.get_stats(channel_id)


@router.get("/{channel_id}/videos", response_model=list[VideoResponse])
async def channel_videos(
    channel_id: uuid.UUID,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    service: YouTubeChannelService = Depends(get_channel_service),
) -> list:
    return await service.list_videos(channel_id, offset=offset, limit=limit)
