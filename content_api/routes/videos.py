"""Video routes."""

import uuid

from fastapi import APIRouter, Body, Depends, Query, status

from content_api.auth import get_current_user
from content_api.dependencies import get_video_service
from content_api.models import VideoStatus
from content_api.schemas.video import VideoCreate, VideoPublish, VideoResponse, VideoUpdate
from content_api.services import VideoService

router = APIRouter(
    prefix="/api/videos", tags=["videos"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[VideoResponse])
async def list_videos(
    channel_id: uuid.UUID | None = None,
    category_id: uuid.UUID | None = None,
    status_filter: VideoStatus | None = Query(default=None, alias="status"),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    service: VideoService = Depends(get_video_service),
) -> list:
    return await service.list_videos(
        channel_id=channel_id,
        category_id=category_id,
        status=status_filter,
        offset=offset,
        limit=limit,
    )


@router.post("", response_model=VideoResponse, status_code=status.HTTP_201_CREATED)
async def create_video(data: VideoCreate, service: VideoService = Depends(get_video_service)):
    return await service.create_video(data)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(video_id: uuid.UUID, service: VideoService = Depends(get_video_service)):
    return await service.get_video(video_id)


@router.put("/{video_id}", response_model=VideoResponse)
async def update_video(
    video_id: uuid.UUID, data: VideoUpdate, service: VideoService = Depends(get_video_service)
):
    return await service.update_video(video_id, data)


@router.delete("/{video_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_video(
    video_id: uuid.UUID, service: VideoService = Depends(get_video_service)
) -> None:
    await service.delete_video(video_id)


@router.post("/{video_id}/publish", response_model=VideoResponse)
async def publish_video(
    video_id: uuid.UUID,
    data: VideoPublish | None = Body(default=None),
    service: VideoService = Depends(get_video_service),
):
    youtube_video_id = data.youtube_video_id if data is not None else None
    return await service.publish_video(video_id, youtube_video_id=youtube_video_id)
