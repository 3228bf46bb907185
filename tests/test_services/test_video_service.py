"""Tests for VideoService, including the publish action."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError, NotFoundError
from content_api.models import VideoStatus
from content_api.schemas.video import VideoCreate, VideoUpdate
from content_api.services import VideoService
from tests.support.factories import create_category, create_channel, create_video


@pytest.fixture
def service(async_session: AsyncSession) -> VideoService:
    return VideoService(async_session)


class TestCreateVideo:
    @pytest.mark.asyncio
    async def test_create_draft(self, service: VideoService, async_session: AsyncSession) -> None:
        channel = await create_channel(async_session)
        category = await create_category(async_session)

        video = await service.create_video(
            VideoCreate(channel_id=channel.id, category_id=category.id, title="Intro")
        )

        assert video.status == VideoStatus.DRAFT
        assert video.published_at is None

    @pytest.mark.asyncio
    async def test_create_published_stamps_date(
        self, service: VideoService, async_session: AsyncSession
    ) -> None:
        channel = await create_channel(async_session)

        video = await service.create_video(
            VideoCreate(channel_id=channel.id, title="Live", status=VideoStatus.PUBLISHED)
        )

        assert video.published_at is not None

    @pytest.mark.asyncio
    async def test_unknown_channel_or_category(
        self, service: VideoService, async_session: AsyncSession
    ) -> None:
        channel = await create_channel(async_session)

        with pytest.raises(NotFoundError):
            await service.create_video(VideoCreate(channel_id=uuid.uuid4(), title="x"))
        with pytest.raises(NotFoundError):
            await service.create_video(
                VideoCreate(channel_id=channel.id, category_id=uuid.uuid4(), title="x")
            )

    @pytest.mark.asyncio
    async def test_duplicate_youtube_id(
        self, service: VideoService, async_session: AsyncSession
    ) -> None:
        channel = await create_channel(async_session)
        await create_video(async_session, channel.id, youtube_video_id="abc123")

        with pytest.raises(ConflictError):
            await service.create_video(
                VideoCreate(channel_id=channel.id, title="x", youtube_video_id="abc123")
            )


class TestPublishVideo:
    @pytest.mark.asyncio
    async def test_publish_sets_status_date_and_id(
        self, service: VideoService, async_session: AsyncSession
    ) -> None:
        """[P0] Publishing stamps published_at once and records the YouTube id.

        GIVEN: A draft video
        WHEN: It is published twice
        THEN: published_at is set by the first call and kept by the second
        """
        channel = await create_channel(async_session)
        video = await create_video(async_session, channel.id)

        # WHEN: Publishing
        first = await service.publish_video(video.id, youtube_video_id="yt-1")
        published_at = first.published_at
        second = await service.publish_video(video.id)

        # THEN: Stamped once
        assert first.status == VideoStatus.PUBLISHED
        assert published_at is not None
        assert second.published_at == published_at
        assert second.youtube_video_id == "yt-1"

    @pytest.mark.asyncio
    async def test_archived_cannot_be_published(
        self, service: VideoService, async_session: AsyncSession
    ) -> None:
        channel = await create_channel(async_session)
        video = await create_video(async_session, channel.id, status=VideoStatus.ARCHIVED)

        with pytest.raises(ConflictError, match="Archived"):
            await service.publish_video(video.id)


class TestUpdateVideo:
    @pytest.mark.asyncio
    async def test_status_change_to_published_stamps_date(
        self, service: VideoService, async_session: AsyncSession
    ) -> None:
        channel = await create_channel(async_session)
        video = await create_video(async_session, channel.id)

        updated = await service.update_video(
            video.id, VideoUpdate(status=VideoStatus.PUBLISHED, view_count=10)
        )

        assert updated.published_at is not None
        assert updated.view_count == 10

    @pytest.mark.asyncio
    async def test_null_status_and_title_are_ignored(
        self, service: VideoService, async_session: AsyncSession
    ) -> None:
        channel = await create_channel(async_session)
        video = await create_video(async_session, channel.id, title="Original")

        updated = await service.update_video(video.id, VideoUpdate(status=None, title=None))

        assert updated.status == VideoStatus.DRAFT
        assert updated.title == "Original"

    @pytest.mark.asyncio
    async def test_delete(self, service: VideoService, async_session: AsyncSession) -> None:
        channel = await create_channel(async_session)
        video = await create_video(async_session, channel.id)

        await service.delete_video(video.id)

        with pytest.raises(NotFoundError):
            await service.get_video(video.id)
