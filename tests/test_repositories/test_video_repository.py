"""Tests for VideoRepository and UserRepository queries."""

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import UserRole, VideoStatus
from content_api.repositories import UserRepository, VideoRepository
from tests.support.factories import create_category, create_channel, create_user, create_video


class TestVideoRepository:
    @pytest.mark.asyncio
    async def test_search_filters(self, async_session: AsyncSession) -> None:
        channel = await create_channel(async_session)
        other_channel = await create_channel(async_session, name="Other")
        category = await create_category(async_session)
        match = await create_video(
            async_session, channel.id, status=VideoStatus.PUBLISHED, category_id=category.id
        )
        await create_video(async_session, channel.id, status=VideoStatus.DRAFT)
        await create_video(async_session, other_channel.id, status=VideoStatus.PUBLISHED)
        repo = VideoRepository(async_session)

        by_channel = await repo.search(channel_id=channel.id)
        by_all = await repo.search(
            channel_id=channel.id, category_id=category.id, status=VideoStatus.PUBLISHED
        )

        assert len(by_channel) == 2
        assert [v.id for v in by_all] == [match.id]

    @pytest.mark.asyncio
    async def test_get_by_youtube_id(self, async_session: AsyncSession) -> None:
        channel = await create_channel(async_session)
        video = await create_video(async_session, channel.id, youtube_video_id="dQw4w9WgXcQ")
        repo = VideoRepository(async_session)

        assert (await repo.get_by_youtube_id("dQw4w9WgXcQ")).id == video.id
        assert await repo.get_by_youtube_id("missing") is None

    @pytest.mark.asyncio
    async def test_count_by_status_includes_zeroes(self, async_session: AsyncSession) -> None:
        """[P1] Every status is present in the breakdown."""
        channel = await create_channel(async_session)
        await create_video(async_session, channel.id, status=VideoStatus.PUBLISHED)
        await create_video(async_session, channel.id, status=VideoStatus.PUBLISHED)
        await create_video(async_session, channel.id, status=VideoStatus.DRAFT)

        counts = await VideoRepository(async_session).count_by_status(channel.id)

        assert counts == {
            VideoStatus.DRAFT: 1,
            VideoStatus.SCHEDULED: 0,
            VideoStatus.PUBLISHED: 2,
            VideoStatus.ARCHIVED: 0,
        }

    @pytest.mark.asyncio
    async def test_total_views(self, async_session: AsyncSession) -> None:
        channel = await create_channel(async_session)
        empty = await create_channel(async_session, name="Empty")
        await create_video(async_session, channel.id, view_count=100)
        await create_video(async_session, channel.id, view_count=250)
        repo = VideoRepository(async_session)

        assert await repo.total_views(channel.id) == 350
        assert await repo.total_views(empty.id) == 0


class TestUserRepository:
    @pytest.mark.asyncio
    async def test_get_by_email_is_case_insensitive(self, async_session: AsyncSession) -> None:
        user = await create_user(async_session, email="someone@example.com")

        found = await UserRepository(async_session).get_by_email("SomeOne@Example.com")

        assert found.id == user.id

    @pytest.mark.asyncio
    async def test_list_by_role(self, async_session: AsyncSession) -> None:
        alice = await create_user(async_session, full_name="Alice", role=UserRole.EMPLOYEE)
        await create_user(async_session, full_name="Bob", role=UserRole.EMPLOYEE, is_active=False)
        await create_user(async_session, full_name="Carol", role=UserRole.MANAGER)
        repo = UserRepository(async_session)

        employees = await repo.list_by_role(UserRole.EMPLOYEE)
        active_employees = await repo.list_by_role(UserRole.EMPLOYEE, active_only=True)

        assert [u.full_name for u in employees] == ["Alice", "Bob"]
        assert [u.id for u in active_employees] == [alice.id]
