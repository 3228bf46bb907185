"""Video queries: by channel, category and status, plus per-channel counts."""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import Video, VideoStatus
from content_api.repositories.base import DEFAULT_PAGE_SIZE, Repository


class VideoRepository(Repository[Video]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Video, session)

    async def search(
        self,
        channel_id: uuid.UUID | None = None,
        category_id: uuid.UUID | None = None,
        status: VideoStatus | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[Video]:
        """List videos matching every provided filter, newest first."""
        filters = []
        if channel_id is not None:
            filters.append(Video.channel_id == channel_id)
        if category_id is not None:
            filters.append(Video.category_id == category_id)
        if status is not None:
            filters.append(Video.status == status)

        return await self.list_all(
            offset=offset,
            limit=limit,
            filters=filters,
            order_by=[Video.created_at.desc(), Video.id],
        )

    async def get_by_youtube_id(self, youtube_video_id: str) -> Video | None:
        result = await self.session.execute(
            select(Video).where(Video.youtube_video_id == youtube_video_id)
        )
        return result.scalar_one_or_none()

    async def count_by_status(self, channel_id: uuid.UUID) -> dict[VideoStatus, int]:
        """Count a channel's videos per status (statuses with no videos are 0)."""
        result = await self.session.execute(
            select(Video.status, func.count(Video.id))
            .where(Video.channel_id == channel_id)
            .group_by(Video.status)
        )
        counts = {status: 0 for status in VideoStatus}
        for status, count in result.all():
            counts[status] = count
        return counts

    async def total_views(self, channel_id: uuid.UUID) -> int:
        result = await self.session.execute(
            select(func.coalesce(func.sum(Video.view_count), 0)).where(
                Video.channel_id == channel_id
            )
        )
        return int(result.scalar_one())
