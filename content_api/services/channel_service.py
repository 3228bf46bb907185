"""YouTube channel management and per-channel statistics."""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError
from content_api.models import Video, YouTubeChannel
from content_api.repositories import Repository, UserRepository, VideoRepository
from content_api.schemas.channel import ChannelCreate, ChannelStats, ChannelUpdate

log = structlog.get_logger(__name__)


class YouTubeChannelService:
    """CRUD for tracked channels.

    A channel that still has videos cannot be deleted; archive it by setting
    ``is_active`` to false instead.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.channels = Repository(YouTubeChannel, session)
        self.users = UserRepository(session)
        self.videos = VideoRepository(session)

    async def list_channels(
        self, active_only: bool = False, offset: int = 0, limit: int = 50
    ) -> list[YouTubeChannel]:
        filters = [YouTubeChannel.is_active.is_(True)] if active_only else []
        return await self.channels.list_all(
            offset=offset,
            limit=limit,
            filters=filters,
            order_by=[YouTubeChannel.name, YouTubeChannel.id],
        )

    async def get_channel(self, channel_id: uuid.UUID) -> YouTubeChannel:
        return await self.channels.get_or_raise(channel_id)

    async def _check_youtube_id_free(
        self, youtube_channel_id: str | None, exclude_id: uuid.UUID | None = None
    ) -> None:
        if youtube_channel_id is None:
            return
        filters = [YouTubeChannel.youtube_channel_id == youtube_channel_id]
        if exclude_id is not None:
            filters.append(YouTubeChannel.id != exclude_id)
        if await self.channels.exists(*filters):
            raise ConflictError(f"YouTube channel already tracked: {youtube_channel_id}")

    async def create_channel(self, data: ChannelCreate) -> YouTubeChannel:
        if data.owner_id is not None:
            await self.users.get_or_raise(data.owner_id)
        await self._check_youtube_id_free(data.youtube_channel_id)

        channel = await self.channels.add(YouTubeChannel(**data.model_dump()))
        log.info("channel_created", channel_id=str(channel.id), name=channel.name)
        return channel

    async def update_channel(self, channel_id: uuid.UUID, data: ChannelUpdate) -> YouTubeChannel:
        channel = await self.channels.get_or_raise(channel_id)
        values = data.model_dump(exclude_unset=True)
        for required in ("name", "subscriber_count", "is_active"):
            if values.get(required, ...) is None:
                values.pop(required)
        if values.get("owner_id") is not None:
            await self.users.get_or_raise(values["owner_id"])
        if "youtube_channel_id" in values:
            await self._check_youtube_id_free(values["youtube_channel_id"], exclude_id=channel.id)

        channel = await self.channels.update(channel, values)
        log.info("channel_updated", channel_id=str(channel.id), fields=sorted(values))
        return channel

    async def delete_channel(self, channel_id: uuid.UUID) -> None:
        """Delete a channel with no videos.

        Raises:
            NotFoundError: If the channel does not exist.
            ConflictError: If videos still reference the channel.
        """
        channel = await self.channels.get_or_raise(channel_id)
        video_count = await self.videos.count([Video.channel_id == channel_id])
        if video_count:
            raise ConflictError(
                f"Channel has {video_count} video(s); archive it instead",
                details={"video_count": video_count},
            )
        await self.channels.delete(channel)
        log.info("channel_deleted", channel_id=str(channel_id))

    async def get_stats(self, channel_id: uuid.UUID) -> ChannelStats:
        channel = await self.channels.get_or_raise(channel_id)
        by_status = await self.videos.count_by_status(channel_id)
        return ChannelStats(
            channel_id=channel.id,
            total_videos=sum(by_status.values()),
            videos_by_status=by_status,
            total_views=await self.videos.total_views(channel_id),
            subscriber_count=channel.subscriber_count,
        )

    async def list_videos(
        self, channel_id: uuid.UUID, offset: int = 0, limit: int = 50
    ) -> list[Video]:
        await self.channels.get_or_raise(channel_id)
        return await self.videos.search(channel_id=channel_id, offset=offset, limit=limit)
