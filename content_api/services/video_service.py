"""Video management and publishing."""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError
from content_api.models import Video, VideoCategory, VideoStatus, YouTubeChannel, utcnow
from content_api.repositories import Repository, VideoRepository
from content_api.schemas.video import VideoCreate, VideoUpdate

log = structlog.get_logger(__name__)


class VideoService:
    """CRUD plus the publish action.

    ``published_at`` is stamped the first time a video enters the
    ``published`` status, whether through publish() or a status update.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.videos = VideoRepository(session)
        self.channels = Repository(YouTubeChannel, session)
        self.categories = Repository(VideoCategory, session)

    async def list_videos(
        self,
        channel_id: uuid.UUID | None = None,
        category_id: uuid.UUID | None = None,
        status: VideoStatus | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> list[Video]:
        return await self.videos.search(
            channel_id=channel_id,
            category_id=category_id,
            status=status,
            offset=offset,
            limit=limit,
        )

    async def get_video(self, video_id: uuid.UUID) -> Video:
        return await self.videos.get_or_raise(video_id)

    async def _check_youtube_id_free(
        self, youtube_video_id: str | None, exclude_id: uuid.UUID | None = None
    ) -> None:
        if youtube_video_id is None:
            return
        existing = await self.videos.get_by_youtube_id(youtube_video_id)
        if existing is not None and existing.id != exclude_id:
            raise ConflictError(f"YouTube video already tracked: {youtube_video_id}")

    async def create_video(self, data: VideoCreate) -> Video:
        """Create a video.

        Raises:
            NotFoundError: If the channel or category does not exist.
            ConflictError: If the YouTube video id is already tracked.
        """
        await self.channels.get_or_raise(data.channel_id)
        if data.category_id is not None:
            await self.categories.get_or_raise(data.category_id)
        await self._check_youtube_id_free(data.youtube_video_id)

        video = Video(**data.model_dump())
        if video.status == VideoStatus.PUBLISHED:
            video.published_at = utcnow()

        video = await self.videos.add(video)
        log.info(
            "video_created",
            video_id=str(video.id),
            channel_id=str(video.channel_id),
            status=video.status.value,
        )
        return video

    async def update_video(self, video_id: uuid.UUID, data: VideoUpdate) -> Video:
        video = await self.videos.get_or_raise(video_id)
        values = data.model_dump(exclude_unset=True)
        for required in ("title", "view_count", "like_count"):
            if values.get(required, ...) is None:
                values.pop(required)
        if values.get("category_id") is not None:
            await self.categories.get_or_raise(values["category_id"])
        if "youtube_video_id" in values:
            await self._check_youtube_id_free(values["youtube_video_id"], exclude_id=video.id)
        if values.get("status") is None:
            values.pop("status", None)
        elif values["status"] == VideoStatus.PUBLISHED and video.published_at is None:
            values["published_at"] = utcnow()

        return await self.videos.update(video, values)

    async def publish_video(
        self, video_id: uuid.UUID, youtube_video_id: str | None = None
    ) -> Video:
        """Mark a video published.

        Raises:
            ConflictError: If the video is archived, or the YouTube id is
                already used by another video.
        """
        video = await self.videos.get_or_raise(video_id)
        if video.status == VideoStatus.ARCHIVED:
            raise ConflictError("Archived videos cannot be published")

        values: dict = {"status": VideoStatus.PUBLISHED}
        if video.published_at is None:
            values["published_at"] = utcnow()
        if youtube_video_id is not None:
            await self._check_youtube_id_free(youtube_video_id, exclude_id=video.id)
            values["youtube_video_id"] = youtube_video_id

        video = await self.videos.update(video, values)
        log.info("video_published", video_id=str(video.id), youtube_video_id=video.youtube_video_id)
        return video

    async def delete_video(self, video_id: uuid.UUID) -> None:
        video = await self.videos.get_or_raise(video_id)
        await self.videos.delete(video)
        log.info("video_deleted", video_id=str(video_id))
