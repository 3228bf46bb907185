"""Video category management."""

import uuid

import structlog
from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError
from content_api.models import VideoCategory
from content_api.repositories import Repository
from content_api.schemas.category import CategoryCreate, CategoryUpdate

log = structlog.get_logger(__name__)


class VideoCategoryService:
    def __init__(self, session: AsyncSession) -> None:
        self.categories = Repository(VideoCategory, session)

    async def list_categories(self) -> list[VideoCategory]:
        return await self.categories.list_all(limit=200, order_by=[VideoCategory.name])

    async def get_category(self, category_id: uuid.UUID) -> VideoCategory:
        return await self.categories.get_or_raise(category_id)

    async def _check_name_free(self, name: str, exclude_id: uuid.UUID | None = None) -> None:
        # Names are unique regardless of case ("Gaming" vs "gaming")
        filters = [func.lower(VideoCategory.name) == name.lower()]
        if exclude_id is not None:
            filters.append(VideoCategory.id != exclude_id)
        if await self.categories.exists(*filters):
            raise ConflictError(f"Category already exists: {name}")

    async def create_category(self, data: CategoryCreate) -> VideoCategory:
        await self._check_name_free(data.name)
        category = await self.categories.add(VideoCategory(**data.model_dump()))
        log.info("category_created", category_id=str(category.id), name=category.name)
        return category

    async def update_category(
        self, category_id: uuid.UUID, data: CategoryUpdate
    ) -> VideoCategory:
        category = await self.categories.get_or_raise(category_id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in values:
            await self._check_name_free(values["name"], exclude_id=category.id)
        return await self.categories.update(category, values)

    async def delete_category(self, category_id: uuid.UUID) -> None:
        """Delete a category; its videos become uncategorized."""
        category = await self.categories.get_or_raise(category_id)
        await self.categories.delete(category)
        log.info("category_deleted", category_id=str(category_id))
