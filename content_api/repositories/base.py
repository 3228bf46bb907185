"""Generic async repository over a single SQLAlchemy model.

Repositories own query construction; services own business rules and
transaction boundaries. A repository never commits. It only adds, flushes
and deletes within the caller's session so the per-request unit of work
commits or rolls back as a whole.

Usage:
    repo = Repository(VideoCategory, session)
    category = await repo.get(category_id)
    categories = await repo.list_all(offset=0, limit=50)
"""

import uuid
from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError, NotFoundError
from content_api.models import Base

ModelT = TypeVar("ModelT", bound=Base)

DEFAULT_PAGE_SIZE = 50
MAX_PAGE_SIZE = 200


class Repository(Generic[ModelT]):
    """Create/read/update/delete operations for one model class.

    Per-entity repositories subclass this and add their own queries.

    Attributes:
        model: Mapped class this repository manages.
        session: Request-scoped async session.
    """

    entity_name: str | None = None

    def __init__(self, model: type[ModelT], session: AsyncSession) -> None:
        self.model = model
        self.session = session

    @property
    def _entity_name(self) -> str:
        return self.entity_name or self.model.__name__

    def _select(self) -> Select[tuple[ModelT]]:
        """Base SELECT used by list/count; subclasses may add eager loads."""
        return select(self.model)

    async def get(self, entity_id: uuid.UUID) -> ModelT | None:
        return await self.session.get(self.model, entity_id)

    async def get_or_raise(self, entity_id: uuid.UUID) -> ModelT:
        """Get an entity by primary key.

        Raises:
            NotFoundError: If no row exists with this id.
        """
        entity = await self.get(entity_id)
        if entity is None:
            raise NotFoundError(self._entity_name, entity_id)
        return entity

    async def list_all(
        self,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
        filters: Sequence[Any] = (),
        order_by: Sequence[Any] = (),
    ) -> list[ModelT]:
        """List entities with optional WHERE clauses and ordering.

        Args:
            offset: Rows to skip.
            limit: Maximum rows (capped at MAX_PAGE_SIZE).
            filters: SQLAlchemy boolean expressions combined with AND.
            order_by: Ordering expressions (default: primary key).
        """
        query = self._select().where(*filters)
        if order_by:
            query = query.order_by(*order_by)
        else:
            query = query.order_by(*self.model.__mapper__.primary_key)
        query = query.offset(max(offset, 0)).limit(min(max(limit, 1), MAX_PAGE_SIZE))

        result = await self.session.execute(query)
        return list(result.scalars().unique().all())

    async def count(self, filters: Sequence[Any] = ()) -> int:
        query = select(func.count()).select_from(self.model).where(*filters)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def exists(self, *filters: Any) -> bool:
        query = select(self.model).where(*filters).limit(1)
        result = await self.session.execute(query)
        return result.scalars().first() is not None

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except IntegrityError as e:
            raise ConflictError(
                f"{self._entity_name} conflicts with existing data",
                details={"entity": self._entity_name},
            ) from e

    async def add(self, entity: ModelT) -> ModelT:
        """Add a new entity and flush so database defaults and ids are populated.

        Raises:
            ConflictError: If the row violates a unique or foreign key constraint.
        """
        self.session.add(entity)
        await self._flush()
        await self.session.refresh(entity)
        return entity

    async def update(self, entity: ModelT, values: dict[str, Any]) -> ModelT:
        """Apply attribute changes to a persistent entity and flush."""
        for field, value in values.items():
            setattr(entity, field, value)
        await self._flush()
        await self.session.refresh(entity)
        return entity

    async def delete(self, entity: ModelT) -> None:
        """Delete an entity.

        Raises:
            ConflictError: If other rows still reference it (RESTRICT).
        """
        await self.session.delete(entity)
        await self._flush()
