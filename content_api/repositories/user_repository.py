"""User queries."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import User, UserRole
from content_api.repositories.base import DEFAULT_PAGE_SIZE, Repository


class UserRepository(Repository[User]):
    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_email(self, email: str) -> User | None:
        result = await self.session.execute(select(User).where(User.email == email.lower()))
        return result.scalar_one_or_none()

    async def list_by_role(
        self,
        role: UserRole | None = None,
        active_only: bool = False,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[User]:
        filters = []
        if role is not None:
            filters.append(User.role == role)
        if active_only:
            filters.append(User.is_active.is_(True))
        return await self.list_all(
            offset=offset, limit=limit, filters=filters, order_by=[User.full_name, User.id]
        )
