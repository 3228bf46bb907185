"""User administration."""

import uuid

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError
from content_api.models import User, UserRole
from content_api.repositories import UserRepository
from content_api.schemas.user import UserUpdate

log = structlog.get_logger(__name__)


class UserService:
    def __init__(self, session: AsyncSession) -> None:
        self.users = UserRepository(session)

    async def list_users(
        self, role: UserRole | None = None, offset: int = 0, limit: int = 50
    ) -> list[User]:
        return await self.users.list_by_role(role=role, offset=offset, limit=limit)

    async def list_employees(self) -> list[User]:
        """Active users who can be assigned tasks."""
        return await self.users.list_by_role(active_only=True, limit=200)

    async def get_user(self, user_id: uuid.UUID) -> User:
        return await self.users.get_or_raise(user_id)

    async def update_user(
        self, user_id: uuid.UUID, data: UserUpdate, acting_user_id: uuid.UUID
    ) -> User:
        """Apply an admin update.

        Raises:
            NotFoundError: If the user does not exist.
            ConflictError: If the new email is taken, or an admin tries to
                demote or deactivate their own account.
        """
        user = await self.users.get_or_raise(user_id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)

        if "email" in values and values["email"] != user.email:
            if await self.users.get_by_email(values["email"]) is not None:
                raise ConflictError(f"Email already registered: {values['email']}")

        if user.id == acting_user_id:
            if values.get("role", user.role) != user.role or values.get("is_active") is False:
                raise ConflictError("Administrators cannot demote or deactivate themselves")

        user = await self.users.update(user, values)
        log.info("user_updated", user_id=str(user.id), fields=sorted(values))
        return user

    async def delete_user(self, user_id: uuid.UUID, acting_user_id: uuid.UUID) -> None:
        """Delete a user.

        Raises:
            ConflictError: When deleting one's own account, or when the user
                still authored tasks or comments.
        """
        if user_id == acting_user_id:
            raise ConflictError("Administrators cannot delete their own account")
        user = await self.users.get_or_raise(user_id)
        await self.users.delete(user)
        log.info("user_deleted", user_id=str(user_id))
