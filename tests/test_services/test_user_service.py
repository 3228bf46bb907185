"""Tests for UserService administration rules."""

import uuid

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError, NotFoundError
from content_api.models import UserRole
from content_api.schemas.user import UserUpdate
from content_api.services import UserService
from tests.support.factories import create_task, create_user


@pytest.fixture
def service(async_session: AsyncSession) -> UserService:
    return UserService(async_session)


class TestUserService:
    @pytest.mark.asyncio
    async def test_list_employees_excludes_inactive(
        self, service: UserService, async_session: AsyncSession
    ) -> None:
        active = await create_user(async_session)
        await create_user(async_session, is_active=False)

        employees = await service.list_employees()

        assert [u.id for u in employees] == [active.id]

    @pytest.mark.asyncio
    async def test_change_role(self, service: UserService, async_session: AsyncSession) -> None:
        admin = await create_user(async_session, role=UserRole.ADMIN)
        user = await create_user(async_session)

        updated = await service.update_user(
            user.id, UserUpdate(role=UserRole.MANAGER), acting_user_id=admin.id
        )

        assert updated.role == UserRole.MANAGER

    @pytest.mark.asyncio
    async def test_email_clash(self, service: UserService, async_session: AsyncSession) -> None:
        admin = await create_user(async_session, role=UserRole.ADMIN)
        await create_user(async_session, email="taken@example.com")
        user = await create_user(async_session)

        with pytest.raises(ConflictError):
            await service.update_user(
                user.id, UserUpdate(email="Taken@example.com"), acting_user_id=admin.id
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "update",
        [UserUpdate(role=UserRole.EMPLOYEE), UserUpdate(is_active=False)],
    )
    async def test_admin_cannot_demote_or_deactivate_self(
        self, service: UserService, async_session: AsyncSession, update: UserUpdate
    ) -> None:
        """[P0] An admin cannot lock themselves out."""
        admin = await create_user(async_session, role=UserRole.ADMIN)

        with pytest.raises(ConflictError):
            await service.update_user(admin.id, update, acting_user_id=admin.id)

    @pytest.mark.asyncio
    async def test_admin_can_rename_self(
        self, service: UserService, async_session: AsyncSession
    ) -> None:
        admin = await create_user(async_session, role=UserRole.ADMIN)

        updated = await service.update_user(
            admin.id, UserUpdate(full_name="Head Admin"), acting_user_id=admin.id
        )

        assert updated.full_name == "Head Admin"

    @pytest.mark.asyncio
    async def test_cannot_delete_self(self, service: UserService) -> None:
        admin_id = uuid.uuid4()

        with pytest.raises(ConflictError):
            await service.delete_user(admin_id, acting_user_id=admin_id)

    @pytest.mark.asyncio
    async def test_delete_user(self, service: UserService, async_session: AsyncSession) -> None:
        user = await create_user(async_session)

        await service.delete_user(user.id, acting_user_id=uuid.uuid4())

        with pytest.raises(NotFoundError):
            await service.get_user(user.id)

    @pytest.mark.asyncio
    async def test_user_who_created_tasks_cannot_be_deleted(
        self, service: UserService, async_session: AsyncSession
    ) -> None:
        """[P1] Task authorship is kept (RESTRICT); deactivate instead."""
        user = await create_user(async_session)
        await create_task(async_session, user.id)

        with pytest.raises(ConflictError):
            await service.delete_user(user.id, acting_user_id=uuid.uuid4())
