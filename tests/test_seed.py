"""Tests for startup data seeding."""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

import content_api.seed as seed_module
from content_api.config import DatabaseSettings, JwtSettings, SeedSettings, Settings
from content_api.database import create_session_factory
from content_api.main import run_seeding
from content_api.models import User, UserRole, VideoCategory
from content_api.seed import DEFAULT_CATEGORIES, seed_database
from content_api.utils.passwords import verify_password
from tests.support.constants import TEST_JWT_KEY
from tests.support.factories import create_category, create_user


def _settings(admin_email: str | None = None, admin_password: str | None = None) -> Settings:
    return Settings(
        database=DatabaseSettings(url="sqlite+aiosqlite:///:memory:"),
        jwt=JwtSettings(key=TEST_JWT_KEY, issuer="I", audience="A"),
        seed=SeedSettings(admin_email=admin_email, admin_password=admin_password),
    )


async def _count(session: AsyncSession, model) -> int:
    result = await session.execute(select(func.count()).select_from(model))
    return result.scalar_one()


class TestSeedDatabase:
    @pytest.mark.asyncio
    async def test_seeds_categories_and_admin(self, async_session: AsyncSession) -> None:
        """[P0] Empty database gets baseline categories and the admin.

        GIVEN: An empty database and configured admin credentials
        WHEN: seed_database runs
        THEN: All default categories and one active admin exist
        """
        settings = _settings("Admin@Example.com", "AdminPass123")

        # WHEN: Seeding
        result = await seed_database(async_session, settings)

        # THEN: Everything was created
        assert result.categories_created == len(DEFAULT_CATEGORIES)
        assert result.admin_created is True
        assert await _count(async_session, VideoCategory) == len(DEFAULT_CATEGORIES)

        admin = (
            await async_session.execute(select(User).where(User.email == "admin@example.com"))
        ).scalar_one()
        assert admin.role == UserRole.ADMIN
        assert admin.is_active is True
        assert verify_password("AdminPass123", admin.password_hash)

    @pytest.mark.asyncio
    async def test_second_run_is_noop(self, async_session: AsyncSession) -> None:
        """[P0] Seeding is idempotent."""
        settings = _settings("admin@example.com", "AdminPass123")
        await seed_database(async_session, settings)

        result = await seed_database(async_session, settings)

        assert result.categories_created == 0
        assert result.admin_created is False
        assert await _count(async_session, VideoCategory) == len(DEFAULT_CATEGORIES)
        assert await _count(async_session, User) == 1

    @pytest.mark.asyncio
    async def test_existing_category_matched_case_insensitively(
        self, async_session: AsyncSession
    ) -> None:
        await create_category(async_session, name="gaming")
        await async_session.commit()

        result = await seed_database(async_session, _settings())

        assert result.categories_created == len(DEFAULT_CATEGORIES) - 1
        assert await _count(async_session, VideoCategory) == len(DEFAULT_CATEGORIES)

    @pytest.mark.asyncio
    async def test_admin_skipped_when_not_configured(self, async_session: AsyncSession) -> None:
        result = await seed_database(async_session, _settings())

        assert result.admin_created is False
        assert await _count(async_session, User) == 0

    @pytest.mark.asyncio
    async def test_existing_admin_email_is_left_alone(self, async_session: AsyncSession) -> None:
        """[P1] An existing account is never overwritten by seeding."""
        existing = await create_user(async_session, email="admin@example.com", password="Original1")
        await async_session.commit()

        result = await seed_database(async_session, _settings("admin@example.com", "NewPass123"))

        assert result.admin_created is False
        await async_session.refresh(existing)
        assert existing.role == UserRole.EMPLOYEE
        assert verify_password("Original1", existing.password_hash)

    @pytest.mark.asyncio
    async def test_failure_part_way_leaves_nothing_behind(
        self,
        monkeypatch: pytest.MonkeyPatch,
        async_engine: AsyncEngine,
        async_session: AsyncSession,
    ) -> None:
        """[P0] A failure after categories are staged rolls back the whole seed.

        GIVEN: Hashing the admin password raises after categories were added
        WHEN: Seeding runs through the startup failure boundary
        THEN: It reports failure and no category rows were committed
        """

        def broken_hash(password: str) -> str:
            raise RuntimeError("hashing unavailable")

        monkeypatch.setattr(seed_module, "hash_password", broken_hash)

        # WHEN: Seeding via the startup boundary
        completed = await run_seeding(
            create_session_factory(async_engine), _settings("admin@example.com", "AdminPass123")
        )

        # THEN: Nothing persisted
        assert completed is False
        assert await _count(async_session, VideoCategory) == 0
        assert await _count(async_session, User) == 0
