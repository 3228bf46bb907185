"""Bootstrap data seeding.

Runs once per process start from the application lifespan. Seeding is
idempotent (rows are looked up by natural key before inserting) and commits
once at the end, so a failure part-way leaves the database untouched.

The lifespan wraps this call in its own failure boundary: a seeding error is
logged as a warning and startup continues.

Seeded data:
    - Baseline video categories
    - An initial admin account, when ``seed.admin_email`` and
      ``seed.admin_password`` are configured
"""

from dataclasses import dataclass

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.config import Settings
from content_api.models import User, UserRole, VideoCategory
from content_api.utils.passwords import hash_password

log = structlog.get_logger(__name__)

DEFAULT_CATEGORIES: list[tuple[str, str]] = [
    ("Education", "Lessons, explainers and educational content"),
    ("Entertainment", "General entertainment and shows"),
    ("Gaming", "Gameplay, walkthroughs and gaming news"),
    ("Music", "Music videos, covers and performances"),
    ("Technology", "Tech reviews, unboxings and news"),
    ("Vlogs", "Personal video blogs"),
    ("Tutorials", "Step-by-step how-to guides"),
    ("News", "News and current events"),
]


@dataclass(frozen=True)
class SeedResult:
    categories_created: int
    admin_created: bool


async def _seed_categories(session: AsyncSession) -> int:
    result = await session.execute(select(func.lower(VideoCategory.name)))
    existing = set(result.scalars().all())

    created = 0
    for name, description in DEFAULT_CATEGORIES:
        if name.lower() in existing:
            continue
        session.add(VideoCategory(name=name, description=description))
        created += 1
    return created


async def _seed_admin(session: AsyncSession, settings: Settings) -> bool:
    email = settings.seed.admin_email
    password = settings.seed.admin_password
    if not email or not password:
        log.debug("admin_seed_skipped", reason="not_configured")
        return False

    email = email.strip().lower()
    result = await session.execute(select(User.id).where(User.email == email))
    if result.scalar_one_or_none() is not None:
        return False

    session.add(
        User(
            email=email,
            full_name=settings.seed.admin_name,
            password_hash=hash_password(password),
            role=UserRole.ADMIN,
            is_active=True,
        )
    )
    return True


async def seed_database(session: AsyncSession, settings: Settings) -> SeedResult:
    """Insert baseline data that is missing.

    Args:
        session: A session dedicated to seeding (not a request session).
        settings: Application settings (admin credentials come from ``seed``).

    Returns:
        SeedResult describing what was inserted.

    Raises:
        Exception: Any database error; nothing is committed in that case.
    """
    categories_created = await _seed_categories(session)
    admin_created = await _seed_admin(session, settings)
    await session.commit()

    result = SeedResult(categories_created=categories_created, admin_created=admin_created)
    log.info(
        "database_seeded",
        categories_created=result.categories_created,
        admin_created=result.admin_created,
    )
    return result
