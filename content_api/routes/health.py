"""Liveness/readiness probe."""

import structlog
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.database import get_session

log = structlog.get_logger(__name__)
router = APIRouter(tags=["health"])


@router.get("/health")
async def health(session: AsyncSession = Depends(get_session)) -> dict:
    """Report service status and database reachability. Public."""
    try:
        await session.execute(text("SELECT 1"))
        database = "ok"
    except Exception as e:  # noqa: BLE001
        log.warning("health_check_database_unreachable", error=type(e).__name__)
        database = "unavailable"
    return {"status": "ok" if database == "ok" else "degraded", "database": database}
