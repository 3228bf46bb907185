"""Ad revenue queries and aggregations."""

import uuid
from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import AdRevenue
from content_api.repositories.base import DEFAULT_PAGE_SIZE, Repository


@dataclass(frozen=True)
class RevenueTotals:
    """Summed revenue figures over a set of AdRevenue rows."""

    days: int
    impressions: int
    clicks: int
    earnings: Decimal


class AdRevenueRepository(Repository[AdRevenue]):
    entity_name = "AdRevenue"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AdRevenue, session)

    @staticmethod
    def _filters(
        campaign_id: uuid.UUID | None,
        start_date: date | None,
        end_date: date | None,
    ) -> list:
        filters = []
        if campaign_id is not None:
            filters.append(AdRevenue.campaign_id == campaign_id)
        if start_date is not None:
            filters.append(AdRevenue.revenue_date >= start_date)
        if end_date is not None:
            filters.append(AdRevenue.revenue_date <= end_date)
        return filters

    async def search(
        self,
        campaign_id: uuid.UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[AdRevenue]:
        """List revenue rows in a date window, oldest first."""
        return await self.list_all(
            offset=offset,
            limit=limit,
            filters=self._filters(campaign_id, start_date, end_date),
            order_by=[AdRevenue.revenue_date, AdRevenue.id],
        )

    async def get_for_day(self, campaign_id: uuid.UUID, revenue_date: date) -> AdRevenue | None:
        result = await self.session.execute(
            select(AdRevenue).where(
                AdRevenue.campaign_id == campaign_id,
                AdRevenue.revenue_date == revenue_date,
            )
        )
        return result.scalar_one_or_none()

    async def totals(
        self,
        campaign_id: uuid.UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> RevenueTotals:
        """Sum impressions, clicks and earnings in a single aggregate query."""
        result = await self.session.execute(
            select(
                func.count(AdRevenue.id).label("days"),
                func.coalesce(func.sum(AdRevenue.impressions), 0).label("impressions"),
                func.coalesce(func.sum(AdRevenue.clicks), 0).label("clicks"),
                func.coalesce(func.sum(AdRevenue.earnings), 0).label("earnings"),
            ).where(*self._filters(campaign_id, start_date, end_date))
        )
        row = result.one()
        return RevenueTotals(
            days=int(row.days),
            impressions=int(row.impressions),
            clicks=int(row.clicks),
            earnings=Decimal(str(row.earnings)).quantize(Decimal("0.01")),
        )
