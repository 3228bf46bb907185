"""Daily ad revenue entries and campaign revenue summaries.

Summary metrics:
    ctr: clicks / impressions, 0.0 with no impressions
    rpm: earnings per 1000 impressions, rounded to cents
    budget_remaining: budget minus earnings, floored at zero
"""

import uuid
from datetime import date
from decimal import ROUND_HALF_UP, Decimal

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError
from content_api.models import AdRevenue
from content_api.repositories import AdRevenueRepository, AdSenseCampaignRepository
from content_api.schemas.campaign import CampaignSummary
from content_api.schemas.revenue import RevenueCreate, RevenueUpdate

log = structlog.get_logger(__name__)

CENTS = Decimal("0.01")


class AdRevenueService:
    def __init__(self, session: AsyncSession) -> None:
        self.revenues = AdRevenueRepository(session)
        self.campaigns = AdSenseCampaignRepository(session)

    async def list_revenues(
        self,
        campaign_id: uuid.UUID | None = None,
        start_date: date | None = None,
        end_date: date | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> list[AdRevenue]:
        return await self.revenues.search(
            campaign_id=campaign_id,
            start_date=start_date,
            end_date=end_date,
            offset=offset,
            limit=limit,
        )

    async def get_revenue(self, revenue_id: uuid.UUID) -> AdRevenue:
        return await self.revenues.get_or_raise(revenue_id)

    async def record_revenue(self, data: RevenueCreate) -> AdRevenue:
        """Record one day of revenue for a campaign.

        Raises:
            NotFoundError: If the campaign does not exist.
            ConflictError: If the campaign already has an entry for that day.
        """
        await self.campaigns.get_or_raise(data.campaign_id)
        if await self.revenues.get_for_day(data.campaign_id, data.revenue_date) is not None:
            raise ConflictError(
                f"Revenue already recorded for {data.revenue_date.isoformat()}",
                details={"campaign_id": str(data.campaign_id)},
            )

        revenue = await self.revenues.add(AdRevenue(**data.model_dump()))
        log.info(
            "revenue_recorded",
            campaign_id=str(revenue.campaign_id),
            revenue_date=revenue.revenue_date.isoformat(),
            earnings=str(revenue.earnings),
        )
        return revenue

    async def update_revenue(self, revenue_id: uuid.UUID, data: RevenueUpdate) -> AdRevenue:
        revenue = await self.revenues.get_or_raise(revenue_id)
        values = data.model_dump(exclude_unset=True, exclude_none=True)

        impressions = values.get("impressions", revenue.impressions)
        clicks = values.get("clicks", revenue.clicks)
        if clicks > impressions:
            raise ConflictError(
                "clicks cannot exceed impressions",
                details={"clicks": clicks, "impressions": impressions},
            )
        return await self.revenues.update(revenue, values)

    async def delete_revenue(self, revenue_id: uuid.UUID) -> None:
        revenue = await self.revenues.get_or_raise(revenue_id)
        await self.revenues.delete(revenue)
        log.info("revenue_deleted", revenue_id=str(revenue_id))

    async def summarize_campaign(
        self,
        campaign_id: uuid.UUID,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> CampaignSummary:
        campaign = await self.campaigns.get_or_raise(campaign_id)
        totals = await self.revenues.totals(
            campaign_id=campaign_id, start_date=start_date, end_date=end_date
        )

        if totals.impressions:
            ctr = round(totals.clicks / totals.impressions, 4)
            rpm = (totals.earnings * 1000 / totals.impressions).quantize(CENTS, ROUND_HALF_UP)
        else:
            ctr = 0.0
            rpm = Decimal("0.00")

        budget = Decimal(campaign.budget).quantize(CENTS)
        return CampaignSummary(
            campaign_id=campaign.id,
            days_reported=totals.days,
            impressions=totals.impressions,
            clicks=totals.clicks,
            earnings=totals.earnings,
            ctr=ctr,
            rpm=rpm,
            budget=budget,
            budget_remaining=max(budget - totals.earnings, Decimal("0.00")),
        )
