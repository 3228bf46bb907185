"""AdSense campaign queries."""

import uuid
from datetime import date

from sqlalchemy import or_
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.models import AdSenseCampaign, CampaignStatus
from content_api.repositories.base import DEFAULT_PAGE_SIZE, Repository


class AdSenseCampaignRepository(Repository[AdSenseCampaign]):
    entity_name = "AdSenseCampaign"

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(AdSenseCampaign, session)

    async def search(
        self,
        status: CampaignStatus | None = None,
        channel_id: uuid.UUID | None = None,
        offset: int = 0,
        limit: int = DEFAULT_PAGE_SIZE,
    ) -> list[AdSenseCampaign]:
        filters = []
        if status is not None:
            filters.append(AdSenseCampaign.status == status)
        if channel_id is not None:
            filters.append(AdSenseCampaign.channel_id == channel_id)

        return await self.list_all(
            offset=offset,
            limit=limit,
            filters=filters,
            order_by=[AdSenseCampaign.start_date.desc(), AdSenseCampaign.id],
        )

    async def get_running_on(self, on_date: date) -> list[AdSenseCampaign]:
        """Active campaigns whose date window contains ``on_date``."""
        return await self.list_all(
            limit=200,
            filters=[
                AdSenseCampaign.status == CampaignStatus.ACTIVE,
                AdSenseCampaign.start_date <= on_date,
                or_(AdSenseCampaign.end_date.is_(None), AdSenseCampaign.end_date >= on_date),
            ],
            order_by=[AdSenseCampaign.start_date],
        )
