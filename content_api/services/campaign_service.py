"""AdSense campaign management."""

import uuid
from datetime import date

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from content_api.exceptions import ConflictError
from content_api.models import AdSenseCampaign, CampaignStatus, YouTubeChannel, utcnow
from content_api.repositories import AdSenseCampaignRepository, Repository
from content_api.schemas.campaign import CampaignCreate, CampaignUpdate

log = structlog.get_logger(__name__)


class AdSenseCampaignService:
    def __init__(self, session: AsyncSession) -> None:
        self.campaigns = AdSenseCampaignRepository(session)
        self.channels = Repository(YouTubeChannel, session)

    async def list_campaigns(
        self,
        status: CampaignStatus | None = None,
        channel_id: uuid.UUID | None = None,
        offset: int = 0,
        limit: int = 50,
    ) -> list[AdSenseCampaign]:
        return await self.campaigns.search(
            status=status, channel_id=channel_id, offset=offset, limit=limit
        )

    async def list_running_campaigns(self, on_date: date | None = None) -> list[AdSenseCampaign]:
        """Active campaigns whose date window contains ``on_date`` (default: today, UTC)."""
        return await self.campaigns.get_running_on(on_date or utcnow().date())

    async def get_campaign(self, campaign_id: uuid.UUID) -> AdSenseCampaign:
        return await self.campaigns.get_or_raise(campaign_id)

    async def create_campaign(self, data: CampaignCreate) -> AdSenseCampaign:
        if data.channel_id is not None:
            await self.channels.get_or_raise(data.channel_id)

        campaign = await self.campaigns.add(AdSenseCampaign(**data.model_dump()))
        log.info(
            "campaign_created",
            campaign_id=str(campaign.id),
            status=campaign.status.value,
            budget=str(campaign.budget),
        )
        return campaign

    async def update_campaign(
        self, campaign_id: uuid.UUID, data: CampaignUpdate
    ) -> AdSenseCampaign:
        """Apply a partial update.

        Raises:
            ConflictError: If the resulting end date precedes the start date.
        """
        campaign = await self.campaigns.get_or_raise(campaign_id)
        values = data.model_dump(exclude_unset=True)
        for required in ("name", "budget", "start_date", "status"):
            if values.get(required, ...) is None:
                values.pop(required)
        if values.get("channel_id") is not None:
            await self.channels.get_or_raise(values["channel_id"])

        start = values.get("start_date", campaign.start_date)
        end = values.get("end_date", campaign.end_date)
        if end is not None and end < start:
            raise ConflictError(
                "end_date must be on or after start_date",
                details={"start_date": start.isoformat(), "end_date": end.isoformat()},
            )

        campaign = await self.campaigns.update(campaign, values)
        log.info("campaign_updated", campaign_id=str(campaign.id), fields=sorted(values))
        return campaign

    async def delete_campaign(self, campaign_id: uuid.UUID) -> None:
        """Delete a campaign together with its revenue rows."""
        campaign = await self.campaigns.get_or_raise(campaign_id)
        await self.campaigns.delete(campaign)
        log.info("campaign_deleted", campaign_id=str(campaign_id))
