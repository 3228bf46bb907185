"""AdSense campaign routes. Writes require the admin or manager role."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from content_api.auth import get_current_user, require_manager
from content_api.dependencies import get_campaign_service, get_revenue_service
from content_api.models import CampaignStatus
from content_api.schemas.campaign import (
    CampaignCreate,
    CampaignResponse,
    CampaignSummary,
    CampaignUpdate,
)
from content_api.services import AdRevenueService, AdSenseCampaignService

router = APIRouter(
    prefix="/api/campaigns", tags=["campaigns"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[CampaignResponse])
async def list_campaigns(
    status_filter: CampaignStatus | None = Query(default=None, alias="status"),
    channel_id: uuid.UUID | None = None,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    service: AdSenseCampaignService = Depends(get_campaign_service),
) -> list:
    return await service.list_campaigns(
        status=status_filter, channel_id=channel_id, offset=offset, limit=limit
    )


@router.get("/running", response_model=list[CampaignResponse])
async def running_campaigns(
    on: date | None = Query(default=None, description="Day to check (default: today, UTC)"),
    service: AdSenseCampaignService = Depends(get_campaign_service),
) -> list:
    """Active campaigns whose start/end window contains the given day."""
    return await service.list_running_campaigns(on)


@router.post(
    "",
    response_model=CampaignResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_manager)],
)
async def create_campaign(
    data: CampaignCreate, service: AdSenseCampaignService = Depends(get_campaign_service)
):
    return await service.create_campaign(data)


@router.get("/{campaign_id}", response_model=CampaignResponse)
async def get_campaign(
    campaign_id: uuid.UUID, service: AdSenseCampaignService = Depends(get_campaign_service)
):
    return await service.get_campaign(campaign_id)


@router.put(
    "/{campaign_id}", response_model=CampaignResponse, dependencies=[Depends(require_manager)]
)
async def update_campaign(
    campaign_id: uuid.UUID,
    data: CampaignUpdate,
    service: AdSenseCampaignService = Depends(get_campaign_service),
):
    return await service.update_campaign(campaign_id, data)


@router.delete(
    "/{campaign_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_manager)],
)
async def delete_campaign(
    campaign_id: uuid.UUID, service: AdSenseCampaignService = Depends(get_campaign_service)
) -> None:
    await service.delete_campaign(campaign_id)


@router.get("/{campaign_id}/summary", response_model=CampaignSummary)
async def campaign_summary(
    campaign_id: uuid.UUID,
    start_date: date | None = None,
    end_date: date | None = None,
    service: AdRevenueService = Depends(get_revenue_service),
) -> CampaignSummary:
    return await service.summarize_campaign(
        campaign_id, start_date=start_date, end_date=end_date
    )
