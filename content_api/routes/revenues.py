"""Daily ad revenue routes. Writes require the admin or manager role."""

import uuid
from datetime import date

from fastapi import APIRouter, Depends, Query, status

from content_api.auth import get_current_user, require_manager
from content_api.dependencies import get_revenue_service
from content_api.schemas.revenue import RevenueCreate, RevenueResponse, RevenueUpdate
from content_api.services import AdRevenueService

router = APIRouter(
    prefix="/api/revenues", tags=["revenues"], dependencies=[Depends(get_current_user)]
)


@router.get("", response_model=list[RevenueResponse])
async def list_revenues(
    campaign_id: uuid.UUID | None = None,
    start_date: date | None = None,
    end_date: date | None = None,
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=200),
    service: AdRevenueService = Depends(get_revenue_service),
) -> list:
    return await service.list_revenues(
        campaign_id=campaign_id,
        start_date=start_date,
        end_date=end_date,
        offset=offset,
        limit=limit,
    )


@router.post(
    "",
    response_model=RevenueResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(require_manager)],
)
async def record_revenue(
    data: RevenueCreate, service: AdRevenueService = Depends(get_revenue_service)
):
    return await service.record_revenue(data)


@router.get("/{revenue_id}", response_model=RevenueResponse)
async def get_revenue(
    revenue_id: uuid.UUID, service: AdRevenueService = Depends(get_revenue_service)
):
    return await service.get_revenue(revenue_id)


@router.put(
    "/{revenue_id}", response_model=RevenueResponse, dependencies=[Depends(require_manager)]
)
async def update_revenue(
    revenue_id: uuid.UUID,
    data: RevenueUpdate,
    service: AdRevenueService = Depends(get_revenue_service),
):
    return await service.update_revenue(revenue_id, data)


@router.delete(
    "/{revenue_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    dependencies=[Depends(require_manager)],
)
async def delete_revenue(
    revenue_id: uuid.UUID, service: AdRevenueService = Depends(get_revenue_service)
) -> None:
    await service.delete_revenue(revenue_id)
