"""AdSense campaign schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator

from content_api.models import CampaignStatus


class CampaignCreate(BaseModel):
    model_config = ConfigDict(str_strip_whitespace=True)

    name: str = Field(..., min_length=1, max_length=150)
    channel_id: UUID | None = None
    budget: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=12, decimal_places=2)
    start_date: date
    end_date: date | None = None
    status: CampaignStatus = CampaignStatus.DRAFT

    @model_validator(mode="after")
    def validate_date_range(self) -> "CampaignCreate":
        if self.end_date is not None and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class CampaignUpdate(BaseModel):
    """Partial update. The date range is re-checked against stored values
    by the service, since only one side may be supplied."""

    model_config = ConfigDict(str_strip_whitespace=True)

    name: str | None = Field(default=None, min_length=1, max_length=150)
    channel_id: UUID | None = None
    budget: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)
    start_date: date | None = None
    end_date: date | None = None
    status: CampaignStatus | None = None

    @model_validator(mode="after")
    def validate_date_range(self) -> "CampaignUpdate":
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be on or after start_date")
        return self


class CampaignResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    name: str
    channel_id: UUID | None
    budget: Decimal
    start_date: date
    end_date: date | None
    status: CampaignStatus
    created_at: datetime
    updated_at: datetime


class CampaignSummary(BaseModel):
    """Revenue totals for a campaign.

    ctr is clicks / impressions (0 when there are no impressions); rpm is
    earnings per thousand impressions.
    """

    campaign_id: UUID
    days_reported: int
    impressions: int
    clicks: int
    earnings: Decimal
    ctr: float
    rpm: Decimal
    budget: Decimal
    budget_remaining: Decimal
