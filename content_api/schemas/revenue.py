"""Daily ad revenue schemas."""

from datetime import date, datetime
from decimal import Decimal
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RevenueCreate(BaseModel):
    campaign_id: UUID
    revenue_date: date
    impressions: int = Field(default=0, ge=0)
    clicks: int = Field(default=0, ge=0)
    earnings: Decimal = Field(default=Decimal("0.00"), ge=0, max_digits=12, decimal_places=2)

    @model_validator(mode="after")
    def validate_clicks(self) -> "RevenueCreate":
        if self.clicks > self.impressions:
            raise ValueError("clicks cannot exceed impressions")
        return self


class RevenueUpdate(BaseModel):
    impressions: int | None = Field(default=None, ge=0)
    clicks: int | None = Field(default=None, ge=0)
    earnings: Decimal | None = Field(default=None, ge=0, max_digits=12, decimal_places=2)

    @model_validator(mode="after")
    def validate_clicks(self) -> "RevenueUpdate":
        if self.clicks is not None and self.impressions is not None:
            if self.clicks > self.impressions:
                raise ValueError("clicks cannot exceed impressions")
        return self


class RevenueResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    campaign_id: UUID
    revenue_date: date
    impressions: int
    clicks: int
    earnings: Decimal
    created_at: datetime
