"""Time/budget skeleton models."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.enums import SkeletonTemplate, VenueCategory


class SkeletonSlot(BaseModel):
    """One labeled segment of the outing."""

    model_config = ConfigDict(frozen=True)

    label: str = Field(..., description="Human label, e.g. 'Arrival drink'")
    type: VenueCategory = Field(..., description="Venue category the slot is filled with")
    budget_percent: float = Field(..., ge=0, le=100, description="Share of the total budget")
    duration_mins: int = Field(..., ge=0, description="Planned minutes at the stop")
    time_start: str | None = Field(default=None, description="Planned start (HH:MM)")


class TimeWindow(BaseModel):
    model_config = ConfigDict(frozen=True)

    start: str = Field(..., description="Window start (HH:MM)")
    end: str = Field(..., description="Window end (HH:MM), may wrap past midnight")


class Skeleton(BaseModel):
    """Ordered slots with budget shares and start times, read-only once built."""

    model_config = ConfigDict(frozen=True)

    template: SkeletonTemplate = Field(..., description="Template the slots came from")
    slots: List[SkeletonSlot] = Field(..., min_length=1, description="Slots in visiting order")
    total_budget: float = Field(..., gt=0, description="Total budget amount")
    currency: str = Field(default="EUR", description="Budget currency")
    time_window: TimeWindow = Field(..., description="Requested time window")
