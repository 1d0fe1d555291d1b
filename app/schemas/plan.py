"""Itinerary plan, swap menu and budget breakdown models."""

from __future__ import annotations

from typing import List, Tuple

from pydantic import BaseModel, Field, field_validator, model_validator

from app.schemas.enums import PlanId, SwapTag
from app.schemas.venue import Venue

CostRange = Tuple[int, int]


class Stop(BaseModel):
    """A timed, costed visit within a plan."""

    time: str = Field(..., description="Arrival time (HH:MM)")
    label: str = Field(..., description="Stop label, e.g. 'Dinner' or 'Activity 2'")
    venue: Venue = Field(..., description="Venue visited")
    estimated_cost_range: CostRange = Field(..., description="Per-person cost range [low, high]")
    why_it_fits: str = Field(default="", description="One-line rationale")
    travel_from_prev_mins: int = Field(default=0, ge=0, description="Travel minutes from the previous stop")
    open_check: str = Field(..., description="Opening-hours note")

    @field_validator("estimated_cost_range")
    @classmethod
    def validate_cost_range(cls, value: CostRange) -> CostRange:
        low, high = value
        if low > high:
            raise ValueError("cost range low must not exceed high.")
        return value


class Backup(BaseModel):
    """Alternate venue offered when a stop is unavailable."""

    label: str = Field(..., description="e.g. 'Dinner backup'")
    name: str = Field(..., description="Venue name")
    maps_url: str | None = Field(default=None, description="External map link")
    why_backup: str = Field(..., description="Templated rationale")


class Plan(BaseModel):
    """One complete itinerary variant."""

    id: PlanId = Field(..., description="Variant id")
    title: str = Field(..., description="Variant title")
    stops: List[Stop] = Field(default_factory=list, description="Stops in visiting order")
    backups: List[Backup] = Field(default_factory=list, description="Fallback venues")

    @model_validator(mode="after")
    def validate_unique_stops(self):
        place_ids = [stop.venue.place_id for stop in self.stops]
        if len(place_ids) != len(set(place_ids)):
            raise ValueError("a plan must not visit the same venue twice.")
        return self


class SwapMenuItem(BaseModel):
    swap: SwapTag = Field(..., description="Fixed contingency tag")
    instruction: str = Field(..., description="What to change")


class BudgetBreakdown(BaseModel):
    """Estimated spend of Plan A."""

    currency: str = Field(default="EUR")
    party_size: int = Field(..., ge=1)
    plan_a_per_person: CostRange = Field(..., description="Per-person total range")
    plan_a_total: CostRange = Field(..., description="Whole-party total range")
    by_category: dict[str, CostRange] = Field(default_factory=dict, description="Per-person range by category")
