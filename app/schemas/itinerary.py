"""Request/response models of the itinerary API."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field, model_validator

from app.schemas.enums import PlanMode
from app.schemas.plan import BudgetBreakdown, Plan, SwapMenuItem
from app.schemas.preferences import Budget, Preferences
from app.schemas.skeleton import Skeleton
from app.schemas.venue import Location, Venue

_HHMM_PATTERN = r"^([01]\d|2[0-3]):[0-5]\d$"


class CandidatePools(BaseModel):
    """Venues gathered upstream, grouped by search category."""

    activity: List[Venue] = Field(default_factory=list)
    dinner: List[Venue] = Field(default_factory=list)
    finish: List[Venue] = Field(default_factory=list)

    def total(self) -> int:
        return len(self.activity) + len(self.dinner) + len(self.finish)


class ItineraryRequest(BaseModel):
    """Itinerary build request.

    Fields:
        `budget`: total budget for the party
        `start_time` / `end_time`: time window (HH:MM); both or neither
        `party_size`: number of people sharing the budget
        `preferences`: vibe, likes and constraints
        `mode`: standard or verified opening-hours notes
        `city`: city name, used for titles and the map center
        `weekday`: planned weekday 0 (Sunday) to 6, used by verified checks
        `candidate_pools`: venues found upstream
        `travel_times`: minutes keyed "fromPlaceId->toPlaceId"
    """

    budget: Budget = Field(..., description="Total budget")
    start_time: str | None = Field(default=None, pattern=_HHMM_PATTERN, description="Window start (HH:MM)")
    end_time: str | None = Field(default=None, pattern=_HHMM_PATTERN, description="Window end (HH:MM)")
    party_size: int = Field(default=2, ge=1, le=20, description="Party size")
    preferences: Preferences = Field(default_factory=Preferences, description="Preferences")
    mode: PlanMode = Field(default=PlanMode.STANDARD, description="Plan mode")
    city: str | None = Field(default=None, description="City name")
    weekday: int | None = Field(default=None, ge=0, le=6, description="Planned weekday, 0 = Sunday")
    candidate_pools: CandidatePools = Field(default_factory=CandidatePools, description="Candidate venues")
    travel_times: dict[str, int] = Field(default_factory=dict, description="Travel minutes by placeId pair")

    @model_validator(mode="after")
    def validate_time_window(self):
        if (self.start_time is None) != (self.end_time is None):
            raise ValueError("start_time and end_time must be given together.")
        return self


class ItineraryResponse(BaseModel):
    """Itinerary build result handed to the presentation layer."""

    skeleton: Skeleton
    selected: dict[str, Venue] = Field(default_factory=dict, description="Finalist per category")
    backups: dict[str, List[Venue]] = Field(default_factory=dict, description="Backups per category")
    plans: List[Plan] = Field(..., min_length=1, description="Plan variants A, B, C")
    swap_menu: List[SwapMenuItem] = Field(..., description="Contingency instructions")
    budget_breakdown: BudgetBreakdown | None = Field(default=None, description="Plan A spend estimate")
    warnings: List[str] = Field(default_factory=list, description="Travel and scheduling warnings")
    city_center: Location | None = Field(default=None, description="Map center for the city")
