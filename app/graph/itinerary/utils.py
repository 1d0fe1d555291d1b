"""Itinerary graph helpers."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.city_center import CityCenterCache
from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.schemas.itinerary import ItineraryRequest

STANDARD_WINDOW = ("18:00", "23:30")
FAMILY_WINDOW = ("11:00", "18:00")


def _configurable(config: RunnableConfig | None) -> dict:
    return (config or {}).get("configurable", {}) or {}


def resolve_policy(config: RunnableConfig | None) -> ItineraryPolicy:
    policy = _configurable(config).get("policy")
    return policy if isinstance(policy, ItineraryPolicy) else get_itinerary_policy()


def resolve_city_cache(config: RunnableConfig | None) -> CityCenterCache | None:
    cache = _configurable(config).get("city_cache")
    return cache if isinstance(cache, CityCenterCache) else None


def load_request(raw_request: dict | ItineraryRequest) -> ItineraryRequest:
    if isinstance(raw_request, ItineraryRequest):
        return raw_request
    return ItineraryRequest.model_validate(raw_request)


def resolve_time_window(request: ItineraryRequest) -> tuple[str, str]:
    """Requested window, or the default window for the party type."""
    if request.start_time and request.end_time:
        return request.start_time, request.end_time
    return FAMILY_WINDOW if request.preferences.family_friendly else STANDARD_WINDOW
