"""Itinerary construction service."""

from __future__ import annotations

from functools import lru_cache

from app.core.city_center import CityCenterCache
from app.core.config import get_settings
from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.core.logger import get_logger
from app.graph.itinerary.workflow import compiled_itinerary_graph
from app.schemas.itinerary import ItineraryRequest, ItineraryResponse

logger = get_logger(__name__)


class ItineraryGenerationError(RuntimeError):
    """The pipeline finished without producing a usable itinerary."""


@lru_cache
def get_city_center_cache() -> CityCenterCache:
    """Process-wide city-center cache sized from settings."""
    return CityCenterCache(max_entries=get_settings().PLANNER_CITY_CACHE_MAX_ENTRIES)


async def run_itinerary_pipeline(
    request: ItineraryRequest,
    *,
    city_cache: CityCenterCache | None = None,
    policy: ItineraryPolicy | None = None,
) -> ItineraryResponse:
    """Run the itinerary graph and return its result."""
    initial_state = {"itinerary_request": request.model_dump(mode="json")}
    result = await compiled_itinerary_graph.ainvoke(
        initial_state,
        config={
            "configurable": {
                "city_cache": city_cache if city_cache is not None else get_city_center_cache(),
                "policy": policy or get_itinerary_policy(),
            }
        },
    )

    if error := result.get("error"):
        logger.warning("Itinerary pipeline failed: %s", error)
        raise ItineraryGenerationError(error)

    final = result.get("final_itinerary")
    if not final:
        raise ItineraryGenerationError("final_itinerary is missing.")

    return ItineraryResponse.model_validate(final)
