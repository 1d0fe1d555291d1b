"""Itinerary finalize node."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.geo import centroid
from app.core.logger import get_logger
from app.graph.itinerary.state import ItineraryState
from app.graph.itinerary.utils import load_request, resolve_city_cache
from app.schemas.itinerary import ItineraryResponse
from app.schemas.venue import Location
from app.services.plan_assembly_service import summarize_budget

logger = get_logger(__name__)


def finalize_itinerary(state: ItineraryState, config: RunnableConfig) -> ItineraryState:
    """Assemble the response payload; zero plans is a failure."""
    if state.get("error"):
        return {**state, "final_itinerary": None}

    plans = state.get("plans") or []
    if not plans:
        return {**state, "final_itinerary": None, "error": "No plans were produced."}

    request = load_request(state["itinerary_request"])
    selection = state["selection"]

    city_center = None
    city_cache = resolve_city_cache(config)
    if city_cache is not None and request.city:
        point = city_cache.get(request.city)
        if point is None and selection.venues():
            # Unknown city: fall back to the finalists' centroid.
            point = centroid(venue.point for venue in selection.venues())
            city_cache.put(request.city, point)
            logger.info("City center derived from finalists: city=%s", request.city)
        if point is not None:
            city_center = Location.from_point(point)

    response = ItineraryResponse(
        skeleton=state["skeleton"],
        selected=selection.selected,
        backups={name: venues for name, venues in selection.backups.items() if venues},
        plans=plans,
        swap_menu=state.get("swap_menu", []),
        budget_breakdown=summarize_budget(plans[0], request.budget.currency, request.party_size),
        warnings=state.get("warnings", []),
        city_center=city_center,
    )
    logger.info(
        "Itinerary finalized: plans=%d warnings=%d city=%s",
        len(response.plans),
        len(response.warnings),
        request.city,
    )
    return {**state, "final_itinerary": response.model_dump(mode="json")}
