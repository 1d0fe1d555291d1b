"""Finalist selection node."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.logger import get_logger
from app.graph.itinerary.state import ItineraryState
from app.graph.itinerary.utils import load_request, resolve_policy
from app.services.finalist_service import per_person_category_budgets, select_finalists

logger = get_logger(__name__)


def pick_finalists(state: ItineraryState, config: RunnableConfig) -> ItineraryState:
    """Rank the candidate pools and fix one venue per category."""
    if state.get("error"):
        return state

    request = load_request(state["itinerary_request"])
    pools = request.candidate_pools
    logger.info(
        "Candidate pools: activity=%d dinner=%d finish=%d",
        len(pools.activity),
        len(pools.dinner),
        len(pools.finish),
    )

    budget_per_category = per_person_category_budgets(state.get("skeleton"), request.budget, request.party_size)
    selection = select_finalists(
        pools,
        request.preferences,
        budget_per_category,
        policy=resolve_policy(config),
    )
    return {**state, "budget_per_category": budget_per_category, "selection": selection}
