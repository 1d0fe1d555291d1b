"""Plan variant node."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.core.logger import get_logger
from app.graph.itinerary.state import ItineraryState
from app.graph.itinerary.utils import load_request, resolve_policy
from app.services.finalist_service import FinalistSelection
from app.services.plan_assembly_service import PlanningContext, collect_leg_warnings, generate_variants

logger = get_logger(__name__)


def assemble_plans(state: ItineraryState, config: RunnableConfig) -> ItineraryState:
    """Build plans A, B and C from the finalists."""
    if state.get("error"):
        return state

    request = load_request(state["itinerary_request"])
    selection = state.get("selection") or FinalistSelection()
    if not selection.selected:
        return {**state, "plans": [], "error": "No venues selected for plans."}

    policy = resolve_policy(config)
    context = PlanningContext(
        start_time=state["start_time"],
        end_time=state["end_time"],
        budget_amount=request.budget.amount,
        party_size=request.party_size,
        family_friendly=request.preferences.family_friendly,
        mode=request.mode,
        city=request.city,
        weekday=request.weekday,
        travel_times=request.travel_times,
    )
    plans = generate_variants(selection, selection.ranked_pools, context, policy=policy)
    warnings = [*state.get("warnings", []), *collect_leg_warnings(plans, policy)]
    return {**state, "plans": plans, "warnings": warnings}
