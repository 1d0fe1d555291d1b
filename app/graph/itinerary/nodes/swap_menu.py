"""Swap menu node."""

from __future__ import annotations

from langchain_core.runnables import RunnableConfig

from app.graph.itinerary.state import ItineraryState
from app.graph.itinerary.utils import resolve_policy
from app.services.finalist_service import FinalistSelection
from app.services.swap_menu_service import build_swap_menu


def compose_swap_menu(state: ItineraryState, config: RunnableConfig) -> ItineraryState:
    if state.get("error"):
        return state

    selection = state.get("selection") or FinalistSelection()
    plans = state.get("plans") or []
    swap_menu = build_swap_menu(
        selection.ranked_pools,
        plans[0] if plans else None,
        policy=resolve_policy(config),
    )
    return {**state, "swap_menu": swap_menu}
