"""Itinerary graph state."""

from typing import TypedDict

from app.schemas.plan import Plan, SwapMenuItem
from app.schemas.skeleton import Skeleton
from app.services.finalist_service import FinalistSelection


class ItineraryState(TypedDict, total=False):
    """Itinerary construction graph state.

    Keys:
        itinerary_request: request payload
        start_time: resolved window start (HH:MM)
        end_time: resolved window end (HH:MM)
        skeleton: time/budget skeleton
        budget_per_category: per-person target per pool category
        selection: finalists, backups and rank-ordered pools
        plans: plan variants A, B, C
        warnings: travel and scheduling warnings
        swap_menu: contingency instructions
        final_itinerary: response payload
        error: error message
    """

    itinerary_request: dict
    start_time: str
    end_time: str
    skeleton: Skeleton
    budget_per_category: dict[str, float]
    selection: FinalistSelection
    plans: list[Plan]
    warnings: list[str]
    swap_menu: list[SwapMenuItem]
    final_itinerary: dict | None
    error: str | None
