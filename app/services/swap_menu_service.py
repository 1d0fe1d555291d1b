"""Contingency instructions for a finished itinerary."""

from __future__ import annotations

from typing import Iterable, Sequence

from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.core.logger import get_logger
from app.core.numbers import round_half_up
from app.schemas.enums import SwapTag
from app.schemas.itinerary import CandidatePools
from app.schemas.plan import Plan, SwapMenuItem
from app.schemas.venue import Venue

logger = get_logger(__name__)

_CHEAP_PRICE_LEVEL = 1


def _matching(venues: Iterable[Venue], keywords: Sequence[str]) -> list[Venue]:
    return [venue for venue in venues if any(keyword in venue.name.lower() for keyword in keywords)]


def _cheapest_affordable(pool: Sequence[Venue], default_level: int) -> Venue | None:
    def level(venue: Venue) -> int:
        return venue.price_level if venue.price_level is not None else default_level

    return next((venue for venue in sorted(pool, key=level) if level(venue) <= _CHEAP_PRICE_LEVEL), None)


def rain_mode_instruction(pools: CandidatePools, policy: ItineraryPolicy) -> str:
    indoor_activities = _matching(pools.activity, policy.indoor_activity_keywords)
    indoor_finish = _matching(pools.finish, policy.indoor_finish_keywords)

    instruction = "If weather turns bad: "
    if indoor_activities:
        first = indoor_activities[0]
        instruction += f"swap activity to {first.name}"
        if first.maps_url:
            instruction += f" ({first.maps_url})"
    else:
        instruction += "move directly to dinner (skip outdoor activity)"
    if indoor_finish:
        instruction += f". For drinks, try {indoor_finish[0].name}"
    return instruction + ". All restaurants in the plan are indoors."


def budget_lower_instruction(pools: CandidatePools, policy: ItineraryPolicy) -> str:
    cheaper_dinner = _cheapest_affordable(pools.dinner, policy.default_price_level)
    cheaper_activity = _cheapest_affordable(pools.activity, policy.default_price_level)

    tips = [
        f"swap dinner to {cheaper_dinner.name} (€€ or less)" if cheaper_dinner else "share dishes at dinner",
        f"try {cheaper_activity.name} for activity"
        if cheaper_activity
        else "opt for a free walking activity like a scenic stroll",
        "skip dessert/after-dinner drinks",
    ]
    return "To reduce spend: " + "; ".join(tips) + "."


def no_alcohol_instruction(pools: CandidatePools, policy: ItineraryPolicy) -> str:
    alcohol_free = _matching(pools.finish, policy.alcohol_free_keywords)

    instruction = "For an alcohol-free evening: "
    if alcohol_free:
        instruction += f"replace bar stops with {alcohol_free[0].name}"
        if len(alcohol_free) > 1:
            instruction += f" or {alcohol_free[1].name}"
    else:
        instruction += "ask for mocktails at bar venues, or swap to a dessert cafe"
    return instruction + ". Most restaurants offer non-alcoholic pairings on request."


def average_leg_minutes(plan: Plan | None) -> int:
    """Average travel minutes per leg of ``plan``; 0 without legs."""
    if plan is None or not plan.stops:
        return 0
    total = sum(stop.travel_from_prev_mins for stop in plan.stops)
    return round_half_up(total / max(len(plan.stops) - 1, 1))


def more_walkable_instruction(plan_a: Plan | None, policy: ItineraryPolicy) -> str:
    instruction = "To reduce walking: "
    if average_leg_minutes(plan_a) > policy.walkable_leg_minutes:
        instruction += "consider using transit between stops (check Google Maps for metro/bus). "
    instruction += "Keep all venues in the same neighborhood. "
    return instruction + "Ask restaurant for nearby bar recommendations to minimize final walk."


def build_swap_menu(
    pools: CandidatePools,
    plan_a: Plan | None,
    *,
    policy: ItineraryPolicy | None = None,
) -> list[SwapMenuItem]:
    """Return the four contingency instructions, always in the same tag order."""
    resolved_policy = policy or get_itinerary_policy()
    menu = [
        SwapMenuItem(swap=SwapTag.RAIN_MODE, instruction=rain_mode_instruction(pools, resolved_policy)),
        SwapMenuItem(swap=SwapTag.BUDGET_LOWER, instruction=budget_lower_instruction(pools, resolved_policy)),
        SwapMenuItem(swap=SwapTag.NO_ALCOHOL, instruction=no_alcohol_instruction(pools, resolved_policy)),
        SwapMenuItem(swap=SwapTag.MORE_WALKABLE, instruction=more_walkable_instruction(plan_a, resolved_policy)),
    ]
    logger.info("Swap menu built: items=%d", len(menu))
    return menu
