"""Plan variant assembly.

Three variants are built from the finalist selection and the candidate pools:

- Plan A, best fit: the finalists plus extra activity stops when the window
  is long enough.
- Plan B, alternative: per category, the first pool venue Plan A does not use.
- Plan C, budget-friendly: per category, the cheapest venue still unused,
  costed at a reduced budget.

Each plan orders its venues by category priority, assigns arrival times from
dwell and travel minutes, and estimates a per-person cost range per stop.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, Mapping, Sequence

from app.core.clock import MINUTES_PER_DAY, format_hhmm, parse_hhmm, window_minutes
from app.core.geo import is_travel_time_acceptable, suggest_travel_mode
from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.core.logger import get_logger
from app.core.numbers import round_half_up
from app.schemas.enums import PlanId, PlanMode
from app.schemas.itinerary import CandidatePools
from app.schemas.plan import Backup, BudgetBreakdown, Plan, Stop
from app.schemas.venue import Venue
from app.services.clustering_service import itinerary_distance_meters
from app.services.finalist_service import POOL_CATEGORIES, FinalistSelection
from app.services.venue_enrichment_service import open_check_note

logger = get_logger(__name__)

_UNRANKED_CATEGORY = 999
_DEFAULT_STOP_COUNT = 3

_PLAN_TITLES = {
    PlanId.A: ("Romantic Evening", "Family Day"),
    PlanId.B: ("Playful & Memorable", "Fun for Everyone"),
    PlanId.C: ("Budget-Friendly Adventure", "Budget Family Fun"),
}


@dataclass(frozen=True)
class PlanningContext:
    """Request-level inputs shared by every plan variant."""

    start_time: str
    end_time: str
    budget_amount: float
    party_size: int = 2
    family_friendly: bool = False
    mode: PlanMode = PlanMode.STANDARD
    city: str | None = None
    weekday: int | None = None
    travel_times: Mapping[str, int] = field(default_factory=dict)


def travel_key(from_place_id: str, to_place_id: str) -> str:
    return f"{from_place_id}->{to_place_id}"


def plan_title(plan_id: PlanId, family_friendly: bool, city: str | None = None) -> str:
    standard, family = _PLAN_TITLES[plan_id]
    title = family if family_friendly else standard
    if plan_id == PlanId.A and city:
        return f"{title} in {city}"
    return title


def _format_rating(rating: float | None) -> str:
    if rating is None:
        return "good"
    return f"{rating:g}"


def venue_to_backup(venue: Venue) -> Backup:
    label = "Dinner backup" if venue.category == "dinner" else "Activity backup"
    return Backup(
        label=label,
        name=venue.name,
        maps_url=venue.maps_url,
        why_backup=f"Alternative {venue.category.value} with {_format_rating(venue.rating)} rating",
    )


def dedupe_venues(venues: Iterable[Venue]) -> list[Venue]:
    seen: set[str] = set()
    unique: list[Venue] = []
    for venue in venues:
        if venue.place_id in seen:
            continue
        seen.add(venue.place_id)
        unique.append(venue)
    return unique


def order_by_category(
    venues: Sequence[Venue],
    family_friendly: bool,
    policy: ItineraryPolicy | None = None,
) -> list[Venue]:
    """Stable sort by category priority; unknown categories go last."""
    order = (policy or get_itinerary_policy()).category_order(family_friendly)

    def rank(venue: Venue) -> int:
        try:
            return order.index(venue.category.value)
        except ValueError:
            return _UNRANKED_CATEGORY

    return sorted(venues, key=rank)


def estimate_cost_range(
    venue: Venue,
    per_person_budget: float,
    stop_count: int,
    policy: ItineraryPolicy | None = None,
) -> tuple[int, int]:
    """Per-person cost range of one stop."""
    resolved_policy = policy or get_itinerary_policy()
    share = resolved_policy.cost_shares.get(venue.category.value)
    category_budget = per_person_budget * share if share is not None else per_person_budget / stop_count

    level = venue.price_level if venue.price_level is not None else resolved_policy.default_price_level
    multipliers = resolved_policy.price_multipliers
    multiplier = multipliers[level] if 0 <= level < len(multipliers) else 1.0

    base_cost = category_budget * multiplier
    low_factor, high_factor = resolved_policy.cost_band
    return round_half_up(base_cost * low_factor), round_half_up(base_cost * high_factor)


def build_plan_from_venues(
    plan_id: PlanId,
    title: str,
    venues: Iterable[Venue],
    backup_venues: Iterable[Venue],
    context: PlanningContext,
    *,
    budget_amount: float | None = None,
    policy: ItineraryPolicy | None = None,
) -> Plan:
    """Turn a venue set into a timed, costed plan.

    ``budget_amount`` overrides the context budget for this plan only.
    """
    resolved_policy = policy or get_itinerary_policy()
    ordered = order_by_category(dedupe_venues(venues), context.family_friendly, resolved_policy)
    stop_count = len(ordered) or _DEFAULT_STOP_COUNT
    amount = context.budget_amount if budget_amount is None else budget_amount
    per_person_budget = amount / max(1, context.party_size)

    stops: list[Stop] = []
    label_counts: dict[str, int] = {}
    elapsed = parse_hhmm(context.start_time)
    previous: Venue | None = None
    for venue in ordered:
        travel_minutes = 0
        if previous is not None:
            travel_minutes = context.travel_times.get(
                travel_key(previous.place_id, venue.place_id),
                resolved_policy.default_travel_minutes,
            )
            elapsed += travel_minutes

        base_label = venue.category.value.capitalize()
        label_counts[base_label] = label_counts.get(base_label, 0) + 1
        count = label_counts[base_label]
        label = f"{base_label} {count}" if count > 1 else base_label

        arrival = format_hhmm(elapsed)
        weekday = None
        if context.weekday is not None:
            weekday = (context.weekday + elapsed // MINUTES_PER_DAY) % 7

        stops.append(
            Stop(
                time=arrival,
                label=label,
                venue=venue,
                estimated_cost_range=estimate_cost_range(venue, per_person_budget, stop_count, resolved_policy),
                why_it_fits=f"Great option with {_format_rating(venue.rating)} rating",
                travel_from_prev_mins=travel_minutes,
                open_check=open_check_note(venue, context.mode, weekday, arrival),
            )
        )
        elapsed += resolved_policy.dwell_minutes.get(venue.category.value, resolved_policy.default_dwell_minutes)
        previous = venue

    return Plan(
        id=plan_id,
        title=title,
        stops=stops,
        backups=[venue_to_backup(venue) for venue in backup_venues],
    )


def activity_stop_target(window: int, policy: ItineraryPolicy | None = None) -> int:
    """Number of activity stops a window of ``window`` minutes supports."""
    resolved_policy = policy or get_itinerary_policy()
    by_time = math.floor(window / resolved_policy.minutes_per_activity_stop)
    return max(1, min(resolved_policy.max_activity_stops, by_time))


def _unused(pool: Iterable[Venue], *excluded: set[str]) -> list[Venue]:
    return [venue for venue in pool if not any(venue.place_id in ids for ids in excluded)]


def _plan_a_venues(
    selection: FinalistSelection,
    pools: CandidatePools,
    activity_target: int,
) -> list[Venue]:
    venues = selection.venues()
    used = {venue.place_id for venue in venues}
    if activity_target > 1 and len(pools.activity) > 1:
        for _ in range(min(activity_target - 1, len(pools.activity))):
            extra = next((venue for venue in pools.activity if venue.place_id not in used), None)
            if extra is None:
                break
            venues.append(extra)
            used.add(extra.place_id)
    return venues


def generate_variants(
    selection: FinalistSelection,
    pools: CandidatePools,
    context: PlanningContext,
    *,
    policy: ItineraryPolicy | None = None,
) -> list[Plan]:
    """Build plans A, B and C; no finalists means no plans."""
    resolved_policy = policy or get_itinerary_policy()
    if not selection.selected:
        logger.warning("No finalists selected; skipping plan generation")
        return []

    family = context.family_friendly
    available = window_minutes(context.start_time, context.end_time)
    activity_target = activity_stop_target(available, resolved_policy)

    plan_a_venues = _plan_a_venues(selection, pools, activity_target)
    plan_a_ids = {venue.place_id for venue in plan_a_venues}
    plan_a = build_plan_from_venues(
        PlanId.A,
        plan_title(PlanId.A, family, context.city),
        plan_a_venues,
        _unused(pools.dinner, plan_a_ids)[:2] + _unused(pools.activity, plan_a_ids)[:1],
        context,
        policy=resolved_policy,
    )

    plan_b_venues: list[Venue] = []
    for name in POOL_CATEGORIES:
        pool = getattr(pools, name)
        alternative = next(iter(_unused(pool, plan_a_ids)), None)
        if alternative is None and pool:
            alternative = pool[0]
        if alternative is not None:
            plan_b_venues.append(alternative)
    plan_b_ids = {venue.place_id for venue in plan_b_venues}
    plan_b = build_plan_from_venues(
        PlanId.B,
        plan_title(PlanId.B, family),
        plan_b_venues,
        _unused(pools.dinner, plan_a_ids, plan_b_ids)[:2] + _unused(pools.activity, plan_a_ids, plan_b_ids)[:1],
        context,
        policy=resolved_policy,
    )

    used_ids = plan_a_ids | plan_b_ids
    plan_c_venues: list[Venue] = []
    default_level = resolved_policy.default_price_level
    for name in POOL_CATEGORIES:
        by_price = sorted(
            getattr(pools, name),
            key=lambda venue: venue.price_level if venue.price_level is not None else default_level,
        )
        cheapest = next(iter(_unused(by_price, used_ids)), None)
        if cheapest is not None:
            plan_c_venues.append(cheapest)
            used_ids.add(cheapest.place_id)
        elif by_price:
            plan_c_venues.append(by_price[0])
    plan_c = build_plan_from_venues(
        PlanId.C,
        plan_title(PlanId.C, family),
        plan_c_venues,
        _unused(pools.dinner, used_ids)[:2],
        context,
        budget_amount=context.budget_amount * resolved_policy.budget_plan_ratio,
        policy=resolved_policy,
    )

    plans = [plan_a, plan_b, plan_c]
    for plan in plans:
        logger.info(
            "Plan %s built: stops=%d backups=%d distance_m=%.0f",
            plan.id.value,
            len(plan.stops),
            len(plan.backups),
            itinerary_distance_meters(stop.venue for stop in plan.stops),
        )
    return plans


def collect_leg_warnings(plans: Iterable[Plan], policy: ItineraryPolicy | None = None) -> list[str]:
    """Describe every leg longer than the maximum travel time."""
    resolved_policy = policy or get_itinerary_policy()
    limit = resolved_policy.max_leg_minutes
    warnings: list[str] = []
    for plan in plans:
        for previous, stop in zip(plan.stops, plan.stops[1:]):
            if is_travel_time_acceptable(stop.travel_from_prev_mins, limit):
                continue
            distance = previous.venue.point.distance_to(stop.venue.point)
            mode = suggest_travel_mode(distance)
            message = (
                f"Plan {plan.id.value}: {stop.travel_from_prev_mins} min from {previous.venue.name} "
                f"to {stop.venue.name} exceeds {limit} min (suggested mode: {mode.value.lower()})"
            )
            logger.warning(message)
            warnings.append(message)
    return warnings


def summarize_budget(plan: Plan, currency: str, party_size: int) -> BudgetBreakdown:
    """Estimated spend of ``plan`` per person, for the party and per category."""
    size = max(1, party_size)
    low = sum(stop.estimated_cost_range[0] for stop in plan.stops)
    high = sum(stop.estimated_cost_range[1] for stop in plan.stops)

    by_category: dict[str, tuple[int, int]] = {}
    for stop in plan.stops:
        name = stop.venue.category.value
        current_low, current_high = by_category.get(name, (0, 0))
        stop_low, stop_high = stop.estimated_cost_range
        by_category[name] = (current_low + stop_low, current_high + stop_high)

    return BudgetBreakdown(
        currency=currency,
        party_size=size,
        plan_a_per_person=(low, high),
        plan_a_total=(low * size, high * size),
        by_category=by_category,
    )
