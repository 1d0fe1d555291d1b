"""Time/budget skeleton construction."""

from __future__ import annotations

from app.core.clock import format_hhmm, parse_hhmm, window_minutes
from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.core.logger import get_logger
from app.core.numbers import round_half_up
from app.schemas.enums import SkeletonTemplate, VenueCategory
from app.schemas.preferences import Budget
from app.schemas.skeleton import Skeleton, SkeletonSlot, TimeWindow

logger = get_logger(__name__)

_BUDGET_AMOUNT_THRESHOLD = 80
_FANCY_AMOUNT_THRESHOLD = 250
_LATE_START_MINUTES = 20 * 60
_AFTERNOON_START_MINUTES = 14 * 60
_AFTERNOON_END_MINUTES = 18 * 60
_SHORT_WINDOW_MINUTES = 180
_VALID_PERCENT_RANGE = (95, 105)

# (label, type, budget percent, nominal minutes)
_TEMPLATES: dict[SkeletonTemplate, tuple[tuple[str, VenueCategory, float, int], ...]] = {
    SkeletonTemplate.DEFAULT: (
        ("Arrival drink", VenueCategory.DRINKS, 15, 45),
        ("Main activity", VenueCategory.ACTIVITY, 25, 90),
        ("Dinner", VenueCategory.DINNER, 50, 90),
        ("Nightcap / Dessert", VenueCategory.DESSERT, 10, 45),
    ),
    SkeletonTemplate.LATE_START: (
        ("Dinner", VenueCategory.DINNER, 55, 100),
        ("Activity / Walk", VenueCategory.ACTIVITY, 25, 60),
        ("Nightcap", VenueCategory.DRINKS, 20, 45),
    ),
    SkeletonTemplate.AFTERNOON: (
        ("Coffee / Light bite", VenueCategory.DRINKS, 15, 30),
        ("Main activity", VenueCategory.ACTIVITY, 50, 120),
        ("Late lunch / Early dinner", VenueCategory.DINNER, 35, 75),
    ),
    SkeletonTemplate.BUDGET: (
        ("Scenic walk / Free activity", VenueCategory.SCENIC, 5, 45),
        ("Main activity", VenueCategory.ACTIVITY, 30, 90),
        ("Dinner", VenueCategory.DINNER, 55, 75),
        ("Dessert / Walk", VenueCategory.DESSERT, 10, 30),
    ),
    SkeletonTemplate.FANCY: (
        ("Champagne / Aperitif", VenueCategory.DRINKS, 12, 45),
        ("Premium activity", VenueCategory.ACTIVITY, 28, 90),
        ("Fine dining", VenueCategory.DINNER, 50, 120),
        ("Cocktails / Nightcap", VenueCategory.DRINKS, 10, 45),
    ),
}


def _short_window_template(available_minutes: int) -> tuple[tuple[str, VenueCategory, float, int], ...]:
    return (
        ("Activity", VenueCategory.ACTIVITY, 40, int(available_minutes * 0.4)),
        ("Dinner / Drinks", VenueCategory.DINNER, 60, int(available_minutes * 0.6)),
    )


def select_template(
    budget: Budget,
    start_time: str,
    end_time: str,
) -> tuple[SkeletonTemplate, tuple[tuple[str, VenueCategory, float, int], ...]]:
    """Pick the template for a request; the first matching rule wins."""
    start_minutes = parse_hhmm(start_time)
    end_minutes = parse_hhmm(end_time)
    available_minutes = window_minutes(start_time, end_time)

    if budget.amount < _BUDGET_AMOUNT_THRESHOLD:
        return SkeletonTemplate.BUDGET, _TEMPLATES[SkeletonTemplate.BUDGET]
    if budget.amount > _FANCY_AMOUNT_THRESHOLD:
        return SkeletonTemplate.FANCY, _TEMPLATES[SkeletonTemplate.FANCY]
    if start_minutes >= _LATE_START_MINUTES:
        return SkeletonTemplate.LATE_START, _TEMPLATES[SkeletonTemplate.LATE_START]
    if start_minutes >= _AFTERNOON_START_MINUTES and end_minutes <= _AFTERNOON_END_MINUTES:
        return SkeletonTemplate.AFTERNOON, _TEMPLATES[SkeletonTemplate.AFTERNOON]
    if available_minutes < _SHORT_WINDOW_MINUTES:
        return SkeletonTemplate.SHORT, _short_window_template(available_minutes)
    return SkeletonTemplate.DEFAULT, _TEMPLATES[SkeletonTemplate.DEFAULT]


def _scale_durations(nominal: list[int], available_minutes: int) -> list[int]:
    total = sum(nominal)
    scale = available_minutes / total if total > 0 else 1.0
    return [round_half_up(minutes * scale) for minutes in nominal]


def build_skeleton(
    budget: Budget,
    start_time: str,
    end_time: str,
    *,
    policy: ItineraryPolicy | None = None,
) -> Skeleton:
    """Build the slot skeleton for a budget and time window.

    Slot durations are stretched or shrunk so they fill the window, then each
    slot gets a start time, leaving a travel buffer after every slot.
    Inputs are assumed valid: ``HH:MM`` times and a positive budget.
    """
    resolved_policy = policy or get_itinerary_policy()
    template, rows = select_template(budget, start_time, end_time)
    available_minutes = window_minutes(start_time, end_time)
    durations = _scale_durations([row[3] for row in rows], available_minutes)

    slots: list[SkeletonSlot] = []
    current = parse_hhmm(start_time)
    for (label, slot_type, percent, _), duration in zip(rows, durations):
        slots.append(
            SkeletonSlot(
                label=label,
                type=slot_type,
                budget_percent=percent,
                duration_mins=duration,
                time_start=format_hhmm(current),
            )
        )
        current += duration + resolved_policy.travel_buffer_minutes

    skeleton = Skeleton(
        template=template,
        slots=slots,
        total_budget=budget.amount,
        currency=budget.currency,
        time_window=TimeWindow(start=start_time, end=end_time),
    )
    logger.info(
        "Skeleton built: template=%s slots=%d window_minutes=%d budget=%.2f %s",
        template.value,
        len(slots),
        available_minutes,
        budget.amount,
        budget.currency,
    )
    return skeleton


def budget_for_slot(skeleton: Skeleton, slot_type: VenueCategory | str) -> int:
    """Whole-party budget of the first slot of ``slot_type``; 0 when absent."""
    wanted = str(slot_type.value if isinstance(slot_type, VenueCategory) else slot_type)
    slot = next((item for item in skeleton.slots if item.type.value == wanted), None)
    if slot is None:
        return 0
    return round_half_up(skeleton.total_budget * slot.budget_percent / 100)


def slot_types(skeleton: Skeleton) -> list[str]:
    return [slot.type.value for slot in skeleton.slots]


def validate_skeleton(skeleton: Skeleton) -> bool:
    """Budget shares must add up to 100% within a 5-point tolerance."""
    total_percent = sum(slot.budget_percent for slot in skeleton.slots)
    low, high = _VALID_PERCENT_RANGE
    return low <= total_percent <= high
