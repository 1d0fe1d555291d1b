"""Venue detail merging and opening-hours checks."""

from __future__ import annotations

from app.core.clock import MINUTES_PER_DAY, parse_hhmm
from app.core.logger import get_logger
from app.schemas.enums import PlanMode
from app.schemas.venue import OpeningHours, OpeningPeriod, Venue, VenueDetails

logger = get_logger(__name__)

STANDARD_OPEN_CHECK = "Standard (confirm hours in Maps)"
UNVERIFIED_OPEN_CHECK = "Verified: check hours in Maps"


def merge_venue_details(venue: Venue, details: VenueDetails | None) -> Venue:
    """Return ``venue`` with the fields ``details`` carries filled in.

    Fields present in ``details`` override; absent ones never clear existing
    data. The input venue is left untouched.
    """
    if details is None:
        return venue
    if details.place_id != venue.place_id:
        raise ValueError(f"details for {details.place_id} cannot enrich venue {venue.place_id}")

    updates = details.model_dump(exclude_none=True, exclude={"place_id"})
    updates = {key: value for key, value in updates.items() if value != ""}
    if "opening_hours" in updates:
        updates["opening_hours"] = details.opening_hours
    if not updates:
        return venue

    logger.debug("Enriching venue place_id=%s fields=%s", venue.place_id, sorted(updates))
    return venue.model_copy(update=updates)


def _period_covers(period: OpeningPeriod, minutes: int) -> bool:
    open_minutes = parse_hhmm(period.open_time)
    if minutes < open_minutes:
        return False
    if period.close_time is None:
        return True

    close_minutes = parse_hhmm(period.close_time)
    same_day = period.close_day is None or period.close_day == period.open_day
    if same_day and close_minutes > open_minutes:
        return minutes < close_minutes
    # Closes after midnight: open for the rest of the opening day.
    return minutes < MINUTES_PER_DAY


def is_open_at(hours: OpeningHours | None, weekday: int, time: str) -> bool | None:
    """Pass/fail opening check for ``weekday`` (0 = Sunday) at ``HH:MM``.

    Returns None when the venue has no usable periods.
    """
    if hours is None or not hours.periods:
        return None
    minutes = parse_hhmm(time)
    return any(
        _period_covers(period, minutes)
        for period in hours.periods
        if period.open_day == weekday
    )


def open_check_note(venue: Venue, mode: PlanMode, weekday: int | None, time: str) -> str:
    if mode != PlanMode.VERIFIED:
        return STANDARD_OPEN_CHECK
    if weekday is None:
        return UNVERIFIED_OPEN_CHECK

    is_open = is_open_at(venue.opening_hours, weekday, time)
    if is_open is None:
        return UNVERIFIED_OPEN_CHECK
    if is_open:
        return f"Verified: open at {time}"
    return f"Warning: may be closed at {time}"
