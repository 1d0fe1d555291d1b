"""Multi-factor venue scoring and ranking.

Each venue gets five component scores in [0, 1]:

- rating: (rating - 3) / 2, clamped; neutral 0.5 when unknown
- proximity: 1.0 within 500 m of the reference point, 0.0 beyond 5 km, linear between
- price match: fit of the venue's price band to the per-person target
- preference match: likes and vibe keywords found in the venue name/category
- review count: step function of the number of reviews

and a composite score, their weighted sum. Venues closer to cheap-but-good
outrank far or overpriced ones; venues cheaper than the target are never
punished as hard as venues above it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from app.core.geo import GeoPoint, centroid
from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.core.logger import get_logger
from app.core.numbers import clamp
from app.schemas.preferences import Preferences
from app.schemas.venue import Location, Venue

logger = get_logger(__name__)

_NEUTRAL_RATING = 0.5
_NEUTRAL_PRICE_MATCH = 0.5
_PREFERENCE_BASE = 0.5
_UNDER_BAND_SCORE = 0.8
_OVER_BAND_BASE = 0.7
_OVER_BAND_FLOOR = 0.1
_OVER_BAND_SLOPE_EUR = 50.0


@dataclass(frozen=True, slots=True)
class ScoreBreakdown:
    rating: float
    proximity: float
    price_match: float
    preference_match: float
    review_count: float

    def as_dict(self) -> dict[str, float]:
        return {
            "rating": self.rating,
            "proximity": self.proximity,
            "price_match": self.price_match,
            "preference_match": self.preference_match,
            "review_count": self.review_count,
        }


@dataclass(frozen=True, slots=True)
class ScoredVenue:
    """A venue with its composite and component scores for one reference point."""

    venue: Venue
    score: float
    scores: ScoreBreakdown


def score_rating(venue: Venue) -> float:
    if venue.rating is None:
        return _NEUTRAL_RATING
    return clamp((venue.rating - 3) / 2, 0.0, 1.0)


def score_proximity(venue: Venue, reference: GeoPoint, policy: ItineraryPolicy | None = None) -> float:
    resolved_policy = policy or get_itinerary_policy()
    near = resolved_policy.proximity_full_meters
    far = resolved_policy.proximity_zero_meters
    distance = venue.point.distance_to(reference)
    if distance <= near:
        return 1.0
    if distance >= far:
        return 0.0
    return 1 - (distance - near) / (far - near)


def score_price_match(
    venue: Venue,
    target_budget_per_person: float,
    policy: ItineraryPolicy | None = None,
) -> float:
    """Fit of the venue's price band to the per-person target (EUR)."""
    resolved_policy = policy or get_itinerary_policy()
    if venue.price_level is None:
        return _NEUTRAL_PRICE_MATCH
    band = resolved_policy.price_bands.get(venue.price_level)
    if band is None:
        return _NEUTRAL_PRICE_MATCH

    band_min, band_max = band
    if band_min <= target_budget_per_person <= band_max:
        return 1.0
    if target_budget_per_person < band_min:
        over_by = band_min - target_budget_per_person
        return max(_OVER_BAND_FLOOR, _OVER_BAND_BASE - over_by / _OVER_BAND_SLOPE_EUR)
    return _UNDER_BAND_SCORE


def score_preference_match(
    venue: Venue,
    preferences: Preferences,
    policy: ItineraryPolicy | None = None,
) -> float:
    resolved_policy = policy or get_itinerary_policy()
    name = venue.name.lower()
    category = venue.category.value.lower()
    score = _PREFERENCE_BASE

    for like in preferences.likes:
        keyword = like.strip().lower()
        if keyword and (keyword in name or keyword in category):
            score += resolved_policy.like_bonus

    for vibe in preferences.vibe:
        for keyword in resolved_policy.vibe_keywords.get(vibe.strip().lower(), ()):
            if keyword in name:
                score += resolved_policy.vibe_bonus

    return min(1.0, score)


def score_review_count(venue: Venue, policy: ItineraryPolicy | None = None) -> float:
    resolved_policy = policy or get_itinerary_policy()
    if not venue.review_count:
        return resolved_policy.review_count_floor
    for threshold, score in resolved_policy.review_count_tiers:
        if venue.review_count >= threshold:
            return score
    return resolved_policy.review_count_floor


def score_venue(
    venue: Venue,
    preferences: Preferences,
    target_budget_per_person: float,
    reference: GeoPoint,
    policy: ItineraryPolicy | None = None,
) -> ScoredVenue:
    resolved_policy = policy or get_itinerary_policy()
    scores = ScoreBreakdown(
        rating=score_rating(venue),
        proximity=score_proximity(venue, reference, resolved_policy),
        price_match=score_price_match(venue, target_budget_per_person, resolved_policy),
        preference_match=score_preference_match(venue, preferences, resolved_policy),
        review_count=score_review_count(venue, resolved_policy),
    )
    weights = resolved_policy.score_weights
    total = sum(weights.get(name, 0.0) * value for name, value in scores.as_dict().items())
    return ScoredVenue(venue=venue, score=clamp(total, 0.0, 1.0), scores=scores)


def _resolve_reference(venues: Sequence[Venue], reference: GeoPoint | Location | None) -> GeoPoint:
    if isinstance(reference, Location):
        return reference.to_point()
    if reference is not None:
        return reference
    return centroid(venue.point for venue in venues)


def rank_venues(
    venues: Iterable[Venue],
    preferences: Preferences,
    target_budget_per_person: float,
    reference: GeoPoint | Location | None = None,
    *,
    policy: ItineraryPolicy | None = None,
) -> list[ScoredVenue]:
    """Score ``venues`` and sort them best first; ties keep input order.

    Proximity is measured against ``reference``, or the centroid of the
    venues when none is given.
    """
    resolved_policy = policy or get_itinerary_policy()
    items = list(venues)
    if not items:
        return []

    reference_point = _resolve_reference(items, reference)
    scored = [
        score_venue(venue, preferences, target_budget_per_person, reference_point, resolved_policy)
        for venue in items
    ]
    return sorted(scored, key=lambda item: item.score, reverse=True)
