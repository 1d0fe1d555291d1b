"""Fixed planning tables and thresholds, bundled as injectable configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

from app.core.config import Settings, get_settings


def _frozen(mapping: dict) -> Mapping:
    return MappingProxyType(dict(mapping))


DEFAULT_SCORE_WEIGHTS = _frozen(
    {
        "rating": 0.30,
        "proximity": 0.25,
        "price_match": 0.20,
        "preference_match": 0.15,
        "review_count": 0.10,
    }
)

# EUR per person, indexed by provider price level.
DEFAULT_PRICE_BANDS = _frozen(
    {
        0: (0.0, 10.0),
        1: (10.0, 25.0),
        2: (25.0, 50.0),
        3: (50.0, 100.0),
        4: (100.0, 200.0),
    }
)

DEFAULT_VIBE_KEYWORDS = _frozen(
    {
        "romantic": ("intimate", "candlelit", "cozy", "wine", "french", "italian"),
        "adventurous": ("escape", "adventure", "tour", "climb", "explore"),
        "relaxed": ("lounge", "cafe", "garden", "terrace", "spa"),
        "fancy": ("michelin", "fine dining", "premium", "gourmet", "luxur"),
        "playful": ("game", "bowling", "arcade", "karaoke", "comedy"),
    }
)

DEFAULT_REVIEW_COUNT_TIERS = ((500, 1.0), (100, 0.8), (50, 0.6), (20, 0.4))

STANDARD_CATEGORY_ORDER = ("drinks", "activity", "dinner", "dessert", "finish", "scenic")
FAMILY_CATEGORY_ORDER = ("activity", "dinner", "dessert", "scenic", "finish", "drinks")

DEFAULT_DWELL_MINUTES = _frozen(
    {
        "drinks": 45,
        "activity": 90,
        "dinner": 90,
        "dessert": 30,
        "finish": 60,
        "scenic": 30,
    }
)

DEFAULT_PRICE_MULTIPLIERS = (0.5, 0.75, 1.0, 1.3, 1.6)

# Share of the per-person budget spent at one stop of each category.
DEFAULT_COST_SHARES = _frozen(
    {
        "dinner": 0.45,
        "activity": 0.30,
        "drinks": 0.15,
        "dessert": 0.10,
        "finish": 0.15,
        "scenic": 0.05,
    }
)

INDOOR_ACTIVITY_KEYWORDS = ("museum", "gallery", "cinema", "theater", "escape", "bowling", "spa")
INDOOR_FINISH_KEYWORDS = ("bar", "lounge", "club", "jazz", "cocktail")
ALCOHOL_FREE_KEYWORDS = ("cafe", "coffee", "tea", "dessert", "ice cream", "gelato", "bakery")


@dataclass(frozen=True, slots=True)
class ItineraryPolicy:
    """Tables and thresholds consumed by the planning components."""

    score_weights: Mapping[str, float] = field(default_factory=lambda: DEFAULT_SCORE_WEIGHTS)
    price_bands: Mapping[int, tuple[float, float]] = field(default_factory=lambda: DEFAULT_PRICE_BANDS)
    vibe_keywords: Mapping[str, tuple[str, ...]] = field(default_factory=lambda: DEFAULT_VIBE_KEYWORDS)
    review_count_tiers: tuple[tuple[int, float], ...] = DEFAULT_REVIEW_COUNT_TIERS
    review_count_floor: float = 0.3
    proximity_full_meters: float = 500.0
    proximity_zero_meters: float = 5000.0
    like_bonus: float = 0.15
    vibe_bonus: float = 0.10
    standard_category_order: tuple[str, ...] = STANDARD_CATEGORY_ORDER
    family_category_order: tuple[str, ...] = FAMILY_CATEGORY_ORDER
    dwell_minutes: Mapping[str, int] = field(default_factory=lambda: DEFAULT_DWELL_MINUTES)
    default_dwell_minutes: int = 60
    price_multipliers: tuple[float, ...] = DEFAULT_PRICE_MULTIPLIERS
    default_price_level: int = 2
    cost_shares: Mapping[str, float] = field(default_factory=lambda: DEFAULT_COST_SHARES)
    cost_band: tuple[float, float] = (0.8, 1.2)
    indoor_activity_keywords: tuple[str, ...] = INDOOR_ACTIVITY_KEYWORDS
    indoor_finish_keywords: tuple[str, ...] = INDOOR_FINISH_KEYWORDS
    alcohol_free_keywords: tuple[str, ...] = ALCOHOL_FREE_KEYWORDS
    dinner_backup_count: int = 3
    backup_count: int = 2
    max_activity_stops: int = 3
    minutes_per_activity_stop: int = 120
    travel_buffer_minutes: int = 10
    default_travel_minutes: int = 10
    cluster_radius_meters: float = 1500.0
    max_leg_minutes: int = 20
    walkable_leg_minutes: int = 15
    budget_plan_ratio: float = 0.7
    default_party_size: int = 2

    def category_order(self, family_friendly: bool) -> tuple[str, ...]:
        """Stop ordering for the given party type."""
        return self.family_category_order if family_friendly else self.standard_category_order


def build_itinerary_policy(settings: Settings) -> ItineraryPolicy:
    """Derive the planning policy, overriding tunable thresholds from settings."""
    return ItineraryPolicy(
        travel_buffer_minutes=settings.PLANNER_TRAVEL_BUFFER_MINUTES,
        default_travel_minutes=settings.PLANNER_DEFAULT_TRAVEL_MINUTES,
        cluster_radius_meters=settings.PLANNER_CLUSTER_RADIUS_METERS,
        max_leg_minutes=settings.PLANNER_MAX_LEG_MINUTES,
        walkable_leg_minutes=settings.PLANNER_WALKABLE_LEG_MINUTES,
        budget_plan_ratio=settings.PLANNER_BUDGET_PLAN_RATIO,
        default_party_size=settings.PLANNER_DEFAULT_PARTY_SIZE,
    )


def get_itinerary_policy(settings: Settings | None = None) -> ItineraryPolicy:
    """Return the policy for the current settings."""
    resolved_settings = settings or get_settings()
    return build_itinerary_policy(resolved_settings)
