"""Enumerations shared by the itinerary schemas."""

from enum import StrEnum


class VenueCategory(StrEnum):
    """Role a venue plays in an outing."""

    ACTIVITY = "activity"
    DINNER = "dinner"
    DRINKS = "drinks"
    DESSERT = "dessert"
    FINISH = "finish"
    SCENIC = "scenic"
    OTHER = "other"


class WalkingTolerance(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class PlanMode(StrEnum):
    """Whether stops carry a verified opening-hours check."""

    STANDARD = "standard"
    VERIFIED = "verified"


class PlanId(StrEnum):
    A = "A"
    B = "B"
    C = "C"


class SwapTag(StrEnum):
    """Fixed contingency tags of the swap menu."""

    RAIN_MODE = "rain_mode"
    BUDGET_LOWER = "budget_lower"
    NO_ALCOHOL = "no_alcohol"
    MORE_WALKABLE = "more_walkable"


class SkeletonTemplate(StrEnum):
    """Time/budget template a skeleton was built from."""

    BUDGET = "BUDGET"
    FANCY = "FANCY"
    LATE_START = "LATE_START"
    AFTERNOON = "AFTERNOON"
    SHORT = "SHORT"
    DEFAULT = "DEFAULT"
