"""Venue records as delivered by the place search/detail provider."""

from __future__ import annotations

from typing import Any, Iterable

from pydantic import BaseModel, ConfigDict, Field, model_validator

from app.core.geo import GeoPoint
from app.schemas.enums import VenueCategory

_ACTIVITY_TYPES = frozenset(
    {
        "golf_course",
        "stadium",
        "gym",
        "spa",
        "museum",
        "art_gallery",
        "movie_theater",
        "bowling_alley",
        "amusement_park",
        "zoo",
        "aquarium",
        "casino",
        "tourist_attraction",
        "point_of_interest",
        "establishment",
    }
)
_SCENIC_TYPES = frozenset({"park", "viewpoint", "natural_feature"})
_DRINKS_TYPES = frozenset({"bar", "night_club"})
_DESSERT_TYPES = frozenset({"bakery", "ice_cream_shop"})
_FOOD_TYPES = frozenset({"restaurant", "food", "cafe", "meal_takeaway"})

# Activity types win so a golf course with a restaurant is not filed as dinner.
_CATEGORY_TYPE_PRIORITY = (
    (VenueCategory.ACTIVITY, _ACTIVITY_TYPES),
    (VenueCategory.SCENIC, _SCENIC_TYPES),
    (VenueCategory.DRINKS, _DRINKS_TYPES),
    (VenueCategory.DESSERT, _DESSERT_TYPES),
    (VenueCategory.DINNER, _FOOD_TYPES),
)


def infer_category_from_types(types: Iterable[str] | None) -> VenueCategory:
    """Map provider place types onto a venue category."""
    items = [str(item).strip().lower() for item in (types or []) if str(item).strip()]
    if not items:
        return VenueCategory.OTHER
    for category, known_types in _CATEGORY_TYPE_PRIORITY:
        if any(item in known_types for item in items):
            return category
    return VenueCategory.ACTIVITY


def build_maps_url(place_id: str) -> str:
    return f"https://www.google.com/maps/place/?q=place_id:{place_id}"


class Location(BaseModel):
    """Venue coordinates."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(..., ge=-90, le=90, description="Latitude")
    lng: float = Field(..., ge=-180, le=180, description="Longitude")

    def to_point(self) -> GeoPoint:
        return GeoPoint(lat=self.lat, lng=self.lng)

    @classmethod
    def from_point(cls, point: GeoPoint) -> Location:
        return cls(lat=point.lat, lng=point.lng)


class OpeningPeriod(BaseModel):
    """One opening interval; days run 0 (Sunday) to 6 (Saturday)."""

    model_config = ConfigDict(frozen=True)

    open_day: int = Field(..., ge=0, le=6)
    open_time: str = Field(..., pattern=r"^\d{2}:\d{2}$")
    close_day: int | None = Field(default=None, ge=0, le=6)
    close_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")


class OpeningHours(BaseModel):
    model_config = ConfigDict(frozen=True)

    periods: list[OpeningPeriod] = Field(default_factory=list)
    weekday_descriptions: list[str] = Field(default_factory=list)


class Venue(BaseModel):
    """A candidate place. Immutable; enrichment produces a new instance."""

    model_config = ConfigDict(frozen=True)

    place_id: str = Field(..., min_length=1, description="Provider place id")
    name: str = Field(..., description="Display name")
    location: Location = Field(..., description="Coordinates")
    category: VenueCategory = Field(default=VenueCategory.OTHER, description="Venue category")
    rating: float | None = Field(default=None, ge=0, le=5, description="Average rating")
    review_count: int | None = Field(default=None, ge=0, description="Number of reviews")
    price_level: int | None = Field(default=None, ge=0, le=4, description="Price level 0-4")
    address: str = Field(default="", description="Formatted address")
    maps_url: str | None = Field(default=None, description="External map link")
    opening_hours: OpeningHours | None = Field(default=None, description="Opening hours when fetched")

    @model_validator(mode="before")
    @classmethod
    def _fill_derived_fields(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        payload = dict(data)
        if not payload.get("category"):
            payload["category"] = infer_category_from_types(payload.get("types"))
        payload.pop("types", None)
        if not payload.get("maps_url") and payload.get("place_id"):
            payload["maps_url"] = build_maps_url(str(payload["place_id"]))
        return payload

    @property
    def point(self) -> GeoPoint:
        return self.location.to_point()


class VenueDetails(BaseModel):
    """Late-arriving detail fields for a venue; every field is optional."""

    place_id: str = Field(..., min_length=1)
    name: str | None = None
    address: str | None = None
    rating: float | None = Field(default=None, ge=0, le=5)
    review_count: int | None = Field(default=None, ge=0)
    price_level: int | None = Field(default=None, ge=0, le=4)
    maps_url: str | None = None
    opening_hours: OpeningHours | None = None
