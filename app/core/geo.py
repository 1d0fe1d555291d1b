"""Great-circle distance helpers for venue proximity."""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import StrEnum
from typing import Iterable

EARTH_RADIUS_METERS = 6_371_000.0
_MIN_LAT = -90.0
_MAX_LAT = 90.0
_MIN_LNG = -180.0
_MAX_LNG = 180.0
_WALKING_DISTANCE_METERS = 1500.0


def _clamp(value: float, minimum: float, maximum: float) -> float:
    return max(minimum, min(maximum, value))


class TravelMode(StrEnum):
    """Travel mode suggested between two stops."""

    WALK = "WALK"
    DRIVE = "DRIVE"
    TRANSIT = "TRANSIT"


@dataclass(frozen=True, slots=True)
class GeoPoint:
    """A latitude/longitude pair in degrees."""

    lat: float
    lng: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "lat", _clamp(float(self.lat), _MIN_LAT, _MAX_LAT))
        object.__setattr__(self, "lng", _clamp(float(self.lng), _MIN_LNG, _MAX_LNG))

    def distance_to(self, other: GeoPoint) -> float:
        """Return the haversine distance to ``other`` in metres."""
        return haversine_meters(self.lat, self.lng, other.lat, other.lng)


def haversine_meters(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Return the great-circle distance between two coordinates in metres."""
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lng / 2) ** 2
    )
    return EARTH_RADIUS_METERS * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def centroid(points: Iterable[GeoPoint]) -> GeoPoint:
    """Arithmetic mean of the given points; (0, 0) for an empty input."""
    items = list(points)
    if not items:
        return GeoPoint(lat=0.0, lng=0.0)
    return GeoPoint(
        lat=sum(point.lat for point in items) / len(items),
        lng=sum(point.lng for point in items) / len(items),
    )


def path_length_meters(points: Iterable[GeoPoint]) -> float:
    """Total distance along consecutive points."""
    items = list(points)
    return sum(items[index].distance_to(items[index + 1]) for index in range(len(items) - 1))


def suggest_travel_mode(distance_meters: float) -> TravelMode:
    """Walk for short hops, transit otherwise."""
    if distance_meters < _WALKING_DISTANCE_METERS:
        return TravelMode.WALK
    return TravelMode.TRANSIT


def is_travel_time_acceptable(duration_minutes: int | float, max_minutes: int = 20) -> bool:
    """Return whether a leg stays within the maximum travel time."""
    return duration_minutes <= max_minutes
