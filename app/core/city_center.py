"""City-center coordinate lookup with an explicitly scoped cache.

The cache is owned by whoever constructs it (typically one per process, passed
into the workflow through ``config["configurable"]``). Cities missing from the
seed are filled by the finalize node with the centroid of the picked venues.
Seeded entries are never evicted; derived entries are evicted
least-recently-used once ``max_entries`` is reached.
"""

from __future__ import annotations

from collections import OrderedDict
from typing import Mapping

from app.core.geo import GeoPoint
from app.core.logger import get_logger

logger = get_logger(__name__)

KNOWN_CITY_CENTERS: Mapping[str, GeoPoint] = {
    "barcelona": GeoPoint(41.3874, 2.1686),
    "madrid": GeoPoint(40.4168, -3.7038),
    "paris": GeoPoint(48.8566, 2.3522),
    "london": GeoPoint(51.5074, -0.1278),
    "rome": GeoPoint(41.9028, 12.4964),
    "berlin": GeoPoint(52.52, 13.405),
    "amsterdam": GeoPoint(52.3676, 4.9041),
    "lisbon": GeoPoint(38.7223, -9.1393),
    "vienna": GeoPoint(48.2082, 16.3738),
    "prague": GeoPoint(50.0755, 14.4378),
    "new york": GeoPoint(40.7128, -74.006),
    "los angeles": GeoPoint(34.0522, -118.2437),
    "tokyo": GeoPoint(35.6762, 139.6503),
    "sydney": GeoPoint(-33.8688, 151.2093),
    "helsinki": GeoPoint(60.1699, 24.9384),
}


def _normalize_city(city: str | None) -> str:
    return (city or "").strip().lower()


class CityCenterCache:
    """Seeded city centers plus a bounded LRU of derived ones."""

    def __init__(self, seed: Mapping[str, GeoPoint] | None = None, max_entries: int = 64) -> None:
        seed_points = KNOWN_CITY_CENTERS if seed is None else seed
        self._seed = {_normalize_city(name): point for name, point in seed_points.items()}
        self._max_entries = max(1, int(max_entries))
        self._derived: OrderedDict[str, GeoPoint] = OrderedDict()

    def __len__(self) -> int:
        return len(self._derived)

    def get(self, city: str | None) -> GeoPoint | None:
        """Return the cached center or None when the city is unknown."""
        key = _normalize_city(city)
        if not key:
            return None
        if key in self._seed:
            return self._seed[key]
        point = self._derived.get(key)
        if point is not None:
            self._derived.move_to_end(key)
        return point

    def put(self, city: str, point: GeoPoint) -> None:
        """Store a derived center, evicting the least recently used entry when full."""
        key = _normalize_city(city)
        if not key or key in self._seed:
            return
        self._derived[key] = point
        self._derived.move_to_end(key)
        while len(self._derived) > self._max_entries:
            evicted, _ = self._derived.popitem(last=False)
            logger.info("City center cache eviction: city=%s max_entries=%d", evicted, self._max_entries)

    def clear(self) -> None:
        """Drop derived entries; seeded entries stay."""
        self._derived.clear()
