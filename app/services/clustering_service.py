"""Distance-based grouping of venues."""

from __future__ import annotations

from typing import Iterable

from app.core.geo import path_length_meters
from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.core.logger import get_logger
from app.schemas.venue import Venue

logger = get_logger(__name__)


def cluster_by_proximity(
    venues: Iterable[Venue],
    max_distance_meters: float | None = None,
    *,
    policy: ItineraryPolicy | None = None,
) -> list[list[Venue]]:
    """Greedy single-pass clustering.

    Venues are visited in input order. Each venue not yet assigned seeds a new
    cluster and pulls in every other unassigned venue within
    ``max_distance_meters`` of that seed. Membership is judged against the seed
    only, so two members of one cluster may be farther apart than the radius.
    Clusters are returned largest first; equal sizes keep creation order.
    """
    items = list(venues)
    if not items:
        return []

    if max_distance_meters is None:
        max_distance_meters = (policy or get_itinerary_policy()).cluster_radius_meters

    clusters: list[list[Venue]] = []
    assigned: set[str] = set()
    for seed in items:
        if seed.place_id in assigned:
            continue
        cluster = [seed]
        assigned.add(seed.place_id)
        seed_point = seed.point
        for other in items:
            if other.place_id in assigned:
                continue
            if seed_point.distance_to(other.point) <= max_distance_meters:
                cluster.append(other)
                assigned.add(other.place_id)
        clusters.append(cluster)

    clusters.sort(key=len, reverse=True)
    logger.info(
        "Clustered venues: venues=%d clusters=%d radius_m=%.0f largest=%d",
        len(items),
        len(clusters),
        max_distance_meters,
        len(clusters[0]),
    )
    return clusters


def itinerary_distance_meters(venues: Iterable[Venue]) -> float:
    """Total straight-line metres walking ``venues`` in order."""
    return path_length_meters(venue.point for venue in venues)
