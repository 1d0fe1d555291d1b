"""Anchor-driven finalist selection over the candidate pools."""

from __future__ import annotations

from dataclasses import dataclass, field

from app.core.itinerary_policy import ItineraryPolicy, get_itinerary_policy
from app.core.logger import get_logger
from app.schemas.enums import VenueCategory
from app.schemas.itinerary import CandidatePools
from app.schemas.preferences import Budget, Preferences
from app.schemas.skeleton import Skeleton
from app.schemas.venue import Venue
from app.services.skeleton_service import budget_for_slot
from app.services.venue_scoring_service import ScoredVenue, rank_venues

logger = get_logger(__name__)

POOL_CATEGORIES = ("activity", "dinner", "finish")

# Shares of the total budget used when no skeleton is available.
_FALLBACK_BUDGET_SHARES = {"activity": 0.25, "dinner": 0.50, "finish": 0.15}


@dataclass(frozen=True)
class FinalistSelection:
    """Primary pick and backups per pool category."""

    selected: dict[str, Venue] = field(default_factory=dict)
    backups: dict[str, list[Venue]] = field(default_factory=dict)
    ranked_pools: CandidatePools = field(default_factory=CandidatePools)

    def venues(self) -> list[Venue]:
        return [self.selected[name] for name in POOL_CATEGORIES if name in self.selected]


def per_person_category_budgets(
    skeleton: Skeleton | None,
    budget: Budget,
    party_size: int,
) -> dict[str, float]:
    """Per-person spending target for each pool category."""
    if skeleton is not None:
        totals = {
            "activity": budget_for_slot(skeleton, VenueCategory.ACTIVITY),
            "dinner": budget_for_slot(skeleton, VenueCategory.DINNER),
            "finish": budget_for_slot(skeleton, VenueCategory.DRINKS)
            + budget_for_slot(skeleton, VenueCategory.DESSERT),
        }
    else:
        totals = {name: budget.amount * share for name, share in _FALLBACK_BUDGET_SHARES.items()}

    size = max(1, party_size)
    return {name: total / size for name, total in totals.items()}


def _pick(ranked: list[ScoredVenue], backup_count: int) -> tuple[Venue | None, list[Venue]]:
    if not ranked:
        return None, []
    return ranked[0].venue, [item.venue for item in ranked[1 : 1 + backup_count]]


def select_finalists(
    pools: CandidatePools,
    preferences: Preferences,
    budget_per_category: dict[str, float],
    *,
    policy: ItineraryPolicy | None = None,
) -> FinalistSelection:
    """Pick one venue per category plus backups, anchored on dinner.

    Every pool is ranked against its own centroid first. Dinner is the anchor:
    once it is picked, activity and finish are ranked a second time against
    the dinner location and their picks and backups are replaced.

    The centroid-ranked pools are returned alongside the picks; later stages
    draw alternates and backups from them in rank order.
    """
    resolved_policy = policy or get_itinerary_policy()
    backup_counts = {
        "activity": resolved_policy.backup_count,
        "dinner": resolved_policy.dinner_backup_count,
        "finish": resolved_policy.backup_count,
    }

    selected: dict[str, Venue] = {}
    backups: dict[str, list[Venue]] = {name: [] for name in POOL_CATEGORIES}
    ranked_by_pool: dict[str, list[Venue]] = {}
    for name in POOL_CATEGORIES:
        ranked = rank_venues(
            getattr(pools, name),
            preferences,
            budget_per_category.get(name, 0.0),
            policy=resolved_policy,
        )
        ranked_by_pool[name] = [item.venue for item in ranked]
        pick, rest = _pick(ranked, backup_counts[name])
        if pick is not None:
            selected[name] = pick
            backups[name] = rest

    anchor = selected.get("dinner")
    if anchor is not None:
        for name in ("activity", "finish"):
            pool = ranked_by_pool[name]
            if len(pool) <= 1:
                continue
            reranked = rank_venues(
                pool,
                preferences,
                budget_per_category.get(name, 0.0),
                anchor.location,
                policy=resolved_policy,
            )
            pick, rest = _pick(reranked, backup_counts[name])
            selected[name] = pick
            backups[name] = rest

    for name in POOL_CATEGORIES:
        picked = selected.get(name)
        logger.info(
            "Finalist %s=%s backups=%s",
            name,
            picked.name if picked else None,
            [venue.name for venue in backups[name]] or None,
        )
    return FinalistSelection(
        selected=selected,
        backups=backups,
        ranked_pools=CandidatePools(**ranked_by_pool),
    )
