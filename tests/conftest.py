"""Shared fixtures: venues around central Barcelona."""

from __future__ import annotations

import pytest

from app.core.config import get_settings
from app.schemas.itinerary import CandidatePools
from app.schemas.preferences import Preferences
from app.schemas.venue import Venue

BASE_LAT = 41.3874
BASE_LNG = 2.1686


def make_venue(
    place_id: str,
    name: str | None = None,
    *,
    category: str = "activity",
    lat: float = BASE_LAT,
    lng: float = BASE_LNG,
    rating: float | None = 4.5,
    review_count: int | None = 200,
    price_level: int | None = 2,
    **extra,
) -> Venue:
    return Venue(
        place_id=place_id,
        name=name or place_id,
        location={"lat": lat, "lng": lng},
        category=category,
        rating=rating,
        review_count=review_count,
        price_level=price_level,
        **extra,
    )


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def venue_factory():
    return make_venue


@pytest.fixture
def preferences() -> Preferences:
    return Preferences(vibe=["romantic"], likes=["jazz"])


@pytest.fixture
def candidate_pools() -> CandidatePools:
    """Three activities, four dinners and three finishes within ~1 km."""
    return CandidatePools(
        activity=[
            make_venue("act-museum", "Picasso Museum", lat=41.3852, lng=2.1810, rating=4.6, review_count=900),
            make_venue("act-escape", "Escape Room Gothic", lat=41.3840, lng=2.1770, rating=4.8, price_level=1),
            make_venue("act-park", "Ciutadella Park Walk", lat=41.3880, lng=2.1870, rating=4.4, price_level=0),
        ],
        dinner=[
            make_venue("din-wine", "Cozy Wine Bistro", category="dinner", lat=41.3860, lng=2.1760, rating=4.7),
            make_venue("din-tapas", "Tapas 24", category="dinner", lat=41.3920, lng=2.1640, price_level=1),
            make_venue("din-fine", "Gourmet Lab", category="dinner", lat=41.3950, lng=2.1600, price_level=4),
            make_venue("din-pizza", "Pizza Corner", category="dinner", lat=41.3800, lng=2.1700, rating=3.9),
        ],
        finish=[
            make_venue("fin-jazz", "Jamboree Jazz Club", category="drinks", lat=41.3800, lng=2.1750, rating=4.5),
            make_venue("fin-gelato", "Gelato Paradiso", category="dessert", lat=41.3845, lng=2.1790, price_level=1),
            make_venue("fin-cocktail", "Paradiso Cocktail Bar", category="drinks", lat=41.3850, lng=2.1830),
        ],
    )
