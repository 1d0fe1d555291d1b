"""Swap menu tests."""

from app.schemas.enums import PlanId, SwapTag
from app.schemas.itinerary import CandidatePools
from app.services.plan_assembly_service import PlanningContext, build_plan_from_venues
from app.services.swap_menu_service import average_leg_minutes, build_swap_menu


def test_four_fixed_tags_in_order(candidate_pools):
    """The menu always has the four tags in fixed order."""
    menu = build_swap_menu(candidate_pools, None)

    assert [item.swap for item in menu] == [
        SwapTag.RAIN_MODE,
        SwapTag.BUDGET_LOWER,
        SwapTag.NO_ALCOHOL,
        SwapTag.MORE_WALKABLE,
    ]


def test_instructions_name_matching_venues(candidate_pools):
    """Instructions name the first matching venues."""
    menu = {item.swap: item.instruction for item in build_swap_menu(candidate_pools, None)}

    assert menu[SwapTag.RAIN_MODE] == (
        "If weather turns bad: swap activity to Picasso Museum "
        "(https://www.google.com/maps/place/?q=place_id:act-museum). "
        "For drinks, try Jamboree Jazz Club. All restaurants in the plan are indoors."
    )
    assert menu[SwapTag.BUDGET_LOWER] == (
        "To reduce spend: swap dinner to Tapas 24 (€€ or less); "
        "try Ciutadella Park Walk for activity; skip dessert/after-dinner drinks."
    )
    assert menu[SwapTag.NO_ALCOHOL] == (
        "For an alcohol-free evening: replace bar stops with Gelato Paradiso. "
        "Most restaurants offer non-alcoholic pairings on request."
    )


def test_fallback_instructions_for_empty_pools():
    """Empty pools fall back to generic advice."""
    menu = {item.swap: item.instruction for item in build_swap_menu(CandidatePools(), None)}

    assert menu[SwapTag.RAIN_MODE] == (
        "If weather turns bad: move directly to dinner (skip outdoor activity). "
        "All restaurants in the plan are indoors."
    )
    assert "share dishes at dinner" in menu[SwapTag.BUDGET_LOWER]
    assert "opt for a free walking activity like a scenic stroll" in menu[SwapTag.BUDGET_LOWER]
    assert "ask for mocktails at bar venues, or swap to a dessert cafe" in menu[SwapTag.NO_ALCOHOL]
    assert menu[SwapTag.MORE_WALKABLE] == (
        "To reduce walking: Keep all venues in the same neighborhood. "
        "Ask restaurant for nearby bar recommendations to minimize final walk."
    )


def test_two_alcohol_free_options(venue_factory):
    """Two alcohol-free venues are both offered."""
    pools = CandidatePools(
        finish=[
            venue_factory("tea", "Tea House", category="drinks"),
            venue_factory("bakery", "Night Bakery", category="dessert"),
        ]
    )

    menu = {item.swap: item.instruction for item in build_swap_menu(pools, None)}

    assert "replace bar stops with Tea House or Night Bakery" in menu[SwapTag.NO_ALCOHOL]


def test_long_legs_suggest_transit(venue_factory):
    """Long average legs suggest transit."""
    venues = [
        venue_factory("d", category="drinks"),
        venue_factory("a", category="activity"),
        venue_factory("n", category="dinner"),
    ]
    context = PlanningContext(
        start_time="18:00",
        end_time="23:00",
        budget_amount=100,
        travel_times={"d->a": 20, "a->n": 20},
    )
    plan_a = build_plan_from_venues(PlanId.A, "Test", venues, [], context)

    menu = {item.swap: item.instruction for item in build_swap_menu(CandidatePools(), plan_a)}

    assert average_leg_minutes(plan_a) == 20
    assert menu[SwapTag.MORE_WALKABLE].startswith(
        "To reduce walking: consider using transit between stops (check Google Maps for metro/bus). "
    )
