"""Itinerary graph and service tests."""

import asyncio

import pytest

from app.core.city_center import CityCenterCache
from app.core.itinerary_policy import ItineraryPolicy
from app.graph.itinerary.nodes import compose_swap_menu, create_skeleton, finalize_itinerary
from app.graph.itinerary.workflow import compiled_itinerary_graph
from app.schemas.itinerary import CandidatePools, ItineraryRequest
from app.services.finalist_service import FinalistSelection
from app.services.itinerary_service import ItineraryGenerationError, run_itinerary_pipeline


@pytest.fixture
def request_payload(candidate_pools) -> dict:
    return {
        "budget": {"amount": 150, "currency": "eur"},
        "start_time": "18:00",
        "end_time": "23:00",
        "party_size": 2,
        "preferences": {"vibe": ["romantic"], "likes": ["jazz"]},
        "city": "Barcelona",
        "candidate_pools": candidate_pools.model_dump(mode="json"),
    }


def _run_graph(payload: dict, **configurable) -> dict:
    return compiled_itinerary_graph.invoke(
        {"itinerary_request": payload},
        config={"configurable": configurable},
    )


class TestItineraryGraph:
    """Compiled itinerary graph tests."""

    def test_full_pipeline(self, request_payload):
        """The graph produces plans, swap menu and breakdown end to end."""
        result = _run_graph(request_payload, city_cache=CityCenterCache())

        assert result.get("error") is None
        final = result["final_itinerary"]
        assert [plan["id"] for plan in final["plans"]] == ["A", "B", "C"]
        assert len(final["swap_menu"]) == 4
        assert set(final["selected"]) == {"activity", "dinner", "finish"}
        assert final["skeleton"]["template"] == "DEFAULT"
        assert final["skeleton"]["currency"] == "EUR"
        assert final["city_center"] == {"lat": 41.3874, "lng": 2.1686}
        assert final["budget_breakdown"]["party_size"] == 2
        assert final["plans"][0]["title"] == "Romantic Evening in Barcelona"

    def test_unknown_city_center_is_cached(self, request_payload):
        """An unseeded city gets the finalists' centroid, bounded by the cache size."""
        cache = CityCenterCache(seed={}, max_entries=1)

        final = _run_graph(request_payload, city_cache=cache)["final_itinerary"]

        center = cache.get("barcelona")
        assert center is not None
        assert final["city_center"] == {"lat": center.lat, "lng": center.lng}

        request_payload["city"] = "Gracia"
        _run_graph(request_payload, city_cache=cache)

        assert len(cache) == 1
        assert cache.get("Barcelona") is None
        assert cache.get("Gracia") is not None

    def test_default_family_window(self, request_payload):
        """Family outings without a window use 11:00-18:00."""
        request_payload.pop("start_time")
        request_payload.pop("end_time")
        request_payload["preferences"]["family_friendly"] = True

        result = _run_graph(request_payload)

        assert (result["start_time"], result["end_time"]) == ("11:00", "18:00")
        assert result["final_itinerary"]["plans"][0]["stops"][0]["time"] == "11:00"
        assert result["final_itinerary"]["city_center"] is None

    def test_policy_is_injected(self, request_payload):
        """A policy passed through config drives the skeleton."""
        result = _run_graph(request_payload, policy=ItineraryPolicy(travel_buffer_minutes=0))

        starts = [slot.time_start for slot in result["skeleton"].slots]
        assert starts == ["18:00", "18:50", "20:30", "22:10"]

    def test_empty_pools_fail(self, request_payload):
        """Empty pools stop the graph with an error."""
        request_payload["candidate_pools"] = {}

        result = _run_graph(request_payload)

        assert result["error"] == "No venues selected for plans."
        assert result["final_itinerary"] is None
        assert "swap_menu" not in result

    def test_leg_warnings_are_reported(self, request_payload, candidate_pools):
        """Legs over the travel limit surface as warnings."""
        selected = _run_graph(request_payload)["final_itinerary"]["plans"][0]["stops"]
        key = f"{selected[0]['venue']['place_id']}->{selected[1]['venue']['place_id']}"
        request_payload["travel_times"] = {key: 45}

        final = _run_graph(request_payload)["final_itinerary"]

        assert any(warning.startswith("Plan A: 45 min") for warning in final["warnings"])


class TestNodes:
    """Individual graph node tests."""

    def test_skeleton_requires_request(self):
        """The skeleton node needs a request."""
        result = create_skeleton({}, {})

        assert result["error"] == "itinerary_request is required to build a skeleton."

    def test_malformed_request(self):
        """A malformed request is reported, not raised."""
        result = create_skeleton({"itinerary_request": {"budget": {"amount": -1}}}, {})

        assert result["error"] == "itinerary_request is malformed."

    def test_swap_menu_reads_ranked_pools(self, venue_factory):
        """Swap suggestions come from the rank-ordered pools of the selection."""
        ranked = CandidatePools(
            finish=[
                venue_factory("f-1", "Gelato Uno", category="dessert"),
                venue_factory("f-2", "Cafe Dos", category="dessert"),
            ]
        )
        state = {"selection": FinalistSelection(ranked_pools=ranked), "plans": []}

        menu = compose_swap_menu(state, {})["swap_menu"]

        assert menu[2].instruction.startswith("For an alcohol-free evening: replace bar stops with Gelato Uno or Cafe Dos")

    def test_error_short_circuits(self):
        """Downstream nodes pass an existing error through."""
        state = {"error": "boom"}

        assert compose_swap_menu(state, {}) == state
        assert finalize_itinerary(state, {})["final_itinerary"] is None


class TestItineraryService:
    """run_itinerary_pipeline tests."""

    def test_returns_response(self, request_payload):
        """The service returns a validated response."""
        request = ItineraryRequest.model_validate(request_payload)

        response = asyncio.run(run_itinerary_pipeline(request, city_cache=CityCenterCache()))

        assert len(response.plans) == 3
        assert response.budget_breakdown is not None
        assert response.budget_breakdown.plan_a_total[0] == response.budget_breakdown.plan_a_per_person[0] * 2

    def test_plan_b_uses_next_ranked_dinner(self, request_payload, venue_factory):
        """Plan B takes the runner-up dinner even when it was listed last."""
        request_payload["candidate_pools"]["dinner"] = [
            venue.model_dump(mode="json")
            for venue in (
                venue_factory("d-bad", category="dinner", rating=3.0, review_count=5, price_level=4),
                venue_factory("d-top", category="dinner", rating=4.9, review_count=900),
                venue_factory("d-good", category="dinner", rating=4.7, review_count=600),
            )
        ]
        request = ItineraryRequest.model_validate(request_payload)

        response = asyncio.run(run_itinerary_pipeline(request))

        dinners = {
            plan.id: next(stop.venue.place_id for stop in plan.stops if stop.venue.place_id.startswith("d-"))
            for plan in response.plans[:2]
        }
        assert dinners == {"A": "d-top", "B": "d-good"}
        assert [backup.place_id for backup in response.backups["dinner"]] == ["d-good", "d-bad"]

    def test_injected_empty_cache_is_used(self, request_payload):
        """A fresh cache passed by the caller is filled instead of the shared one."""
        request_payload["city"] = "Gracia"
        cache = CityCenterCache(seed={})

        request = ItineraryRequest.model_validate(request_payload)
        response = asyncio.run(run_itinerary_pipeline(request, city_cache=cache))

        assert len(cache) == 1
        assert response.city_center is not None
        assert response.city_center.to_point() == cache.get("gracia")

    def test_raises_when_no_plans(self, request_payload):
        """No plans raises ItineraryGenerationError."""
        request_payload["candidate_pools"] = {}
        request = ItineraryRequest.model_validate(request_payload)

        with pytest.raises(ItineraryGenerationError, match="No venues selected"):
            asyncio.run(run_itinerary_pipeline(request))
