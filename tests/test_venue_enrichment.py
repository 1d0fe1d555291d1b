"""Venue enrichment and opening-hours tests."""

import pytest

from app.schemas.enums import PlanMode, VenueCategory
from app.schemas.venue import OpeningHours, OpeningPeriod, Venue, VenueDetails
from app.services.venue_enrichment_service import is_open_at, merge_venue_details, open_check_note


def _hours(*periods: OpeningPeriod) -> OpeningHours:
    return OpeningHours(periods=list(periods))


class TestMergeVenueDetails:
    """merge_venue_details tests."""

    def test_present_fields_override(self, venue_factory):
        """Fields present in the details override."""
        venue = venue_factory("v1", rating=4.0, review_count=10, address="Old street")
        details = VenueDetails(place_id="v1", rating=4.6, address="Carrer Nou 1")

        merged = merge_venue_details(venue, details)

        assert merged.rating == 4.6
        assert merged.address == "Carrer Nou 1"
        assert merged.review_count == 10
        assert venue.rating == 4.0

    def test_absent_fields_never_clear(self, venue_factory):
        """Absent or blank fields keep existing data."""
        venue = venue_factory("v1", price_level=3)

        merged = merge_venue_details(venue, VenueDetails(place_id="v1", price_level=None, name=""))

        assert merged == venue

    def test_opening_hours_are_attached(self, venue_factory):
        """Opening hours are copied onto the venue."""
        hours = _hours(OpeningPeriod(open_day=1, open_time="09:00", close_day=1, close_time="17:00"))

        merged = merge_venue_details(venue_factory("v1"), VenueDetails(place_id="v1", opening_hours=hours))

        assert merged.opening_hours == hours

    def test_mismatched_place_id(self, venue_factory):
        """Details for another place are refused."""
        with pytest.raises(ValueError):
            merge_venue_details(venue_factory("v1"), VenueDetails(place_id="other", rating=5.0))

    def test_none_details(self, venue_factory):
        """No details returns the venue as is."""
        venue = venue_factory("v1")
        assert merge_venue_details(venue, None) is venue


class TestIsOpenAt:
    """is_open_at tests."""

    def test_inside_and_outside_period(self):
        """Open inside the period, closed outside it."""
        hours = _hours(OpeningPeriod(open_day=5, open_time="12:00", close_day=5, close_time="23:00"))

        assert is_open_at(hours, 5, "19:30") is True
        assert is_open_at(hours, 5, "23:00") is False
        assert is_open_at(hours, 5, "11:59") is False
        assert is_open_at(hours, 4, "19:30") is False

    def test_overnight_period_runs_to_midnight(self):
        """Overnight periods count as open until midnight."""
        hours = _hours(OpeningPeriod(open_day=6, open_time="20:00", close_day=0, close_time="03:00"))

        assert is_open_at(hours, 6, "23:45") is True
        assert is_open_at(hours, 6, "19:00") is False

    def test_open_ended_period(self):
        """A period without a close time stays open."""
        hours = _hours(OpeningPeriod(open_day=0, open_time="00:00"))

        assert is_open_at(hours, 0, "22:00") is True

    def test_unknown_hours(self):
        """Missing periods give an unknown result."""
        assert is_open_at(None, 1, "12:00") is None
        assert is_open_at(OpeningHours(), 1, "12:00") is None


class TestOpenCheckNote:
    """open_check_note tests."""

    def test_notes_by_mode(self, venue_factory):
        """The open-check note depends on the plan mode."""
        hours = _hours(OpeningPeriod(open_day=2, open_time="18:00", close_day=2, close_time="22:00"))
        venue = venue_factory("v1", opening_hours=hours)

        assert open_check_note(venue, PlanMode.STANDARD, 2, "19:00") == "Standard (confirm hours in Maps)"
        assert open_check_note(venue, PlanMode.VERIFIED, 2, "19:00") == "Verified: open at 19:00"
        assert open_check_note(venue, PlanMode.VERIFIED, 2, "23:00") == "Warning: may be closed at 23:00"
        assert open_check_note(venue, PlanMode.VERIFIED, None, "19:00") == "Verified: check hours in Maps"


class TestVenueModel:
    """Venue model tests."""

    def test_category_inferred_from_types(self):
        """Category is inferred from provider types."""
        venue = Venue.model_validate(
            {
                "place_id": "golf",
                "name": "Golf & Grill",
                "location": {"lat": 41.0, "lng": 2.0},
                "types": ["restaurant", "golf_course"],
            }
        )

        assert venue.category == VenueCategory.ACTIVITY
        assert venue.maps_url == "https://www.google.com/maps/place/?q=place_id:golf"

    @pytest.mark.parametrize(
        ("types", "expected"),
        [
            (["park"], VenueCategory.SCENIC),
            (["bar", "restaurant"], VenueCategory.DRINKS),
            (["bakery"], VenueCategory.DESSERT),
            (["cafe"], VenueCategory.DINNER),
            (["lodging"], VenueCategory.ACTIVITY),
            ([], VenueCategory.OTHER),
        ],
    )
    def test_category_priority(self, types, expected):
        """Type priority decides the inferred category."""
        venue = Venue.model_validate(
            {"place_id": "p", "name": "Place", "location": {"lat": 0, "lng": 0}, "types": types}
        )

        assert venue.category == expected

    def test_explicit_category_is_kept(self):
        """An explicit category beats inference."""
        venue = Venue.model_validate(
            {
                "place_id": "p",
                "name": "Place",
                "location": {"lat": 0, "lng": 0},
                "category": "dinner",
                "types": ["bar"],
            }
        )

        assert venue.category == VenueCategory.DINNER
