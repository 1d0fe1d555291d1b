"""Finalist selection tests."""

import pytest

from app.schemas.itinerary import CandidatePools
from app.schemas.preferences import Budget, Preferences
from app.services.finalist_service import per_person_category_budgets, select_finalists
from app.services.skeleton_service import build_skeleton

BUDGETS = {"activity": 20.0, "dinner": 35.0, "finish": 15.0}


class TestPerPersonCategoryBudgets:
    """per_person_category_budgets tests."""

    def test_from_skeleton(self):
        """Category budgets come from the skeleton slots, per person."""
        budget = Budget(amount=150)
        skeleton = build_skeleton(budget, "18:00", "23:00")

        result = per_person_category_budgets(skeleton, budget, 2)

        assert result == {"activity": 19.0, "dinner": 37.5, "finish": 19.0}

    def test_without_skeleton(self):
        """Without a skeleton the fixed shares of the total apply."""
        result = per_person_category_budgets(None, Budget(amount=150), 2)

        assert result == pytest.approx({"activity": 18.75, "dinner": 37.5, "finish": 11.25})


class TestSelectFinalists:
    """select_finalists tests."""

    def test_one_pick_per_category_with_backups(self, candidate_pools, preferences):
        """One pick per category; dinner keeps three backups, others two."""
        selection = select_finalists(candidate_pools, preferences, BUDGETS)

        assert set(selection.selected) == {"activity", "dinner", "finish"}
        assert len(selection.backups["dinner"]) == 3
        assert len(selection.backups["activity"]) == 2
        assert len(selection.backups["finish"]) == 2
        for name, venue in selection.selected.items():
            assert venue.place_id not in {backup.place_id for backup in selection.backups[name]}

    def test_activity_is_reranked_around_dinner(self, venue_factory):
        """Activity is re-ranked against the chosen dinner location."""
        pools = CandidatePools(
            activity=[
                venue_factory("a-west", lat=0.0, lng=0.0),
                venue_factory("a-west-2", lat=0.0, lng=0.001),
                venue_factory("a-near-dinner", lat=0.0, lng=0.03),
            ],
            dinner=[venue_factory("dinner", category="dinner", lat=0.0, lng=0.0301)],
        )

        selection = select_finalists(pools, Preferences(), BUDGETS)

        assert selection.selected["activity"].place_id == "a-near-dinner"
        assert [venue.place_id for venue in selection.backups["activity"]] == ["a-west-2", "a-west"]

    def test_selection_is_deterministic(self, candidate_pools, preferences):
        """Identical input yields identical selection."""
        first = select_finalists(candidate_pools, preferences, BUDGETS)
        second = select_finalists(candidate_pools, preferences, BUDGETS)

        assert first == second

    def test_empty_pool_has_no_pick(self, venue_factory):
        """An empty pool yields no pick and no backups."""
        pools = CandidatePools(dinner=[venue_factory("dinner", category="dinner")])

        selection = select_finalists(pools, Preferences(), BUDGETS)

        assert list(selection.selected) == ["dinner"]
        assert selection.backups["activity"] == []
        assert selection.backups["finish"] == []
        assert selection.backups["dinner"] == []

    def test_no_pools_no_selection(self):
        """No pools, nothing selected."""
        selection = select_finalists(CandidatePools(), Preferences(), BUDGETS)

        assert selection.selected == {}
        assert selection.venues() == []

    def test_ranked_pools_follow_score_order(self, venue_factory):
        """Pools handed to later stages are in rank order, not input order."""
        pools = CandidatePools(
            dinner=[
                venue_factory("d-bad", category="dinner", rating=3.0, review_count=5, price_level=4),
                venue_factory("d-top", category="dinner", rating=4.9, review_count=900),
                venue_factory("d-good", category="dinner", rating=4.7, review_count=600),
            ],
        )

        selection = select_finalists(pools, Preferences(), BUDGETS)

        assert [venue.place_id for venue in selection.ranked_pools.dinner] == ["d-top", "d-good", "d-bad"]
        assert selection.ranked_pools.activity == []
