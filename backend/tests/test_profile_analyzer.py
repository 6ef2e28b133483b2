"""Tests for keyword profile inference and move categorization."""

import pytest

from movewise.models.profile import (
    FRAGILE_ITEMS,
    PACKING_SERVICE,
    STORAGE,
    MoveCategory,
    MoveType,
    Timeline,
    UserProfile,
)
from movewise.services.recommendation.profile_analyzer import ProfileAnalyzer


@pytest.fixture
def analyzer():
    return ProfileAnalyzer()


class TestAnalyze:
    def test_cheap_move_next_week(self, analyzer):
        profile = analyzer.analyze("I need a cheap move next week")

        assert profile.move_type == MoveType.BUDGET
        assert profile.timeline == Timeline.URGENT
        assert profile.budget_tier == "low"
        assert profile.has_explicit_preference is True

    def test_no_signal_keeps_defaults(self, analyzer):
        assert analyzer.analyze("Hello there") == UserProfile()

    def test_case_insensitive(self, analyzer):
        assert analyzer.analyze("LUXURY please").move_type == MoveType.PREMIUM

    def test_budget_terms_take_precedence(self, analyzer):
        profile = analyzer.analyze("the best movers but cheap")
        assert profile.move_type == MoveType.BUDGET

    def test_multiple_attributes(self, analyzer):
        profile = analyzer.analyze(
            "First time moving a 3 bedroom house with the kids, a piano, and I want full service"
        )
        assert profile.family_size == "large"
        assert FRAGILE_ITEMS in profile.special_needs
        assert profile.experience == "first_time"
        assert profile.service_level == "full-service"
        assert profile.home_size_guess == "3-bedroom"

    def test_flexible_timeline(self, analyzer):
        assert analyzer.analyze("no rush, whenever works").timeline == Timeline.FLEXIBLE

    def test_experienced_mover(self, analyzer):
        assert analyzer.analyze("We have moved before").experience == "experienced"


class TestAccumulation:
    """Profiles grow across turns and are never reset by silence."""

    def test_prior_values_survive(self, analyzer):
        first = analyzer.analyze("I want something affordable")
        second = analyzer.analyze("we are a couple", prior=first)

        assert second.move_type == MoveType.BUDGET
        assert second.family_size == "medium"

    def test_special_needs_union(self, analyzer):
        first = analyzer.analyze("we need temporary storage")
        second = analyzer.analyze("and help with packing", prior=first)

        assert second.special_needs == {STORAGE, PACKING_SERVICE}

    def test_prior_is_not_mutated(self, analyzer):
        prior = analyzer.analyze("cheap")
        analyzer.analyze("antique fragile vase", prior=prior)
        assert prior.special_needs == set()

    def test_explicit_preference_is_sticky(self, analyzer):
        first = analyzer.analyze("budget move")
        second = analyzer.analyze("what about next month", prior=first)
        assert second.has_explicit_preference is True

    def test_round_trips_through_dict(self, analyzer):
        profile = analyzer.analyze("cheap, asap, with kids and a piano")
        assert UserProfile.from_dict(profile.to_dict()) == profile


class TestCategorizeMove:
    @pytest.mark.parametrize(
        "origin, destination, category",
        [
            ("10001", "10500", MoveCategory.LOCAL),
            ("10001", "11001", MoveCategory.LOCAL),
            ("10001", "15000", MoveCategory.LONG_DISTANCE),
            ("10001", "20001", MoveCategory.LONG_DISTANCE),
            ("10001", "90210", MoveCategory.INTERNATIONAL),
            (None, "90210", MoveCategory.LOCAL),
            ("abcde", "90210", MoveCategory.LOCAL),
        ],
    )
    def test_thresholds(self, analyzer, origin, destination, category):
        assert analyzer.categorize_move(origin, destination) == category
