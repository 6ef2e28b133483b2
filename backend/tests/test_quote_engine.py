"""Tests for the engine entry points and session profile storage."""

from datetime import date, timedelta
from types import SimpleNamespace

import pytest

from movewise.models.profile import MoveCategory, MoveType, Timeline
from movewise.services import quote_engine as quote_engine_module
from movewise.services import session_store as session_store_module
from movewise.services.cache_service import CacheService
from movewise.services.session_store import SessionProfileStore


class TestCalculateQuotes:
    @pytest.mark.asyncio
    async def test_accepts_camel_case_dict(self, engine, today):
        result = await engine.calculate_quotes({
            "originZip": "10001",
            "destinationZip": "90210",
            "moveDate": (today + timedelta(days=30)).isoformat(),
            "homeSize": "2br",
            "services": ["packing"],
        })
        assert [q.total_price for q in result.quotes][0] == 5967
        assert result.move_request.home_size == "2-bedroom"

    @pytest.mark.asyncio
    async def test_usage_stats_track_calls(self, engine, move_request):
        await engine.calculate_quotes(move_request)
        stats = engine.usage_stats()

        assert set(stats) == {"uhaul", "budget", "allied", "mayflower", "north_american"}
        assert all(s["requests"] == 1 for s in stats.values())

    def test_blocking_wrapper(self):
        result = quote_engine_module.calculate_quotes({
            "origin_zip": "30301",
            "destination_zip": "30350",
            "move_date": (date.today() + timedelta(days=10)).isoformat(),
            "home_size": "studio",
        })
        assert result.successful_responses == 5


class TestGenerateRecommendations:
    @pytest.mark.asyncio
    async def test_cheap_urgent_move(self, engine, move_request):
        quotes = (await engine.calculate_quotes(move_request)).quotes
        report = engine.generate_recommendations(
            "I need a cheap move next week",
            quotes,
            origin_zip="10001",
            destination_zip="90210",
        )

        assert report.profile.move_type == MoveType.BUDGET
        assert report.profile.timeline == Timeline.URGENT
        assert report.move_category == MoveCategory.INTERNATIONAL
        assert report.recommendation.top_choice.company_name == "U-Haul"
        assert report.confidence == 1.0
        assert report.is_fallback is False
        assert report.insights.timeline[0].startswith("Urgent moves")

    def test_profile_carries_across_turns(self, engine, quote_factory):
        quotes = [quote_factory("A", 1000), quote_factory("B", 1500)]
        first = engine.generate_recommendations("looking for premium movers", quotes)
        second = engine.generate_recommendations("we have a piano", quotes, profile=first.profile)

        assert second.profile.move_type == MoveType.PREMIUM
        assert "fragile_items" in second.profile.special_needs

    def test_no_quotes(self, engine):
        report = engine.generate_recommendations("hello", [])
        assert report.recommendation.top_choice is None
        assert report.is_fallback is False

    def test_pipeline_error_returns_fallback(self, engine, quote_factory, monkeypatch):
        def broken(*args, **kwargs):
            raise RuntimeError("scoring exploded")

        monkeypatch.setattr(quote_engine_module, "score_quotes", broken)
        report = engine.generate_recommendations("cheap", [quote_factory("A", 1000)])

        assert report.is_fallback is True
        assert report.confidence == 0.5
        assert report.recommendation.top_choice.company_name == "A"
        assert report.profile.move_type == MoveType.BUDGET

    def test_report_to_dict(self, engine, quote_factory):
        report = engine.generate_recommendations("how much?", [quote_factory("A", 1000)])
        data = report.to_dict()

        assert data["intent"] == "quote"
        assert data["recommendations"]["top_choice"]["company_name"] == "A"
        assert set(data["recommendations"]["top_choice"]["scores"]) == {
            "price", "rating", "services", "speed", "availability",
        }


class TestSessionStore:
    """Profiles persist per session without Redis."""

    @pytest.fixture
    def store(self):
        return SessionProfileStore(cache=CacheService(enabled=False))

    @pytest.mark.asyncio
    async def test_save_and_load(self, store, engine):
        profile = engine.generate_recommendations("cheap with kids", []).profile
        await store.save("s1", profile)
        assert await store.load("s1") == profile

    @pytest.mark.asyncio
    async def test_unknown_session(self, store):
        assert await store.load("missing") is None
        assert await store.discard("missing") is False

    @pytest.mark.asyncio
    async def test_discard(self, store, engine):
        await store.save("s1", engine.generate_recommendations("premium", []).profile)
        assert await store.discard("s1") is True
        assert await store.load("s1") is None

    @pytest.mark.asyncio
    async def test_expired(self, engine):
        store = SessionProfileStore(cache=CacheService(enabled=False), ttl_seconds=-1)
        await store.save("s1", engine.generate_recommendations("premium", []).profile)
        assert await store.load("s1") is None

    @pytest.mark.asyncio
    async def test_expired_sessions_are_swept_on_save(self, engine):
        store = SessionProfileStore(cache=CacheService(enabled=False), ttl_seconds=-1)
        profile = engine.generate_recommendations("premium", []).profile
        for i in range(1000):
            await store.save(f"s{i}", profile)
        assert store._local == {}

    @pytest.mark.asyncio
    async def test_sweep_keeps_live_sessions(self, engine, fake_clock, monkeypatch):
        monkeypatch.setattr(session_store_module, "time", SimpleNamespace(monotonic=fake_clock))
        store = SessionProfileStore(cache=CacheService(enabled=False), ttl_seconds=10)
        profile = engine.generate_recommendations("premium", []).profile

        await store.save("old", profile)
        fake_clock.advance(20)
        await store.save("new", profile)

        assert set(store._local) == {"new"}
        assert await store.load("new") == profile
