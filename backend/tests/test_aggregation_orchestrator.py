"""Tests for concurrent quote aggregation and partial-failure handling."""

import asyncio
import copy
from dataclasses import replace
from datetime import timedelta

import pytest

from movewise.data.providers import PROVIDERS
from movewise.exceptions import ProviderUnavailable, ValidationError
from movewise.services.quoting.aggregation_orchestrator import AggregationOrchestrator
from movewise.services.quoting.config import quote_config_from_dict
from movewise.services.quoting.provider_gateway import ProviderGateway
from movewise.services.quoting.rate_limiter import RateLimiter


class FlakyGateway(ProviderGateway):
    """Fails, stalls or crashes for chosen providers."""

    def __init__(self, *args, failing=(), slow=(), crashing=(), **kwargs):
        super().__init__(*args, **kwargs)
        self.failing = set(failing)
        self.slow = set(slow)
        self.crashing = set(crashing)

    async def quote(self, provider_id, move_request):
        if provider_id in self.failing:
            raise ProviderUnavailable(provider_id, "upstream 503")
        if provider_id in self.crashing:
            raise RuntimeError("boom")
        if provider_id in self.slow:
            await asyncio.sleep(5)
        return await super().quote(provider_id, move_request)


def _orchestrator(config, today, timeout=1.0, **gateway_kwargs):
    limiter = RateLimiter(config.rate_limits())
    gateway = FlakyGateway(config, limiter, today=lambda: today, **gateway_kwargs)
    return AggregationOrchestrator(config, gateway, provider_timeout=timeout, today=lambda: today)


class TestAggregate:
    """All providers answering."""

    @pytest.mark.asyncio
    async def test_all_providers_sorted_by_price(self, orchestrator, move_request):
        result = await orchestrator.aggregate(move_request)

        prices = [q.total_price for q in result.quotes]
        assert prices == [5967, 6318, 7722, 8073, 8424]
        assert result.providers_queried == 5
        assert result.successful_responses == 5
        assert result.failures == []
        assert result.used_fallback is False

    @pytest.mark.asyncio
    async def test_to_dict(self, orchestrator, move_request):
        data = (await orchestrator.aggregate(move_request)).to_dict()
        assert data["quotes"][0]["company_name"] == "U-Haul"
        assert data["move_request"]["home_size"] == "2-bedroom"
        assert data["quotes"][0]["availability"] == "Excellent availability"


class TestPartialFailure:
    """Failed providers are dropped; the rest still answer."""

    @pytest.mark.asyncio
    async def test_one_provider_fails(self, quote_config, today, move_request):
        orch = _orchestrator(quote_config, today, failing={"allied"})
        result = await orch.aggregate(move_request)

        assert result.successful_responses == 4
        assert "allied" not in {q.provider_id for q in result.quotes}
        assert [f.provider_id for f in result.failures] == ["allied"]
        assert result.used_fallback is False

    @pytest.mark.asyncio
    async def test_slow_provider_hits_deadline(self, quote_config, today, move_request):
        orch = _orchestrator(quote_config, today, timeout=0.05, slow={"mayflower"})
        result = await orch.aggregate(move_request)

        assert result.successful_responses == 4
        failure = result.failures[0]
        assert failure.provider_id == "mayflower"
        assert "deadline" in failure.error.message

    @pytest.mark.asyncio
    async def test_unexpected_error_is_contained(self, quote_config, today, move_request):
        orch = _orchestrator(quote_config, today, crashing={"uhaul"})
        result = await orch.aggregate(move_request)

        assert result.successful_responses == 4
        assert isinstance(result.failures[0].error, ProviderUnavailable)


class TestFallback:
    """Every provider failing still yields quotes."""

    @pytest.mark.asyncio
    async def test_all_rate_limited(self, today, move_request):
        providers = copy.deepcopy(PROVIDERS)
        for p in providers:
            p["rate_limit"]["request_limit"] = 1
        config = quote_config_from_dict({"providers": providers})
        orch = _orchestrator(config, today)

        await orch.aggregate(move_request)
        result = await orch.aggregate(move_request)

        assert result.successful_responses == 0
        assert result.used_fallback is True
        assert len(result.quotes) == 3
        assert all(q.is_fallback for q in result.quotes)
        assert {f.failure_dict()["error_type"] for f in result.failures} == {"RateLimitExceeded"}

    def test_fallback_is_deterministic(self, move_request):
        first = AggregationOrchestrator.fallback_quotes(move_request)
        second = AggregationOrchestrator.fallback_quotes(move_request)

        assert [q.total_price for q in first] == [q.total_price for q in second]
        assert [q.total_price for q in first] == sorted(q.total_price for q in first)
        assert first[0].company_name == "Budget Moving Solutions"


class TestValidation:
    """Malformed requests fail before any provider is queried."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "field, value",
        [
            ("origin_zip", "1234"),
            ("origin_zip", "10001\n"),
            ("destination_zip", " 90210"),
            ("destination_zip", "9021A"),
            ("home_size", ""),
        ],
    )
    async def test_invalid_fields(self, orchestrator, rate_limiter, move_request, field, value):
        bad = replace(move_request, **{field: value})
        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.aggregate(bad)

        assert exc_info.value.field == field
        assert all(s["requests"] == 0 for s in rate_limiter.get_usage_stats().values())

    @pytest.mark.asyncio
    async def test_past_date(self, orchestrator, move_request, today):
        bad = replace(move_request, move_date=today - timedelta(days=1))
        with pytest.raises(ValidationError) as exc_info:
            await orchestrator.aggregate(bad)
        assert exc_info.value.field == "move_date"

    @pytest.mark.asyncio
    async def test_today_is_allowed(self, orchestrator, move_request, today):
        result = await orchestrator.aggregate(replace(move_request, move_date=today))
        assert result.successful_responses == 5
        assert all(q.availability_tier.value == "limited" for q in result.quotes)
