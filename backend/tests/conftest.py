"""Shared fixtures for the MoveWise test suite."""

import os

# Settings are read at import time; keep Redis, the scheduler and simulated latency out of tests
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("SCHEDULER_ENABLED", "false")
os.environ.setdefault("PROVIDER_MIN_LATENCY_MS", "0")
os.environ.setdefault("PROVIDER_MAX_LATENCY_MS", "0")
os.environ.setdefault("PROVIDER_FAILURE_RATE", "0")
os.environ.setdefault("QUOTE_CONFIG_PATH", "")

from datetime import date, datetime, timedelta, timezone

import pytest

from movewise.models.move import MoveRequest
from movewise.models.quote import AvailabilityTier, Quote
from movewise.services.quote_engine import QuoteEngine
from movewise.services.quoting.aggregation_orchestrator import AggregationOrchestrator
from movewise.services.quoting.config import QuoteConfig
from movewise.services.quoting.provider_gateway import ProviderGateway
from movewise.services.quoting.rate_limiter import RateLimiter

TODAY = date(2030, 6, 1)


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_quote(
    company: str,
    price: int,
    rating: float = 4.5,
    services: tuple[str, ...] = ("Full-service moving", "Packing", "Storage"),
    duration: str = "2-3 days",
    availability: AvailabilityTier = AvailabilityTier.GOOD,
) -> Quote:
    return Quote(
        provider_id=company.lower().replace(" ", "_"),
        company_name=company,
        total_price=price,
        rating=rating,
        services_offered=services,
        estimated_duration=duration,
        availability_tier=availability,
        retrieved_at=datetime(2030, 6, 1, tzinfo=timezone.utc),
    )


@pytest.fixture
def quote_factory():
    return make_quote


@pytest.fixture
def today() -> date:
    return TODAY


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def move_request() -> MoveRequest:
    """Cross-country 2-bedroom move with packing, 30 days out."""
    return MoveRequest(
        origin_zip="10001",
        destination_zip="90210",
        move_date=TODAY + timedelta(days=30),
        home_size="2-bedroom",
        requested_services=frozenset({"packing"}),
    )


@pytest.fixture
def quote_config() -> QuoteConfig:
    return QuoteConfig()


@pytest.fixture
def rate_limiter(quote_config) -> RateLimiter:
    return RateLimiter(quote_config.rate_limits())


@pytest.fixture
def gateway(quote_config, rate_limiter) -> ProviderGateway:
    return ProviderGateway(quote_config, rate_limiter, today=lambda: TODAY)


@pytest.fixture
def orchestrator(quote_config, gateway) -> AggregationOrchestrator:
    return AggregationOrchestrator(quote_config, gateway, provider_timeout=1.0, today=lambda: TODAY)


@pytest.fixture
def engine(quote_config, rate_limiter, gateway, orchestrator) -> QuoteEngine:
    return QuoteEngine(
        config=quote_config,
        rate_limiter=rate_limiter,
        gateway=gateway,
        orchestrator=orchestrator,
    )
