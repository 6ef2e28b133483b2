"""Provider gateway — simulates one moving company's pricing response.

Pricing (all providers share steps 1-4, step 5 is provider-specific):
  1. Base price by home size (unlisted sizes use the default).
  2. Distance: +1.2/mile over 100 miles, else +0.8/mile.
  3. Requested services: percent surcharges are taken on the subtotal after
     step 2, flat surcharges are added as-is. Services are a set, so the
     result does not depend on the order they were requested in.
  4. Special items: fixed fee each (unlisted items use the default fee).
  5. Round the subtotal, multiply by the provider multiplier, round again.

Rounding is half-up to match the published price tables.
"""

import asyncio
import logging
import math
import random
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone
from decimal import ROUND_HALF_UP, Decimal

from movewise.exceptions import ProviderUnavailable
from movewise.models.move import MoveRequest
from movewise.models.quote import AvailabilityTier, InsuranceOption, ProviderContact, Quote
from movewise.services.distance import estimate_distance_miles
from movewise.services.quoting.config import QuoteConfig
from movewise.services.quoting.rate_limiter import RateLimiter

logger = logging.getLogger(__name__)

LONG_DISTANCE_THRESHOLD_MILES = 100
TRAVEL_DAY_MILES = 500
QUOTE_VALIDITY = timedelta(days=7)


def round_half_up(value: Decimal | float | int) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def availability_for(move_date: date, today: date) -> AvailabilityTier:
    days_out = (move_date - today).days
    if days_out < 7:
        return AvailabilityTier.LIMITED
    if days_out < 30:
        return AvailabilityTier.GOOD
    return AvailabilityTier.EXCELLENT


class ProviderGateway:
    """Simulated adapter for every provider in the registry."""

    def __init__(
        self,
        config: QuoteConfig,
        rate_limiter: RateLimiter,
        *,
        min_latency_ms: int = 0,
        max_latency_ms: int = 0,
        failure_rate: float = 0.0,
        price_jitter: float = 0.0,
        rng: random.Random | None = None,
        today: Callable[[], date] = date.today,
    ):
        self._config = config
        self._rate_limiter = rate_limiter
        self._min_latency_ms = min_latency_ms
        self._max_latency_ms = max(max_latency_ms, min_latency_ms)
        self._failure_rate = failure_rate
        self._price_jitter = price_jitter
        self._rng = rng or random.Random()
        self._today = today

    async def quote(self, provider_id: str, move_request: MoveRequest) -> Quote:
        """Get one provider's quote.

        Raises RateLimitExceeded before any simulated work if the provider's
        window is full, ProviderUnavailable if the simulated call fails.
        """
        try:
            provider = self._config.provider(provider_id)
        except KeyError:
            raise ProviderUnavailable(provider_id, "provider is not registered")

        self._rate_limiter.consume(provider_id)

        await self._simulate_latency()
        if self._failure_rate and self._rng.random() < self._failure_rate:
            raise ProviderUnavailable(provider_id, "simulated upstream error")

        subtotal = self.base_subtotal(move_request)
        factor = Decimal(str(provider.multiplier))
        if self._price_jitter:
            jitter = self._rng.uniform(-self._price_jitter, self._price_jitter)
            factor *= Decimal(str(1 + jitter))
        total = round_half_up(Decimal(subtotal) * factor)

        retrieved_at = datetime.now(timezone.utc)
        distance = estimate_distance_miles(move_request.origin_zip, move_request.destination_zip)

        return Quote(
            provider_id=provider.id,
            company_name=provider.display_name,
            total_price=total,
            base_price=round_half_up(total * Decimal("0.7")),
            additional_fees=round_half_up(total * Decimal("0.3")),
            currency="USD",
            valid_until=retrieved_at + QUOTE_VALIDITY,
            rating=provider.rating,
            review_count=provider.review_count,
            services_offered=provider.services,
            estimated_duration=self.estimate_duration(distance, move_request.home_size),
            availability_tier=availability_for(move_request.move_date, self._today()),
            insurance_options=self._insurance_options(total),
            special_offers=provider.special_offers,
            contact=ProviderContact(phone=provider.phone, website=provider.website),
            retrieved_at=retrieved_at,
        )

    def base_subtotal(self, move_request: MoveRequest) -> int:
        """Steps 1-4: the price before any provider multiplier."""
        tables = self._config.pricing
        price = Decimal(tables.home_size_prices.get(move_request.home_size, tables.default_home_size_price))

        distance = Decimal(str(estimate_distance_miles(move_request.origin_zip, move_request.destination_zip)))
        if distance > LONG_DISTANCE_THRESHOLD_MILES:
            price += distance * Decimal("1.2")
        else:
            price += distance * Decimal("0.8")

        pre_service = price
        for service in sorted(move_request.requested_services):
            if service in tables.percent_surcharges:
                price += pre_service * Decimal(str(tables.percent_surcharges[service]))
            elif service in tables.flat_surcharges:
                price += Decimal(tables.flat_surcharges[service])

        for item in move_request.special_items:
            price += Decimal(tables.special_item_fees.get(item, tables.default_special_item_fee))

        return round_half_up(price)

    def estimate_duration(self, distance: float, home_size: str) -> str:
        tables = self._config.pricing
        days = tables.home_size_days.get(home_size, tables.default_home_size_days)
        if distance > TRAVEL_DAY_MILES:
            days += math.ceil(distance / TRAVEL_DAY_MILES)
        return f"{days}-{days + 1} days"

    @staticmethod
    def _insurance_options(total: int) -> tuple[InsuranceOption, ...]:
        return (
            InsuranceOption(
                tier="basic",
                coverage="60 cents per pound",
                cost=0,
                description="Basic liability coverage",
            ),
            InsuranceOption(
                tier="full",
                coverage="Full replacement value",
                cost=round_half_up(total * Decimal("0.05")),
                description="Complete protection for your belongings",
            ),
        )

    async def _simulate_latency(self) -> None:
        if self._max_latency_ms <= 0:
            return
        delay_ms = self._rng.uniform(self._min_latency_ms, self._max_latency_ms)
        await asyncio.sleep(delay_ms / 1000)
