"""Aggregation orchestrator — fans a move request out to every provider."""

import asyncio
import hashlib
import logging
import random
import time
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone

from movewise.data.providers import FALLBACK_COMPANIES
from movewise.exceptions import ProviderError, ProviderUnavailable
from movewise.models.move import MoveRequest
from movewise.models.quote import (
    AggregateResult,
    AvailabilityTier,
    ProviderResult,
    Quote,
)
from movewise.services.quoting.config import QuoteConfig
from movewise.services.quoting.provider_gateway import ProviderGateway, round_half_up

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_TIMEOUT = 3.0


class AggregationOrchestrator:
    """Queries all configured providers concurrently and merges the quotes.

    A failed, rate-limited, or slow provider is dropped from the result; the
    others are unaffected. When nobody answers, a deterministic fallback set
    is returned so recommendation logic always has input.
    """

    def __init__(
        self,
        config: QuoteConfig,
        gateway: ProviderGateway,
        provider_timeout: float = DEFAULT_PROVIDER_TIMEOUT,
        today: Callable[[], date] = date.today,
    ):
        self._config = config
        self._gateway = gateway
        self._provider_timeout = provider_timeout
        self._today = today

    async def aggregate(self, move_request: MoveRequest) -> AggregateResult:
        """Validate, query every provider, and return quotes sorted by price.

        Raises ValidationError for a malformed request. Never raises for
        provider-level failures.
        """
        move_request.validate(today=self._today())

        start_time = time.monotonic()
        requested_at = datetime.now(timezone.utc)
        provider_ids = self._config.provider_ids

        coros = [self._fetch(pid, move_request) for pid in provider_ids]
        results = await asyncio.gather(*coros, return_exceptions=True)

        quotes: list[Quote] = []
        failures: list[ProviderResult] = []
        for pid, result in zip(provider_ids, results):
            if isinstance(result, BaseException):
                # _fetch converts known errors; anything here is a bug in a provider task
                logger.error(f"Provider task for {pid} crashed: {result!r}")
                failures.append(ProviderResult(pid, error=ProviderUnavailable(pid, str(result))))
            elif result.ok:
                quotes.append(result.quote)
            else:
                failures.append(result)

        # Sort once, after every task has settled
        quotes.sort(key=lambda q: q.total_price)
        successful = len(quotes)

        used_fallback = False
        if not quotes:
            logger.warning(
                f"All {len(provider_ids)} providers failed for "
                f"{move_request.origin_zip}->{move_request.destination_zip}; using fallback quotes"
            )
            quotes = self.fallback_quotes(move_request)
            used_fallback = True

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(
            f"Aggregated {successful}/{len(provider_ids)} provider quotes "
            f"for {move_request.origin_zip}->{move_request.destination_zip} in {elapsed_ms}ms"
        )

        return AggregateResult(
            quotes=quotes,
            requested_at=requested_at,
            move_request=move_request,
            providers_queried=len(provider_ids),
            successful_responses=successful,
            failures=failures,
            used_fallback=used_fallback,
            elapsed_ms=elapsed_ms,
        )

    async def _fetch(self, provider_id: str, move_request: MoveRequest) -> ProviderResult:
        """Run one provider call under its deadline and capture the outcome."""
        start = time.monotonic()
        try:
            quote = await asyncio.wait_for(
                self._gateway.quote(provider_id, move_request),
                timeout=self._provider_timeout,
            )
            return ProviderResult(provider_id, quote=quote, elapsed_ms=_elapsed_ms(start))
        except asyncio.TimeoutError:
            error = ProviderUnavailable(provider_id, f"deadline of {self._provider_timeout}s exceeded")
        except ProviderError as e:
            error = e

        logger.warning(f"Provider {provider_id} skipped ({type(error).__name__}): {error.message}")
        return ProviderResult(provider_id, error=error, elapsed_ms=_elapsed_ms(start))

    @staticmethod
    def fallback_quotes(move_request: MoveRequest) -> list[Quote]:
        """Synthetic quotes used when every provider failed.

        Seeded by home size so the same move always gets the same fallback set.
        """
        seed = int(hashlib.md5(move_request.home_size.encode()).hexdigest()[:8], 16)
        rng = random.Random(seed)
        base_price = 800 + rng.random() * 1200

        now = datetime.now(timezone.utc)
        quotes = []
        for name, factor, rating, services, duration, availability in FALLBACK_COMPANIES:
            quotes.append(Quote(
                provider_id=f"fallback-{name.split()[0].lower()}",
                company_name=name,
                total_price=round_half_up(base_price * factor),
                rating=rating,
                services_offered=tuple(services),
                estimated_duration=duration,
                availability_tier=AvailabilityTier(availability),
                retrieved_at=now,
                valid_until=now + timedelta(days=7),
                is_fallback=True,
            ))
        quotes.sort(key=lambda q: q.total_price)
        return quotes


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)
