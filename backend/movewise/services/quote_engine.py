"""Quote engine — entry points used by the chat / HTTP layer.

    calculate_quotes          MoveRequest → AggregateResult (concurrent fan-out)
    generate_recommendations  user text + quotes (+ prior profile) → RecommendationReport

The conversation's UserProfile belongs to the caller: pass the previous turn's
profile in and store report.profile for the next turn.
"""

import asyncio
import logging
from datetime import datetime, timezone

from movewise.config import settings
from movewise.models.move import MoveRequest
from movewise.models.profile import MoveCategory, UserProfile
from movewise.models.quote import AggregateResult, Quote
from movewise.models.recommendation import (
    InsightSet,
    QuoteAnnotation,
    RecommendationReport,
    RecommendationResult,
    ScoredQuote,
    SubScores,
)
from movewise.services.quoting.aggregation_orchestrator import AggregationOrchestrator
from movewise.services.quoting.config import QuoteConfig, quote_config
from movewise.services.quoting.provider_gateway import ProviderGateway
from movewise.services.quoting.rate_limiter import RateLimiter
from movewise.services.recommendation.composer import compose
from movewise.services.recommendation.config import RecommendationConfig, recommendation_config
from movewise.services.recommendation.insight_generator import generate_insights
from movewise.services.recommendation.intent_classifier import IntentTag, classify_intent
from movewise.services.recommendation.profile_analyzer import profile_analyzer
from movewise.services.recommendation.scoring_engine import score_quotes

logger = logging.getLogger(__name__)


class QuoteEngine:
    """Wires the quoting and recommendation pipelines together."""

    def __init__(
        self,
        config: QuoteConfig = quote_config,
        rec_config: RecommendationConfig = recommendation_config,
        rate_limiter: RateLimiter | None = None,
        gateway: ProviderGateway | None = None,
        orchestrator: AggregationOrchestrator | None = None,
    ):
        self.config = config
        self.rec_config = rec_config
        self.rate_limiter = rate_limiter or RateLimiter(config.rate_limits())
        self.gateway = gateway or ProviderGateway(
            config,
            self.rate_limiter,
            min_latency_ms=settings.provider_min_latency_ms,
            max_latency_ms=settings.provider_max_latency_ms,
            failure_rate=settings.provider_failure_rate,
            price_jitter=settings.provider_price_jitter,
        )
        self.orchestrator = orchestrator or AggregationOrchestrator(
            config,
            self.gateway,
            provider_timeout=settings.provider_timeout_seconds,
        )
        self.analyzer = profile_analyzer

    async def calculate_quotes(self, move_request: MoveRequest | dict) -> AggregateResult:
        """Raises ValidationError for malformed input; never for provider failures."""
        if isinstance(move_request, dict):
            move_request = MoveRequest.from_dict(move_request)
        return await self.orchestrator.aggregate(move_request)

    def generate_recommendations(
        self,
        user_text: str,
        quotes: list[Quote],
        profile: UserProfile | None = None,
        origin_zip: str | None = None,
        destination_zip: str | None = None,
    ) -> RecommendationReport:
        """Score, rank and explain quotes for this conversation turn."""
        profile = self.analyzer.analyze(user_text, prior=profile)
        move_category = self.analyzer.categorize_move(origin_zip, destination_zip)

        try:
            scored = score_quotes(quotes, profile, self.rec_config)
            recommendation = compose(scored, profile, user_text, self.rec_config)
            insights = generate_insights(scored, profile, move_category, self.rec_config)
        except Exception as e:
            logger.error(f"Recommendation pipeline failed, using fallback: {e}", exc_info=True)
            return self._fallback_report(quotes, profile)

        return RecommendationReport(
            profile=profile,
            move_category=move_category,
            recommendation=recommendation,
            insights=insights,
            intent=classify_intent(user_text).value,
            generated_at=datetime.now(timezone.utc),
        )

    def usage_stats(self) -> dict[str, dict]:
        return self.rate_limiter.get_usage_stats()

    @staticmethod
    def _fallback_report(quotes: list[Quote], profile: UserProfile) -> RecommendationReport:
        top = None
        if quotes:
            neutral = SubScores(price=0.5, rating=0.5, services=0.5, speed=0.5, availability=0.5)
            top = ScoredQuote(
                quote=quotes[0],
                scores=neutral,
                total_score=0.5,
                annotation=QuoteAnnotation((), (), 50, "Standard residential moves"),
            )
        return RecommendationReport(
            profile=profile,
            move_category=MoveCategory.LOCAL,
            recommendation=RecommendationResult(
                top_choice=top,
                reasoning=["Basic recommendation based on available quotes"],
                confidence=0.5,
            ),
            insights=InsightSet(personalized_tips=["Compare quotes carefully", "Verify company credentials"]),
            intent=IntentTag.GENERAL.value,
            generated_at=datetime.now(timezone.utc),
            is_fallback=True,
        )


# Singleton
quote_engine = QuoteEngine()


def calculate_quotes(move_request: MoveRequest | dict) -> AggregateResult:
    """Blocking wrapper for callers without a running event loop."""
    return asyncio.run(quote_engine.calculate_quotes(move_request))
