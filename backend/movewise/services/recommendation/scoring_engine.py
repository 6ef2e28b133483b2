"""Scoring engine — ranks moving quotes with profile-selected weights."""

import re
from decimal import ROUND_HALF_UP, Decimal

from movewise.models.profile import Timeline, UserProfile
from movewise.models.quote import Quote
from movewise.models.recommendation import QuoteAnnotation, ScoredQuote, SubScores
from movewise.services.recommendation.config import (
    RecommendationConfig,
    Weights,
    recommendation_config,
)

DEFAULT_DURATION_DAYS = 5
_FIRST_INT = re.compile(r"(\d+)")


def score_quotes(
    quotes: list[Quote],
    profile: UserProfile,
    config: RecommendationConfig = recommendation_config,
) -> list[ScoredQuote]:
    """
    Score and rank quotes for a profile.

    Each quote gets five 0-1 sub-scores; price, rating, services and speed
    are combined with the profile's weight preset into a total rounded to
    2 decimals. Availability is reported but not weighted.
    Returns quotes sorted by total descending; ties keep input order.
    """
    if not quotes:
        return []

    weights = config.weights_for(profile.move_type)

    prices = [q.total_price for q in quotes]
    min_price = min(prices)
    max_price = max(prices)

    scored = []
    for quote in quotes:
        scores = SubScores(
            price=_price_score(quote.total_price, min_price, max_price),
            rating=quote.rating / 5,
            services=_services_score(quote.services_offered, profile.special_needs),
            speed=_speed_score(quote.estimated_duration, profile.timeline),
            availability=_availability_score(quote.availability_tier.label, profile.timeline),
        )
        total = _weighted_total(scores, weights)
        scored.append(ScoredQuote(
            quote=quote,
            scores=scores,
            total_score=total,
            annotation=annotate(scores, total),
        ))

    scored.sort(key=lambda s: s.total_score, reverse=True)
    return scored


def _weighted_total(scores: SubScores, weights: Weights) -> float:
    composite = (
        weights.price * scores.price
        + weights.rating * scores.rating
        + weights.services * scores.services
        + weights.speed * scores.speed
    )
    return float(Decimal(str(composite)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _price_score(price: int, min_price: int, max_price: int) -> float:
    # Cheapest = 1.0, most expensive = 0.0
    if max_price == min_price:
        return 1.0
    return 1.0 - (price - min_price) / (max_price - min_price)


def _services_score(services: tuple[str, ...], special_needs: set[str]) -> float:
    if not services:
        return 0.5

    score = 0.5
    lowered = [s.lower() for s in services]
    for need in sorted(special_needs):
        phrase = need.replace("_", " ", 1)
        if any(phrase in s for s in lowered):
            score += 0.2

    if len(services) >= 3:
        score += 0.1

    return min(score, 1.0)


def _speed_score(duration: str, timeline: Timeline) -> float:
    if not duration:
        return 0.5

    days = extract_days(duration)
    if timeline == Timeline.URGENT:
        return 1.0 if days <= 2 else 0.7 if days <= 5 else 0.3
    return 0.9 if days <= 3 else 0.7 if days <= 7 else 0.5


def _availability_score(availability: str, timeline: Timeline) -> float:
    if not availability:
        return 0.5

    avail = availability.lower()
    if timeline == Timeline.URGENT:
        if "excellent" in avail or "immediate" in avail:
            return 1.0
        if "good" in avail:
            return 0.7
        return 0.3

    if "excellent" in avail:
        return 1.0
    if "good" in avail:
        return 0.8
    if "limited" in avail:
        return 0.6
    return 0.5


def extract_days(duration: str) -> int:
    """First integer in a duration string ("2-3 days" → 2), default 5."""
    match = _FIRST_INT.search(duration or "")
    return int(match.group(1)) if match else DEFAULT_DURATION_DAYS


def annotate(scores: SubScores, total: float) -> QuoteAnnotation:
    strengths = []
    considerations = []

    if scores.price >= 0.8:
        strengths.append("Excellent value")
    if scores.rating >= 0.9:
        strengths.append("Outstanding reputation")
    if scores.services >= 0.8:
        strengths.append("Comprehensive services")
    if scores.speed >= 0.8:
        strengths.append("Fast service")

    if scores.price < 0.4:
        considerations.append("Higher cost")
    if scores.rating < 0.6:
        considerations.append("Lower customer ratings")
    if scores.services < 0.5:
        considerations.append("Limited services")

    return QuoteAnnotation(
        strengths=tuple(strengths),
        considerations=tuple(considerations),
        match_score=int(Decimal(str(total * 100)).quantize(Decimal("1"), rounding=ROUND_HALF_UP)),
        best_for=_best_for(scores),
    )


def _best_for(scores: SubScores) -> str:
    if scores.price >= 0.8 and scores.rating >= 0.7:
        return "Budget-conscious movers seeking quality"
    if scores.rating >= 0.9:
        return "Those prioritizing premium service"
    if scores.speed >= 0.8:
        return "Urgent or time-sensitive moves"
    if scores.services >= 0.8:
        return "Complex moves requiring full service"
    return "Standard residential moves"
