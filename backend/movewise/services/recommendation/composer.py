"""Recommendation composer — top, budget and premium picks with reasoning."""

from movewise.models.profile import UserProfile
from movewise.models.recommendation import RecommendationResult, ScoredQuote
from movewise.services.recommendation.config import (
    RecommendationConfig,
    recommendation_config,
)


def compose(
    scored_quotes: list[ScoredQuote],
    profile: UserProfile | None = None,
    user_text: str = "",
    config: RecommendationConfig = recommendation_config,
) -> RecommendationResult:
    """Derive the recommendation set from quotes already sorted by score.

    budget_option is the cheapest quote rated at least 4.0; premium_option is
    the highest-rated quote, offered only at 4.5 or above. alternatives are
    the next quotes after the top choice, minus whichever became the budget
    or premium pick.
    """
    sel = config.selection
    result = RecommendationResult(confidence=calculate_confidence(scored_quotes, user_text, config))
    if not scored_quotes:
        return result

    top = scored_quotes[0]
    move_type = profile.move_type.value if profile else "balanced"
    result.top_choice = top
    result.reasoning.append(
        f"{top.company_name} is your top match with a score of {top.total_score:.2f}/1.0 "
        f"based on your {move_type} preferences."
    )

    qualified = [s for s in scored_quotes if s.rating >= sel.budget_min_rating]
    if qualified:
        budget = min(qualified, key=lambda s: s.price)
        result.budget_option = budget
        if budget is not top:
            result.reasoning.append(
                f"{budget.company_name} offers the best value at ${budget.price:,} "
                f"with a {budget.rating}/5 rating."
            )

    best_rated = max(scored_quotes, key=lambda s: s.rating)
    if best_rated.rating >= sel.premium_min_rating:
        result.premium_option = best_rated
        if best_rated is not top and best_rated is not result.budget_option:
            result.reasoning.append(
                f"{best_rated.company_name} provides premium service with a "
                f"{best_rated.rating}/5 rating and comprehensive services."
            )

    window = scored_quotes[1:1 + sel.alternatives_window]
    result.alternatives = [
        s for s in window
        if s is not result.budget_option and s is not result.premium_option
    ]
    return result


def calculate_confidence(
    scored_quotes: list[ScoredQuote],
    user_text: str = "",
    config: RecommendationConfig = recommendation_config,
) -> float:
    params = config.confidence
    confidence = params.base

    if len(scored_quotes) >= params.many_quotes:
        confidence += params.many_quotes_bonus
    elif len(scored_quotes) >= params.some_quotes:
        confidence += params.some_quotes_bonus

    text = (user_text or "").lower()
    if any(k in text for k in params.preference_keywords):
        confidence += params.explicit_preference_bonus

    return round(min(confidence, 1.0), 2)
