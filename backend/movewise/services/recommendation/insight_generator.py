"""Insight generator — market, savings, risk and timeline narratives.

Pure templates over the scored quotes and the profile. Each list keeps the
order its rules fire in.
"""

from movewise.models.profile import (
    FRAGILE_ITEMS,
    PACKING_SERVICE,
    MoveCategory,
    Timeline,
    UserProfile,
)
from movewise.models.recommendation import InsightSet, ScoredQuote
from movewise.services.recommendation.config import (
    RecommendationConfig,
    recommendation_config,
)


def generate_insights(
    scored_quotes: list[ScoredQuote],
    profile: UserProfile,
    move_category: MoveCategory,
    config: RecommendationConfig = recommendation_config,
) -> InsightSet:
    insights = InsightSet()
    insights.market_analysis = _market_analysis(scored_quotes, config)
    insights.personalized_tips = _personalized_tips(profile)
    insights.cost_saving_opportunities = _cost_savings(profile)
    insights.risk_factors = _risk_factors(scored_quotes, move_category, config)
    insights.timeline = _timeline(profile)
    return insights


def _market_analysis(scored_quotes: list[ScoredQuote], config: RecommendationConfig) -> list[str]:
    risk = config.risk
    if len(scored_quotes) < risk.market_min_quotes:
        return []

    prices = [s.price for s in scored_quotes]
    avg_price = sum(prices) / len(prices)
    price_range = max(prices) - min(prices)

    lines = [f"Average market price for your move: ${round(avg_price):,}"]
    if price_range > avg_price * risk.high_variance_ratio:
        lines.append(
            f"High price variation detected (${round(price_range):,} range) - "
            f"careful comparison recommended"
        )
    return lines


def _personalized_tips(profile: UserProfile) -> list[str]:
    tips = []
    if profile.experience == "first_time":
        tips += [
            "As a first-time mover, consider full-service options to reduce stress",
            "Ask about insurance options - basic coverage may not be sufficient",
            "Get written estimates and read contracts carefully",
        ]
    if profile.family_size == "large":
        tips += [
            "With a large family, plan for 2-3 extra days for settling in",
            "Consider packing services to save time and reduce family stress",
        ]
    if FRAGILE_ITEMS in profile.special_needs:
        tips.append("For fragile or valuable items, ask for custom crating and full-value protection")
    return tips


def _cost_savings(profile: UserProfile) -> list[str]:
    lines = []
    if profile.timeline == Timeline.FLEXIBLE:
        lines += [
            "Your flexible timeline allows for off-peak discounts",
            "Consider mid-week moves for potential 10-15% savings",
        ]
    if PACKING_SERVICE in profile.special_needs:
        lines += [
            "Partial self-packing can save 20-30% on packing costs",
            "Pack non-fragile items yourself, let professionals handle delicates",
        ]
    return lines


def _risk_factors(
    scored_quotes: list[ScoredQuote],
    move_category: MoveCategory,
    config: RecommendationConfig,
) -> list[str]:
    risk = config.risk
    lines = []

    low_rated = [s for s in scored_quotes if s.rating < risk.low_rating]
    if low_rated:
        names = ", ".join(f"{s.company_name} ({s.rating}/5)" for s in low_rated)
        lines.append(
            f"{len(low_rated)} quote(s) from companies with ratings below {risk.low_rating} - "
            f"proceed with caution: {names}"
        )

    # A price is suspicious only when it undercuts every other quote by the factor
    for s in scored_quotes:
        others = [o.price for o in scored_quotes if o is not s]
        if others and s.price * risk.unusually_low_factor < min(others):
            lines.append(
                f"{s.company_name}'s price of ${s.price:,} is unusually low - "
                f"verify what is included"
            )

    uninsured = [
        s for s in scored_quotes
        if not any(term in svc.lower() for svc in s.quote.services_offered for term in risk.insurance_terms)
    ]
    if uninsured:
        names = ", ".join(s.company_name for s in uninsured)
        lines.append(f"No insurance listed in services for: {names} - confirm coverage before booking")

    if move_category == MoveCategory.LONG_DISTANCE:
        lines += [
            "Long-distance moves have higher risk - verify insurance coverage",
            "Confirm delivery windows and penalty clauses for delays",
        ]
    return lines


def _timeline(profile: UserProfile) -> list[str]:
    if profile.timeline == Timeline.URGENT:
        return [
            "Urgent moves may incur 20-50% premium charges",
            "Limited availability may reduce negotiation power",
        ]
    return [
        "Booking 6-8 weeks in advance typically offers best rates",
        "Peak season (May-September) has 15-25% higher costs",
    ]
