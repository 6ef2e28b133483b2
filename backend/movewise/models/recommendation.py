"""Recommendation types — scored quotes, composed picks, and insights."""

from dataclasses import dataclass, field
from datetime import datetime

from movewise.models.profile import MoveCategory, UserProfile
from movewise.models.quote import Quote


@dataclass(frozen=True)
class SubScores:
    """Per-criterion scores, each 0-1."""

    price: float
    rating: float
    services: float
    speed: float
    availability: float    # informational, not weighted into the total

    def to_dict(self) -> dict:
        return {
            "price": round(self.price, 2),
            "rating": round(self.rating, 2),
            "services": round(self.services, 2),
            "speed": round(self.speed, 2),
            "availability": round(self.availability, 2),
        }


@dataclass(frozen=True)
class QuoteAnnotation:
    strengths: tuple[str, ...]
    considerations: tuple[str, ...]
    match_score: int       # percent
    best_for: str

    def to_dict(self) -> dict:
        return {
            "strengths": list(self.strengths),
            "considerations": list(self.considerations),
            "match_score": self.match_score,
            "best_for": self.best_for,
        }


@dataclass(frozen=True)
class ScoredQuote:
    quote: Quote
    scores: SubScores
    total_score: float
    annotation: QuoteAnnotation

    # Shortcuts used throughout the composer and insight generator
    @property
    def company_name(self) -> str:
        return self.quote.company_name

    @property
    def price(self) -> int:
        return self.quote.total_price

    @property
    def rating(self) -> float:
        return self.quote.rating

    def to_dict(self) -> dict:
        d = self.quote.to_dict()
        d["scores"] = self.scores.to_dict()
        d["total_score"] = self.total_score
        d["recommendation"] = self.annotation.to_dict()
        return d


@dataclass
class RecommendationResult:
    top_choice: ScoredQuote | None = None
    budget_option: ScoredQuote | None = None
    premium_option: ScoredQuote | None = None
    alternatives: list[ScoredQuote] = field(default_factory=list)
    reasoning: list[str] = field(default_factory=list)
    confidence: float = 0.0

    def to_dict(self) -> dict:
        return {
            "top_choice": self.top_choice.to_dict() if self.top_choice else None,
            "budget_option": self.budget_option.to_dict() if self.budget_option else None,
            "premium_option": self.premium_option.to_dict() if self.premium_option else None,
            "alternatives": [a.to_dict() for a in self.alternatives],
            "reasoning": list(self.reasoning),
            "confidence": self.confidence,
        }


@dataclass
class InsightSet:
    market_analysis: list[str] = field(default_factory=list)
    personalized_tips: list[str] = field(default_factory=list)
    cost_saving_opportunities: list[str] = field(default_factory=list)
    risk_factors: list[str] = field(default_factory=list)
    timeline: list[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "market_analysis": list(self.market_analysis),
            "personalized_tips": list(self.personalized_tips),
            "cost_saving_opportunities": list(self.cost_saving_opportunities),
            "risk_factors": list(self.risk_factors),
            "timeline": list(self.timeline),
        }


@dataclass
class RecommendationReport:
    """Composite returned to the chat layer for one user turn."""

    profile: UserProfile
    move_category: MoveCategory
    recommendation: RecommendationResult
    insights: InsightSet
    intent: str
    generated_at: datetime
    is_fallback: bool = False

    @property
    def confidence(self) -> float:
        return self.recommendation.confidence

    def to_dict(self) -> dict:
        return {
            "profile": self.profile.to_dict(),
            "move_category": self.move_category.value,
            "recommendations": self.recommendation.to_dict(),
            "insights": self.insights.to_dict(),
            "intent": self.intent,
            "confidence": self.confidence,
            "generated_at": self.generated_at.isoformat(),
            "is_fallback": self.is_fallback,
        }
