from movewise.models.move import MoveRequest, normalize_home_size
from movewise.models.profile import MoveCategory, MoveType, Timeline, UserProfile
from movewise.models.quote import (
    AggregateResult,
    AvailabilityTier,
    InsuranceOption,
    ProviderContact,
    ProviderResult,
    Quote,
)
from movewise.models.recommendation import (
    InsightSet,
    QuoteAnnotation,
    RecommendationReport,
    RecommendationResult,
    ScoredQuote,
    SubScores,
)

__all__ = [
    "AggregateResult",
    "AvailabilityTier",
    "InsightSet",
    "InsuranceOption",
    "MoveCategory",
    "MoveRequest",
    "MoveType",
    "ProviderContact",
    "ProviderResult",
    "Quote",
    "QuoteAnnotation",
    "RecommendationReport",
    "RecommendationResult",
    "ScoredQuote",
    "SubScores",
    "Timeline",
    "UserProfile",
    "normalize_home_size",
]
