"""Recommendation engine configuration — single source for all thresholds."""

import json
import math
from dataclasses import dataclass, field
from pathlib import Path

from movewise.config import settings
from movewise.models.profile import MoveType


@dataclass(frozen=True)
class Weights:
    """Criterion weights for the total score. Must sum to 1.0."""
    price: float
    rating: float
    services: float
    speed: float

    def __post_init__(self):
        total = self.price + self.rating + self.services + self.speed
        if not math.isclose(total, 1.0, abs_tol=1e-6):
            raise ValueError(f"Weights must sum to 1.0, got {total:.6f}")

    def to_dict(self) -> dict:
        return {"price": self.price, "rating": self.rating, "services": self.services, "speed": self.speed}


DEFAULT_WEIGHT_PRESETS: dict[MoveType, Weights] = {
    MoveType.BUDGET: Weights(price=0.6, rating=0.2, services=0.1, speed=0.1),
    MoveType.PREMIUM: Weights(price=0.1, rating=0.4, services=0.3, speed=0.2),
    MoveType.BALANCED: Weights(price=0.3, rating=0.3, services=0.2, speed=0.2),
    MoveType.URGENT: Weights(price=0.1, rating=0.2, services=0.2, speed=0.5),
}


@dataclass(frozen=True)
class SelectionThresholds:
    """Which quotes qualify for the budget / premium slots."""
    budget_min_rating: float = 4.0
    premium_min_rating: float = 4.5
    alternatives_window: int = 3     # scored quotes after the top choice


@dataclass(frozen=True)
class ConfidenceParams:
    base: float = 0.7
    many_quotes: int = 5
    many_quotes_bonus: float = 0.2
    some_quotes: int = 3
    some_quotes_bonus: float = 0.1
    explicit_preference_bonus: float = 0.1
    preference_keywords: tuple[str, ...] = ("budget", "cheap", "premium", "urgent")


@dataclass(frozen=True)
class RiskThresholds:
    low_rating: float = 4.0
    unusually_low_factor: float = 1.2   # price × factor still below every other quote
    high_variance_ratio: float = 0.5    # (max - min) > ratio × average
    market_min_quotes: int = 3
    insurance_terms: tuple[str, ...] = ("insurance", "coverage", "protection", "liability", "valuation")


@dataclass(frozen=True)
class RecommendationConfig:
    """Top-level config aggregating all sub-configs."""
    weight_presets: dict[MoveType, Weights] = field(default_factory=lambda: dict(DEFAULT_WEIGHT_PRESETS))
    selection: SelectionThresholds = field(default_factory=SelectionThresholds)
    confidence: ConfidenceParams = field(default_factory=ConfidenceParams)
    risk: RiskThresholds = field(default_factory=RiskThresholds)

    def weights_for(self, move_type: MoveType) -> Weights:
        return self.weight_presets.get(move_type, self.weight_presets[MoveType.BALANCED])


def load_recommendation_config(path: str | Path | None = None) -> RecommendationConfig:
    """Read "weight_presets" from the shared engine JSON file, if one is set."""
    path = path if path is not None else settings.quote_config_path
    if not path:
        return RecommendationConfig()

    data = json.loads(Path(path).read_text(encoding="utf-8"))
    presets = dict(DEFAULT_WEIGHT_PRESETS)
    for name, w in data.get("weight_presets", {}).items():
        presets[MoveType(name)] = Weights(**w)
    return RecommendationConfig(weight_presets=presets)


# Singleton — import this everywhere
recommendation_config = load_recommendation_config()
