"""User profile — accumulated inference of a user's move preferences."""

from dataclasses import dataclass, field
from enum import Enum


class MoveType(str, Enum):
    BUDGET = "budget"
    PREMIUM = "premium"
    BALANCED = "balanced"
    URGENT = "urgent"


class Timeline(str, Enum):
    URGENT = "urgent"
    FLEXIBLE = "flexible"
    NORMAL = "normal"


class MoveCategory(str, Enum):
    LOCAL = "local"
    LONG_DISTANCE = "long_distance"
    INTERNATIONAL = "international"


# Special-need tags produced by the analyzer
FRAGILE_ITEMS = "fragile_items"
STORAGE = "storage"
PACKING_SERVICE = "packing_service"


@dataclass
class UserProfile:
    move_type: MoveType = MoveType.BALANCED
    budget_tier: str = "medium"        # low | medium | high
    timeline: Timeline = Timeline.NORMAL
    family_size: str = "small"         # small | medium | large
    special_needs: set[str] = field(default_factory=set)
    experience: str = "first_time"     # first_time | experienced
    home_size_guess: str | None = None
    service_level: str | None = None   # full-service | diy
    has_explicit_preference: bool = False

    def merge(self, signals: dict) -> "UserProfile":
        """Apply newly observed signals in place. Nothing is ever removed."""
        for key, value in signals.items():
            if key == "special_needs":
                self.special_needs |= set(value)
            elif key == "has_explicit_preference":
                self.has_explicit_preference = self.has_explicit_preference or bool(value)
            elif value is not None:
                setattr(self, key, value)
        return self

    def to_dict(self) -> dict:
        return {
            "move_type": self.move_type.value,
            "budget_tier": self.budget_tier,
            "timeline": self.timeline.value,
            "family_size": self.family_size,
            "special_needs": sorted(self.special_needs),
            "experience": self.experience,
            "home_size_guess": self.home_size_guess,
            "service_level": self.service_level,
            "has_explicit_preference": self.has_explicit_preference,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        return cls(
            move_type=MoveType(data.get("move_type", MoveType.BALANCED.value)),
            budget_tier=data.get("budget_tier", "medium"),
            timeline=Timeline(data.get("timeline", Timeline.NORMAL.value)),
            family_size=data.get("family_size", "small"),
            special_needs=set(data.get("special_needs", [])),
            experience=data.get("experience", "first_time"),
            home_size_guess=data.get("home_size_guess"),
            service_level=data.get("service_level"),
            has_explicit_preference=bool(data.get("has_explicit_preference", False)),
        )
