"""Profile analyzer — keyword classification of free text into a UserProfile.

Matching is case-insensitive substring search over fixed term sets. Several
attributes can fire from one message; attributes with no signal keep their
prior (or default) value.
"""

import copy
import re

from movewise.models.profile import (
    FRAGILE_ITEMS,
    PACKING_SERVICE,
    STORAGE,
    MoveCategory,
    MoveType,
    Timeline,
    UserProfile,
)
from movewise.services.distance import categorize_move

BUDGET_TERMS = ("cheap", "budget", "affordable")
PREMIUM_TERMS = ("premium", "luxury", "best", "high-end")
URGENT_TERMS = ("urgent", "asap", "quickly")

URGENT_TIMELINE_TERMS = ("next week", "urgent", "emergency", "asap", "quickly")
FLEXIBLE_TIMELINE_TERMS = ("flexible", "whenever", "no rush")

LARGE_FAMILY_TERMS = ("family", "kids", "children")
MEDIUM_FAMILY_TERMS = ("couple", "two people")

SPECIAL_NEED_TERMS: dict[str, tuple[str, ...]] = {
    FRAGILE_ITEMS: ("piano", "antique", "fragile"),
    STORAGE: ("storage", "temporary"),
    PACKING_SERVICE: ("pack", "packing"),
}

FIRST_TIME_TERMS = ("first time", "never moved")
EXPERIENCED_TERMS = ("moved before", "experienced")

FULL_SERVICE_TERMS = ("full service", "full-service", "pack everything")
DIY_TERMS = ("diy", "pack myself")

# First match wins
HOME_SIZE_PATTERNS: list[tuple[str, re.Pattern]] = [
    ("studio", re.compile(r"studio|efficiency")),
    ("1-bedroom", re.compile(r"\b1\s*-?\s*bed|one bed")),
    ("2-bedroom", re.compile(r"\b2\s*-?\s*bed|two bed")),
    ("3-bedroom", re.compile(r"\b3\s*-?\s*bed|three bed")),
    ("4-bedroom", re.compile(r"\b4\s*-?\s*bed|four bed")),
    ("5-bedroom", re.compile(r"\b5\s*-?\s*bed|five bed")),
    ("house", re.compile(r"house|home")),
    ("apartment", re.compile(r"apartment|\bapt\b")),
]

EXPLICIT_PREFERENCE_TERMS = ("budget", "cheap", "premium", "urgent")


def _has_any(text: str, terms: tuple[str, ...]) -> bool:
    return any(term in text for term in terms)


class ProfileAnalyzer:
    """Builds and updates user profiles from conversational text."""

    def extract_signals(self, text: str) -> dict:
        """Only the attributes this text says something about."""
        text = (text or "").lower()
        signals: dict = {}

        if _has_any(text, BUDGET_TERMS):
            signals["move_type"] = MoveType.BUDGET
            signals["budget_tier"] = "low"
        elif _has_any(text, PREMIUM_TERMS):
            signals["move_type"] = MoveType.PREMIUM
            signals["budget_tier"] = "high"
        elif _has_any(text, URGENT_TERMS):
            signals["move_type"] = MoveType.URGENT

        if _has_any(text, URGENT_TIMELINE_TERMS):
            signals["timeline"] = Timeline.URGENT
        elif _has_any(text, FLEXIBLE_TIMELINE_TERMS):
            signals["timeline"] = Timeline.FLEXIBLE

        if _has_any(text, LARGE_FAMILY_TERMS):
            signals["family_size"] = "large"
        elif _has_any(text, MEDIUM_FAMILY_TERMS):
            signals["family_size"] = "medium"

        needs = {need for need, terms in SPECIAL_NEED_TERMS.items() if _has_any(text, terms)}
        if needs:
            signals["special_needs"] = needs

        if _has_any(text, FIRST_TIME_TERMS):
            signals["experience"] = "first_time"
        elif _has_any(text, EXPERIENCED_TERMS):
            signals["experience"] = "experienced"

        if _has_any(text, FULL_SERVICE_TERMS):
            signals["service_level"] = "full-service"
        elif _has_any(text, DIY_TERMS):
            signals["service_level"] = "diy"

        for size, pattern in HOME_SIZE_PATTERNS:
            if pattern.search(text):
                signals["home_size_guess"] = size
                break

        if _has_any(text, EXPLICIT_PREFERENCE_TERMS):
            signals["has_explicit_preference"] = True

        return signals

    def analyze(self, text: str, prior: UserProfile | None = None) -> UserProfile:
        """Return a new profile: the prior one (or defaults) plus this text's signals.

        The prior profile is left untouched.
        """
        profile = copy.deepcopy(prior) if prior is not None else UserProfile()
        return profile.merge(self.extract_signals(text))

    @staticmethod
    def categorize_move(origin_zip: str | None, destination_zip: str | None) -> MoveCategory:
        """Move category comes from zip distance, never from text."""
        return categorize_move(origin_zip, destination_zip)


profile_analyzer = ProfileAnalyzer()
