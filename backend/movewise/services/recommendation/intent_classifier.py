"""Intent classifier — one tag per chat message.

Tags are checked in INTENT_PRECEDENCE order and the first whose keywords
appear wins. Keywords match at a word start, so "pack" matches "packing"
but "vs" does not match "canvas".
"""

import re
from enum import Enum


class IntentTag(str, Enum):
    QUOTE = "quote"
    COMPARISON = "comparison"
    RECOMMENDATION = "recommendation"
    INSIGHT = "insight"
    CHECKLIST = "checklist"
    PACKING = "packing"
    COST = "cost"
    TIMELINE = "timeline"
    INSURANCE = "insurance"
    STORAGE = "storage"
    INTERNATIONAL = "international"
    PETS = "pets"
    PLANTS = "plants"
    SPECIALTY_ITEMS = "specialty_items"
    WEATHER = "weather"
    UTILITIES = "utilities"
    LEGAL = "legal"
    GENERAL = "general"


INTENT_KEYWORDS: dict[IntentTag, tuple[str, ...]] = {
    IntentTag.QUOTE: ("quote", "price", "cost", "estimate", "how much", "moving cost"),
    IntentTag.COMPARISON: ("compare", "comparison", "best company", "which mover", "difference", "vs"),
    IntentTag.RECOMMENDATION: ("recommend", "suggest", "best option", "what should i choose"),
    IntentTag.INSIGHT: ("insight", "analysis", "advice", "opinion", "thoughts"),
    IntentTag.CHECKLIST: ("checklist", "todo", "tasks", "what to do", "preparation"),
    IntentTag.PACKING: ("pack", "packing", "boxes", "wrap", "protect"),
    IntentTag.COST: ("expensive", "cheap", "budget", "save money", "affordable"),
    IntentTag.TIMELINE: ("timeline", "schedule", "when", "how long", "time", "weeks", "planning"),
    IntentTag.INSURANCE: ("insurance", "damage", "protection", "coverage", "liability", "claim"),
    IntentTag.STORAGE: ("storage", "warehouse", "temporary", "store", "keep"),
    IntentTag.INTERNATIONAL: ("international", "overseas", "country", "customs", "abroad", "visa"),
    IntentTag.PETS: ("pet", "dog", "cat", "animal", "bird", "fish"),
    IntentTag.PLANTS: ("plant", "garden", "flower", "tree", "vegetation"),
    IntentTag.SPECIALTY_ITEMS: ("piano", "artwork", "antique", "valuable", "fragile", "heavy", "pool table"),
    IntentTag.WEATHER: ("weather", "rain", "snow", "winter", "summer", "storm"),
    IntentTag.UTILITIES: ("utilities", "electric", "gas", "internet", "cable", "water", "setup"),
    IntentTag.LEGAL: ("legal", "permit", "license", "regulation", "law", "requirement"),
}

INTENT_PRECEDENCE: tuple[IntentTag, ...] = tuple(INTENT_KEYWORDS)

_PATTERNS: dict[IntentTag, re.Pattern] = {
    tag: re.compile(r"\b(?:" + "|".join(re.escape(k) for k in keywords) + ")")
    for tag, keywords in INTENT_KEYWORDS.items()
}


def classify_intent(text: str) -> IntentTag:
    lowered = (text or "").lower()
    for tag in INTENT_PRECEDENCE:
        if _PATTERNS[tag].search(lowered):
            return tag
    return IntentTag.GENERAL
