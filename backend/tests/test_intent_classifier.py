import pytest

from movewise.services.recommendation.intent_classifier import (
    INTENT_PRECEDENCE,
    IntentTag,
    classify_intent,
)

# One message per tag, each matching only its own keywords
EXAMPLES: dict[IntentTag, str] = {
    IntentTag.QUOTE: "Can I get a quote?",
    IntentTag.COMPARISON: "Compare Allied and Mayflower",
    IntentTag.RECOMMENDATION: "Which one would you recommend",
    IntentTag.INSIGHT: "Any advice for me?",
    IntentTag.CHECKLIST: "Give me a checklist",
    IntentTag.PACKING: "How should I wrap dishes",
    IntentTag.COST: "Is there an affordable option",
    IntentTag.TIMELINE: "When should we start?",
    IntentTag.INSURANCE: "What if something gets damaged",
    IntentTag.STORAGE: "We need a warehouse",
    IntentTag.INTERNATIONAL: "Moving overseas",
    IntentTag.PETS: "Moving with my cat",
    IntentTag.PLANTS: "Can my garden come along",
    IntentTag.SPECIALTY_ITEMS: "We own an antique dresser",
    IntentTag.WEATHER: "What about snow",
    IntentTag.UTILITIES: "Transfer my internet",
    IntentTag.LEGAL: "Is a permit needed",
    IntentTag.GENERAL: "Hello there",
}


def test_every_tag_has_an_example():
    assert set(EXAMPLES) == set(IntentTag)


@pytest.mark.parametrize("intent", list(IntentTag))
def test_classify_each_tag(intent):
    assert classify_intent(EXAMPLES[intent]) == intent


def test_precedence_covers_every_tag_but_general():
    assert INTENT_PRECEDENCE == tuple(t for t in IntentTag if t != IntentTag.GENERAL)


@pytest.mark.parametrize(
    "message, intent",
    [
        # Keywords of two neighbouring tags; the earlier one wins
        ("Compare the prices", IntentTag.QUOTE),
        ("Is it a cheap quote?", IntentTag.QUOTE),
        ("Compare and recommend", IntentTag.COMPARISON),
        ("Recommend something, any advice?", IntentTag.RECOMMENDATION),
        ("Advice on a checklist", IntentTag.INSIGHT),
        ("Checklist for packing", IntentTag.CHECKLIST),
        ("Cheap boxes", IntentTag.PACKING),
        ("Protection for my TV", IntentTag.PACKING),
        ("Affordable schedule", IntentTag.COST),
        ("How long does a claim take", IntentTag.TIMELINE),
        ("Coverage while in storage", IntentTag.INSURANCE),
        ("Store things abroad", IntentTag.STORAGE),
        ("Bring my dog abroad", IntentTag.INTERNATIONAL),
        ("My dog digs in the garden", IntentTag.PETS),
        ("A fragile plant", IntentTag.PLANTS),
        ("Moving a piano in the rain", IntentTag.SPECIALTY_ITEMS),
        ("Snow might cut the electric", IntentTag.WEATHER),
        ("Internet setup regulation", IntentTag.UTILITIES),
    ],
)
def test_overlapping_keywords(message, intent):
    assert classify_intent(message) == intent


@pytest.mark.parametrize(
    "message, intent",
    [
        ("How much will my move cost?", IntentTag.QUOTE),
        ("What should I do with my dog", IntentTag.PETS),
        ("Do I need a permit to park the truck?", IntentTag.LEGAL),
        ("", IntentTag.GENERAL),
    ],
)
def test_classify_intent(message, intent):
    assert classify_intent(message) == intent


def test_keywords_match_at_word_start():
    assert classify_intent("I have a canvas painting") == IntentTag.GENERAL
    assert classify_intent("Packing tips please") == IntentTag.PACKING
