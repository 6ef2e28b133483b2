"""Recommendation engine — profile-aware ranking of moving quotes.

Modules:
    config              Weight presets and thresholds
    profile_analyzer    Keyword classification of user text into a UserProfile
    intent_classifier   Single-tag intent classification for chat messages
    scoring_engine      Normalized multi-criterion scoring per quote
    composer            Top / budget / premium picks with reasoning and confidence
    insight_generator   Market, savings, risk, and timeline narratives

Pipeline:
    ProfileAnalyzer → ScoringEngine → RecommendationComposer + InsightGenerator
"""
