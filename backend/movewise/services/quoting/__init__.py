"""Quoting — concurrent quote aggregation across simulated providers.

Modules:
    config                    Provider registry, rate limits, pricing tables
    rate_limiter              Lock-protected per-provider request windows
    provider_gateway          Deterministic per-provider pricing simulation
    aggregation_orchestrator  Concurrent fan-out, partial-failure handling, fallback

Pipeline:
    AggregationOrchestrator → ProviderGateway × N (guarded by RateLimiter)
    → AggregateResult (price-ascending)
"""
