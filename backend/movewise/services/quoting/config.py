"""Quoting configuration — provider registry, rate limits, and pricing tables.

Everything here is data. Defaults come from movewise.data.providers; a JSON
file (settings.quote_config_path) may replace any top-level section:

    {
        "providers": [{"id": ..., "display_name": ..., "multiplier": ..., ...}],
        "home_size_prices": {"studio": 800, ...},
        "default_home_size_price": 1500,
        "home_size_days": {...},
        "percent_surcharges": {"packing": 0.3, ...},
        "flat_surcharges": {"storage": 200, ...},
        "special_item_fees": {"piano": 400, ...},
        "default_special_item_fee": 100
    }
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path

from movewise.config import settings
from movewise.data import providers as defaults

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitConfig:
    request_limit: int
    window_duration_ms: int = defaults.DEFAULT_WINDOW_DURATION_MS

    @property
    def window_seconds(self) -> float:
        return self.window_duration_ms / 1000.0


@dataclass(frozen=True)
class ProviderConfig:
    """One registry entry. Adding a provider is a data change."""
    id: str
    display_name: str
    multiplier: float
    rating: float
    review_count: int
    services: tuple[str, ...]
    special_offers: tuple[str, ...]
    phone: str
    website: str
    rate_limit: RateLimitConfig

    @classmethod
    def from_dict(cls, data: dict) -> "ProviderConfig":
        contact = data.get("contact", {})
        limit = data.get("rate_limit", {})
        multiplier = float(data["multiplier"])
        if multiplier <= 0:
            raise ValueError(f"Provider {data['id']}: multiplier must be positive")
        return cls(
            id=data["id"],
            display_name=data.get("display_name", data["id"]),
            multiplier=multiplier,
            rating=float(data.get("rating", 4.0)),
            review_count=int(data.get("review_count", 1000)),
            services=tuple(data.get("services") or ("Standard moving services",)),
            special_offers=tuple(data.get("special_offers") or ("Contact for current promotions",)),
            phone=contact.get("phone", "1-800-MOVING"),
            website=contact.get("website", "example.com"),
            rate_limit=RateLimitConfig(
                request_limit=int(limit.get("request_limit", 100)),
                window_duration_ms=int(limit.get("window_duration_ms", defaults.DEFAULT_WINDOW_DURATION_MS)),
            ),
        )


@dataclass(frozen=True)
class PricingTables:
    home_size_prices: dict[str, int] = field(default_factory=lambda: dict(defaults.HOME_SIZE_PRICES))
    default_home_size_price: int = defaults.DEFAULT_HOME_SIZE_PRICE
    home_size_days: dict[str, int] = field(default_factory=lambda: dict(defaults.HOME_SIZE_DAYS))
    default_home_size_days: int = defaults.DEFAULT_HOME_SIZE_DAYS
    percent_surcharges: dict[str, float] = field(default_factory=lambda: dict(defaults.PERCENT_SURCHARGES))
    flat_surcharges: dict[str, int] = field(default_factory=lambda: dict(defaults.FLAT_SURCHARGES))
    special_item_fees: dict[str, int] = field(default_factory=lambda: dict(defaults.SPECIAL_ITEM_FEES))
    default_special_item_fee: int = defaults.DEFAULT_SPECIAL_ITEM_FEE


@dataclass(frozen=True)
class QuoteConfig:
    providers: tuple[ProviderConfig, ...] = field(
        default_factory=lambda: tuple(ProviderConfig.from_dict(p) for p in defaults.PROVIDERS)
    )
    pricing: PricingTables = field(default_factory=PricingTables)

    def provider(self, provider_id: str) -> ProviderConfig:
        for p in self.providers:
            if p.id == provider_id:
                return p
        raise KeyError(f"Unknown provider: {provider_id}")

    @property
    def provider_ids(self) -> list[str]:
        return [p.id for p in self.providers]

    def rate_limits(self) -> dict[str, RateLimitConfig]:
        return {p.id: p.rate_limit for p in self.providers}


_PRICING_KEYS = (
    "home_size_prices",
    "default_home_size_price",
    "home_size_days",
    "default_home_size_days",
    "percent_surcharges",
    "flat_surcharges",
    "special_item_fees",
    "default_special_item_fee",
)


def quote_config_from_dict(data: dict) -> QuoteConfig:
    """Build a QuoteConfig, keeping defaults for any section not given."""
    base = QuoteConfig()
    providers = base.providers
    if "providers" in data:
        providers = tuple(ProviderConfig.from_dict(p) for p in data["providers"])
        ids = [p.id for p in providers]
        if len(set(ids)) != len(ids):
            raise ValueError(f"Duplicate provider ids in config: {ids}")

    overrides = {k: data[k] for k in _PRICING_KEYS if k in data}
    pricing = PricingTables(**{**base.pricing.__dict__, **overrides})
    return QuoteConfig(providers=providers, pricing=pricing)


def load_quote_config(path: str | Path | None = None) -> QuoteConfig:
    """Load from a JSON file; an empty path yields the built-in defaults."""
    path = path if path is not None else settings.quote_config_path
    if not path:
        return QuoteConfig()
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    config = quote_config_from_dict(data)
    logger.info(f"Loaded quote config from {path}: {len(config.providers)} providers")
    return config


# Singleton — import this everywhere
quote_config = load_quote_config()
