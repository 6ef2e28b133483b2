"""Quote types — provider quotes and aggregation results."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

from movewise.exceptions import ProviderError
from movewise.models.move import MoveRequest


class AvailabilityTier(str, Enum):
    LIMITED = "limited"
    GOOD = "good"
    EXCELLENT = "excellent"

    @property
    def label(self) -> str:
        return f"{self.value.capitalize()} availability"


@dataclass(frozen=True)
class ProviderContact:
    phone: str
    website: str

    def to_dict(self) -> dict:
        return {"phone": self.phone, "website": self.website}


@dataclass(frozen=True)
class InsuranceOption:
    tier: str          # "basic" | "full"
    coverage: str
    cost: int
    description: str

    def to_dict(self) -> dict:
        return {
            "tier": self.tier,
            "coverage": self.coverage,
            "cost": self.cost,
            "description": self.description,
        }


@dataclass(frozen=True)
class Quote:
    """One provider's price for a move. Immutable once produced."""

    provider_id: str
    company_name: str
    total_price: int
    rating: float
    services_offered: tuple[str, ...]
    estimated_duration: str
    availability_tier: AvailabilityTier
    retrieved_at: datetime
    base_price: int = 0
    additional_fees: int = 0
    currency: str = "USD"
    valid_until: datetime | None = None
    review_count: int = 0
    insurance_options: tuple[InsuranceOption, ...] = ()
    special_offers: tuple[str, ...] = ()
    contact: ProviderContact | None = None
    is_fallback: bool = False

    def to_dict(self) -> dict:
        return {
            "provider_id": self.provider_id,
            "company_name": self.company_name,
            "total_price": self.total_price,
            "base_price": self.base_price,
            "additional_fees": self.additional_fees,
            "currency": self.currency,
            "valid_until": self.valid_until.isoformat() if self.valid_until else None,
            "rating": self.rating,
            "review_count": self.review_count,
            "services_offered": list(self.services_offered),
            "estimated_duration": self.estimated_duration,
            "availability_tier": self.availability_tier.value,
            "availability": self.availability_tier.label,
            "insurance_options": {o.tier: o.to_dict() for o in self.insurance_options},
            "special_offers": list(self.special_offers),
            "contact": self.contact.to_dict() if self.contact else None,
            "retrieved_at": self.retrieved_at.isoformat(),
            "is_fallback": self.is_fallback,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Quote":
        """Rebuild a quote sent back by the chat layer.

        Accepts both this module's keys and the short display keys
        (company, price, services, timeframe, availability).
        """
        availability = str(data.get("availability_tier") or data.get("availability") or "good").lower()
        tier = next(
            (t for t in AvailabilityTier if t.value in availability),
            AvailabilityTier.GOOD,
        )
        contact = data.get("contact")
        retrieved_raw = data.get("retrieved_at")
        retrieved_at = datetime.fromisoformat(retrieved_raw) if retrieved_raw else datetime.now().astimezone()
        valid_raw = data.get("valid_until")
        insurance = data.get("insurance_options") or {}

        company = data.get("company_name") or data.get("company") or ""
        return cls(
            provider_id=data.get("provider_id") or company.lower().replace(" ", "_"),
            company_name=company,
            total_price=int(data.get("total_price") or data.get("price") or 0),
            rating=float(data.get("rating") or 0.0),
            services_offered=tuple(data.get("services_offered") or data.get("services") or ()),
            estimated_duration=data.get("estimated_duration") or data.get("timeframe") or "",
            availability_tier=tier,
            retrieved_at=retrieved_at,
            base_price=int(data.get("base_price") or 0),
            additional_fees=int(data.get("additional_fees") or 0),
            currency=data.get("currency", "USD"),
            valid_until=datetime.fromisoformat(valid_raw) if valid_raw else None,
            review_count=int(data.get("review_count") or 0),
            insurance_options=tuple(
                InsuranceOption(
                    tier=tier_name,
                    coverage=opt.get("coverage", ""),
                    cost=int(opt.get("cost", 0)),
                    description=opt.get("description", ""),
                )
                for tier_name, opt in insurance.items()
            ),
            special_offers=tuple(data.get("special_offers") or ()),
            contact=ProviderContact(contact["phone"], contact["website"]) if contact else None,
            is_fallback=bool(data.get("is_fallback", False)),
        )


@dataclass(frozen=True)
class ProviderResult:
    """Outcome of one provider task: exactly one of quote / error is set."""

    provider_id: str
    quote: Quote | None = None
    error: ProviderError | None = None
    elapsed_ms: int = 0

    @property
    def ok(self) -> bool:
        return self.quote is not None

    def failure_dict(self) -> dict:
        return {
            "provider_id": self.provider_id,
            "error_type": type(self.error).__name__ if self.error else None,
            "message": self.error.message if self.error else None,
            "elapsed_ms": self.elapsed_ms,
        }


@dataclass
class AggregateResult:
    quotes: list[Quote]
    requested_at: datetime
    move_request: MoveRequest
    providers_queried: int
    successful_responses: int
    failures: list[ProviderResult] = field(default_factory=list)
    used_fallback: bool = False
    elapsed_ms: int = 0

    def to_dict(self) -> dict:
        return {
            "quotes": [q.to_dict() for q in self.quotes],
            "requested_at": self.requested_at.isoformat(),
            "move_request": self.move_request.to_dict(),
            "providers_queried": self.providers_queried,
            "successful_responses": self.successful_responses,
            "failures": [f.failure_dict() for f in self.failures],
            "used_fallback": self.used_fallback,
            "elapsed_ms": self.elapsed_ms,
        }
