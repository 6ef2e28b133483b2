"""Error taxonomy for quote aggregation.

Only ValidationError crosses the aggregation boundary. Provider errors are
recovered inside the orchestrator and surface as ProviderResult failures.
"""


class MoveWiseError(Exception):
    """Base class for all engine errors."""


class ValidationError(MoveWiseError):
    """Malformed move request (bad zip, past date, missing field)."""

    def __init__(self, field: str, message: str):
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message

    def to_dict(self) -> dict:
        return {"field": self.field, "message": self.message}


class ProviderError(MoveWiseError):
    """A single provider could not produce a quote."""

    def __init__(self, provider_id: str, message: str):
        super().__init__(f"{provider_id}: {message}")
        self.provider_id = provider_id
        self.message = message


class RateLimitExceeded(ProviderError):
    def __init__(self, provider_id: str, limit: int | None = None):
        detail = f"rate limit of {limit} requests exceeded" if limit else "rate limit exceeded"
        super().__init__(provider_id, detail)
        self.limit = limit


class ProviderUnavailable(ProviderError):
    pass
