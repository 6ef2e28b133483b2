"""Move request — the structured description of a prospective move."""

import re
from dataclasses import dataclass, field
from datetime import date

from movewise.data.providers import HOME_SIZE_ALIASES
from movewise.exceptions import ValidationError

ZIP_PATTERN = re.compile(r"\d{5}")

REQUIRED_FIELDS = ("origin_zip", "destination_zip", "move_date", "home_size")


def normalize_home_size(home_size: str) -> str:
    """Map short forms (2br, "two bedroom") to the canonical "2-bedroom" key."""
    key = (home_size or "").strip().lower()
    return HOME_SIZE_ALIASES.get(key, key)


def _pick(data: dict, snake: str, camel: str, default=None):
    if snake in data:
        return data[snake]
    return data.get(camel, default)


@dataclass(frozen=True)
class MoveRequest:
    origin_zip: str
    destination_zip: str
    move_date: date | None
    home_size: str
    requested_services: frozenset[str] = field(default_factory=frozenset)
    special_items: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self):
        object.__setattr__(self, "home_size", normalize_home_size(self.home_size))
        object.__setattr__(
            self, "requested_services",
            frozenset(s.strip().lower() for s in self.requested_services if s),
        )
        object.__setattr__(
            self, "special_items",
            frozenset(s.strip().lower() for s in self.special_items if s),
        )

    def validate(self, today: date | None = None) -> None:
        """Raise ValidationError on the first problem found."""
        for name in REQUIRED_FIELDS:
            if not getattr(self, name):
                raise ValidationError(name, "missing required field")

        for name in ("origin_zip", "destination_zip"):
            if not ZIP_PATTERN.fullmatch(getattr(self, name)):
                raise ValidationError(name, "zip code must be exactly 5 digits")

        today = today or date.today()
        if self.move_date < today:
            raise ValidationError("move_date", "move date cannot be in the past")

    @classmethod
    def from_dict(cls, data: dict) -> "MoveRequest":
        """Build from a JSON-style dict; accepts camelCase or snake_case keys."""
        raw_date = _pick(data, "move_date", "moveDate")
        move_date = None
        if isinstance(raw_date, date):
            move_date = raw_date
        elif raw_date:
            try:
                move_date = date.fromisoformat(str(raw_date)[:10])
            except ValueError:
                raise ValidationError("move_date", f"invalid date '{raw_date}', use YYYY-MM-DD")

        services = _pick(data, "requested_services", "services")
        if services is None:
            services = data.get("requestedServices", [])

        return cls(
            origin_zip=str(_pick(data, "origin_zip", "originZip", "") or "").strip(),
            destination_zip=str(_pick(data, "destination_zip", "destinationZip", "") or "").strip(),
            move_date=move_date,
            home_size=str(_pick(data, "home_size", "homeSize", "") or ""),
            requested_services=frozenset(services or []),
            special_items=frozenset(_pick(data, "special_items", "specialItems", []) or []),
        )

    def to_dict(self) -> dict:
        return {
            "origin_zip": self.origin_zip,
            "destination_zip": self.destination_zip,
            "move_date": self.move_date.isoformat() if self.move_date else None,
            "home_size": self.home_size,
            "requested_services": sorted(self.requested_services),
            "special_items": sorted(self.special_items),
        }
