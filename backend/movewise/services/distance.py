"""Zip-code distance estimate and move categorization."""

from movewise.models.profile import MoveCategory

MAX_DISTANCE_MILES = 3000.0
LOCAL_MAX_MILES = 100
LONG_DISTANCE_MAX_MILES = 1000


def estimate_distance_miles(origin_zip: str, destination_zip: str) -> float:
    """Rough miles between two zip codes: 0.1 mile per zip step, capped at 3000.

    A stand-in for a geocoding service; good enough to separate local from
    cross-country moves.
    """
    diff = abs(int(origin_zip) - int(destination_zip))
    return min(round(diff * 0.1, 1), MAX_DISTANCE_MILES)


def categorize_move(origin_zip: str | None, destination_zip: str | None) -> MoveCategory:
    """local (<=100 mi), long_distance (<=1000 mi), international (>1000 mi)."""
    if not origin_zip or not destination_zip:
        return MoveCategory.LOCAL
    try:
        distance = estimate_distance_miles(origin_zip, destination_zip)
    except ValueError:
        return MoveCategory.LOCAL

    if distance <= LOCAL_MAX_MILES:
        return MoveCategory.LOCAL
    if distance <= LONG_DISTANCE_MAX_MILES:
        return MoveCategory.LONG_DISTANCE
    return MoveCategory.INTERNATIONAL
