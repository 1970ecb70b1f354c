"""Load group metrics and per-booking affinity scoring."""

from __future__ import annotations

import math
from datetime import datetime, timezone
from typing import Iterable, Optional, Sequence

from ...models.domain import Booking, LoadGroup, Priority, Vehicle
from .constants import DEFAULT_MAX_CAPACITY, DEFAULT_MAX_WEIGHT, NEUTRAL_UTILIZATION

PRIORITY_POINTS = {
    Priority.URGENT: 3,
    Priority.HIGH: 2,
    Priority.NORMAL: 1,
}
PRIORITY_WEIGHT = 30.0
TARGET_LOAD_SHARE = 0.10
WEIGHT_SHARE_WEIGHT = 20.0
VALUE_UNIT = 1000.0
VALUE_SCORE_CAP = 15.0
AGE_SCORE_CAP = 15.0
ROUTE_SCORE_BASE = 20.0
ROUTE_SCORE_STEP = 5.0
ROUTE_EFFICIENCY_STEP = 20


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def distinct_routes(bookings: Iterable[Booking]) -> list[str]:
    """Route keys of ``bookings`` in first-seen order."""

    seen: dict[str, None] = {}
    for booking in bookings:
        seen.setdefault(booking.route_key, None)
    return list(seen)


def calculate_utilization(total_weight: float, vehicle: Optional[Vehicle]) -> float:
    if vehicle is None:
        return 0.0
    max_weight = vehicle.max_weight or DEFAULT_MAX_WEIGHT
    return min(total_weight / max_weight * 100, 100.0)


def route_efficiency(route_count: int) -> int:
    return max(100 - (route_count - 1) * ROUTE_EFFICIENCY_STEP, 0)


def calculate_efficiency(bookings: Sequence[Booking], vehicle: Optional[Vehicle]) -> int:
    """Composite 0-100 score of weight use, slot use and route consolidation.

    An unset vehicle limit contributes a neutral 50 rather than a perfect
    score for that dimension.
    """

    if vehicle is None:
        return 0

    total_weight = sum(booking.actual_weight for booking in bookings)
    if vehicle.max_weight:
        weight_utilization = min(total_weight / vehicle.max_weight * 100, 100.0)
    else:
        weight_utilization = NEUTRAL_UTILIZATION

    if vehicle.max_capacity:
        capacity_utilization = min(len(bookings) / vehicle.max_capacity * 100, 100.0)
    else:
        capacity_utilization = NEUTRAL_UTILIZATION

    route_score = route_efficiency(len(distinct_routes(bookings)))
    return round_half_up((weight_utilization + capacity_utilization + route_score) / 3)


def as_utc(value: datetime) -> datetime:
    """Naive timestamps are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _hours_between(created_at: Optional[datetime], reference_time: Optional[datetime]) -> float:
    if created_at is None or reference_time is None:
        return 0.0
    return max((as_utc(reference_time) - as_utc(created_at)).total_seconds() / 3600.0, 0.0)


def routes_already_grouped(route_key: str, groups: Sequence[LoadGroup]) -> int:
    return sum(1 for group in groups if any(b.route_key == route_key for b in group.bookings))


def score_booking(
    booking: Booking,
    vehicle: Vehicle,
    groups: Sequence[LoadGroup],
    reference_time: Optional[datetime],
) -> float:
    """Affinity of ``booking`` for ``vehicle`` given the groups formed so far."""

    priority_score = PRIORITY_POINTS.get(booking.priority, 1) * PRIORITY_WEIGHT

    max_weight = vehicle.max_weight or DEFAULT_MAX_WEIGHT
    load_share = booking.actual_weight / max_weight
    weight_score = (1 - abs(load_share - TARGET_LOAD_SHARE)) * WEIGHT_SHARE_WEIGHT

    value_score = min(booking.total_amount / VALUE_UNIT, VALUE_SCORE_CAP)

    age_hours = _hours_between(booking.created_at, reference_time)
    age_score = min(age_hours / 24.0, AGE_SCORE_CAP)

    shared = routes_already_grouped(booking.route_key, groups)
    route_score = max(ROUTE_SCORE_BASE - ROUTE_SCORE_STEP * shared, 0.0)

    return priority_score + weight_score + value_score + age_score + route_score


def vehicle_capacity(vehicle: Vehicle) -> int:
    return vehicle.max_capacity or DEFAULT_MAX_CAPACITY


def vehicle_weight_limit(vehicle: Vehicle) -> float:
    return vehicle.max_weight or DEFAULT_MAX_WEIGHT
