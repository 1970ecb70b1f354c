"""Construction of load groups and vehicle lookup."""

from __future__ import annotations

from typing import Optional, Sequence

from ...models.domain import Booking, LoadGroup, Vehicle
from .constants import (
    CAPACITY_LIMIT_EXCEEDED,
    NO_VEHICLE_NOTE,
    OVERFLOW_NOTE,
    WEIGHT_LIMIT_EXCEEDED,
)
from .scoring import calculate_efficiency, calculate_utilization, distinct_routes


def total_weight(bookings: Sequence[Booking]) -> float:
    return sum(booking.actual_weight for booking in bookings)


def total_value(bookings: Sequence[Booking]) -> float:
    return sum(booking.total_amount for booking in bookings)


def fits(vehicle: Vehicle, weight: float, count: int) -> bool:
    if vehicle.max_weight is not None and weight > vehicle.max_weight:
        return False
    if vehicle.max_capacity is not None and count > vehicle.max_capacity:
        return False
    return True


def find_best_vehicle(vehicles: Sequence[Vehicle], weight: float, count: int) -> Optional[Vehicle]:
    """First vehicle able to carry ``weight`` and ``count`` items, else the first vehicle."""

    for vehicle in vehicles:
        if fits(vehicle, weight, count):
            return vehicle
    return vehicles[0] if vehicles else None


def constraint_warnings(vehicle: Optional[Vehicle], weight: float, count: int) -> list[str]:
    warnings: list[str] = []
    if vehicle is None:
        return warnings
    if vehicle.max_weight is not None and weight > vehicle.max_weight:
        warnings.append(WEIGHT_LIMIT_EXCEEDED)
    if vehicle.max_capacity is not None and count > vehicle.max_capacity:
        warnings.append(CAPACITY_LIMIT_EXCEEDED)
    return warnings


def build_group(
    group_id: str,
    bookings: Sequence[Booking],
    vehicle: Optional[Vehicle],
    *,
    overflow: bool = False,
) -> LoadGroup:
    members = list(bookings)
    weight = total_weight(members)
    notes: list[str] = []
    if overflow:
        notes.append(OVERFLOW_NOTE)
    if vehicle is None:
        notes.append(NO_VEHICLE_NOTE)

    return LoadGroup(
        group_id=group_id,
        vehicle=vehicle,
        bookings=members,
        route=", ".join(distinct_routes(members)),
        total_weight=weight,
        total_value=total_value(members),
        utilization=calculate_utilization(weight, vehicle),
        efficiency=calculate_efficiency(members, vehicle),
        warnings=constraint_warnings(vehicle, weight, len(members)),
        notes=notes,
        is_overflow=overflow,
    )
