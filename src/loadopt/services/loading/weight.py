"""Heaviest-first weight allocator."""

from __future__ import annotations

from typing import Optional, Sequence

from ...models.domain import Booking, LoadGroup, Vehicle
from .base import Allocator
from .groups import build_group, find_best_vehicle


class WeightAllocator(Allocator):
    """Pack bookings heaviest first, opening a new load when the weight limit is hit."""

    name = "weight"

    def allocate(
        self,
        *,
        bookings: Sequence[Booking],
        vehicles: Sequence[Vehicle],
    ) -> list[LoadGroup]:
        ordered = sorted(bookings, key=lambda booking: booking.actual_weight, reverse=True)

        groups: list[LoadGroup] = []
        current: list[Booking] = []
        current_weight = 0.0
        current_vehicle: Optional[Vehicle] = vehicles[0] if vehicles else None

        for booking in ordered:
            weight = booking.actual_weight
            limit = current_vehicle.max_weight if current_vehicle is not None else None
            if limit is not None and current_weight + weight > limit:
                if current:
                    groups.append(build_group(self.group_id(len(groups)), current, current_vehicle))
                current = [booking]
                current_weight = weight
                current_vehicle = find_best_vehicle(vehicles, weight, 1)
            else:
                current.append(booking)
                current_weight += weight

        if current:
            groups.append(build_group(self.group_id(len(groups)), current, current_vehicle))
        return groups
