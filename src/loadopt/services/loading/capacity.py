"""Fill-each-vehicle capacity allocator."""

from __future__ import annotations

from typing import Sequence

from ...models.domain import Booking, LoadGroup, Vehicle
from .base import Allocator
from .groups import build_group
from .scoring import vehicle_capacity, vehicle_weight_limit


class CapacityAllocator(Allocator):
    """Fill vehicles in order from the tail of the pending pool.

    Unset limits fall back to 50 items and 1000 weight units. Whatever is
    left once every vehicle has been filled goes into a single overflow
    group on the last vehicle.
    """

    name = "capacity"

    def allocate(
        self,
        *,
        bookings: Sequence[Booking],
        vehicles: Sequence[Vehicle],
    ) -> list[LoadGroup]:
        remaining = list(bookings)
        groups: list[LoadGroup] = []

        for vehicle in vehicles:
            if not remaining:
                break
            max_capacity = vehicle_capacity(vehicle)
            max_weight = vehicle_weight_limit(vehicle)

            taken: list[Booking] = []
            taken_positions: set[int] = set()
            loaded_weight = 0.0
            for position in range(len(remaining) - 1, -1, -1):
                booking = remaining[position]
                if len(taken) < max_capacity and loaded_weight + booking.actual_weight <= max_weight:
                    taken.append(booking)
                    taken_positions.add(position)
                    loaded_weight += booking.actual_weight

            if taken:
                remaining = [b for pos, b in enumerate(remaining) if pos not in taken_positions]
                groups.append(build_group(self.group_id(len(groups)), taken, vehicle))

        if remaining:
            last_vehicle = vehicles[-1] if vehicles else None
            groups.append(build_group(self.group_id(len(groups)), remaining, last_vehicle, overflow=True))
        return groups
