"""Multi-factor scoring allocator."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ...models.domain import Booking, LoadGroup, Vehicle
from .base import Allocator
from .groups import build_group
from .scoring import as_utc, score_booking, vehicle_capacity, vehicle_weight_limit

logger = logging.getLogger(__name__)


def latest_creation_time(bookings: Sequence[Booking]) -> Optional[datetime]:
    stamps = [booking.created_at for booking in bookings if booking.created_at is not None]
    if not stamps:
        return None
    return max(stamps, key=as_utc)


class MultiFactorAllocator(Allocator):
    """Rank bookings per vehicle by priority, size fit, value, age and route affinity.

    Vehicles are filled largest first. For each one every unassigned booking is
    re-scored against it and the best candidates are loaded until the slot limit
    is reached; a candidate that would break the weight limit is skipped so a
    lighter, lower-ranked booking can still take the space.

    Booking age is measured from ``reference_time``. When none is given the most
    recent ``created_at`` among the bookings is used.
    """

    name = "multi_factor"

    def __init__(self, *, reference_time: Optional[datetime] = None) -> None:
        self.reference_time = reference_time

    def allocate(
        self,
        *,
        bookings: Sequence[Booking],
        vehicles: Sequence[Vehicle],
    ) -> list[LoadGroup]:
        reference_time = self.reference_time or latest_creation_time(bookings)
        fleet = sorted(vehicles, key=vehicle_weight_limit, reverse=True)

        unassigned = list(bookings)
        groups: list[LoadGroup] = []

        for vehicle in fleet:
            if not unassigned:
                break
            scored = [
                (score_booking(booking, vehicle, groups, reference_time), position)
                for position, booking in enumerate(unassigned)
            ]
            scored.sort(key=lambda item: (-item[0], item[1]))

            max_capacity = vehicle_capacity(vehicle)
            max_weight = vehicle_weight_limit(vehicle)
            selected: list[Booking] = []
            selected_positions: set[int] = set()
            loaded_weight = 0.0
            for _, position in scored:
                if len(selected) >= max_capacity:
                    break
                booking = unassigned[position]
                if loaded_weight + booking.actual_weight > max_weight:
                    continue
                selected.append(booking)
                selected_positions.add(position)
                loaded_weight += booking.actual_weight

            if selected:
                logger.debug(
                    "Vehicle %s loaded with %d bookings (%.1f weight)",
                    vehicle.vehicle_id,
                    len(selected),
                    loaded_weight,
                )
                unassigned = [b for pos, b in enumerate(unassigned) if pos not in selected_positions]
                groups.append(build_group(self.group_id(len(groups)), selected, vehicle))

        if unassigned:
            largest = fleet[0] if fleet else None
            groups.append(build_group(self.group_id(len(groups)), unassigned, largest, overflow=True))
        return groups
