"""Value spreading allocator."""

from __future__ import annotations

import math
from typing import Sequence

from ...models.domain import Booking, LoadGroup, Vehicle
from .base import Allocator
from .constants import BOOKINGS_PER_VEHICLE
from .groups import build_group


class ValueAllocator(Allocator):
    """Deal bookings round-robin by descending value to cap exposure per trip."""

    name = "value"

    def allocate(
        self,
        *,
        bookings: Sequence[Booking],
        vehicles: Sequence[Vehicle],
    ) -> list[LoadGroup]:
        if not bookings:
            return []

        ordered = sorted(bookings, key=lambda booking: booking.total_amount, reverse=True)
        target = math.ceil(len(ordered) / BOOKINGS_PER_VEHICLE)
        group_count = min(len(vehicles), target) if vehicles else target

        buckets: list[list[Booking]] = [[] for _ in range(group_count)]
        for index, booking in enumerate(ordered):
            buckets[index % group_count].append(booking)

        groups: list[LoadGroup] = []
        for index, members in enumerate(buckets):
            vehicle = vehicles[index % len(vehicles)] if vehicles else None
            groups.append(build_group(self.group_id(index), members, vehicle))
        return groups
